"""Standard middleware stack.

build_pipeline wraps an application handler in the full chain, from the
outside in:

    wrap_uncaught_errors
      wrap_schema_errors
        wrap_data_errors
          wrap_request_logging
            wrap_response_logging
              wrap_with_certificate_cn
                wrap_add_cache_headers
                  wrap_add_x_frame_options_deny
                    wrap_proxy (one per rule, first rule outermost)
                      application

Requests therefore reach the proxy annotated with their certificate CN, and
relayed responses still get cache-control and frame-options headers.
"""

from __future__ import annotations

__all__ = [
    "build_pipeline",
    "build_pipeline_from_config",
    "compose",
]

import logging
from collections.abc import Iterable, Sequence

from http_pipeline.config import PipelineConfig, ProxyRule
from http_pipeline.errors import wrap_error_handling
from http_pipeline.middleware import (
    wrap_add_cache_headers,
    wrap_add_x_frame_options_deny,
    wrap_request_logging,
    wrap_response_logging,
    wrap_with_certificate_cn,
)
from http_pipeline.models import Handler, Middleware
from http_pipeline.proxy import wrap_proxy_rule
from http_pipeline.proxy.transport import ClientFactory
from http_pipeline.responses import ResponseEncoding


def compose(handler: Handler, middleware: Sequence[Middleware]) -> Handler:
    """Wrap handler in middleware, listed outermost first."""
    for wrap in reversed(middleware):
        handler = wrap(handler)
    return handler


def build_pipeline(
    application: Handler,
    *,
    proxy_rules: Iterable[ProxyRule] = (),
    encoding: ResponseEncoding | str = ResponseEncoding.JSON,
    client_factory: ClientFactory | None = None,
    logger: logging.Logger | None = None,
    client_cert_header: str | None = None,
) -> Handler:
    """Wrap application in the standard middleware stack.

    Args:
        application: Terminal handler for requests no rule forwards.
        proxy_rules: Proxy rules, evaluated in order.
        encoding: Error response encoding.
        client_factory: httpx client factory for relayed requests.
        logger: Logger injected into every logging middleware.
        client_cert_header: Header carrying the client certificate; kept out
            of request logs.

    Returns:
        The composed handler.
    """
    handler = application
    for rule in reversed(list(proxy_rules)):
        handler = wrap_proxy_rule(handler, rule, client_factory=client_factory, logger=logger)

    handler = compose(
        handler,
        [
            lambda h: wrap_request_logging(h, logger, client_cert_header=client_cert_header),
            lambda h: wrap_response_logging(h, logger),
            wrap_with_certificate_cn,
            wrap_add_cache_headers,
            wrap_add_x_frame_options_deny,
        ],
    )
    return wrap_error_handling(handler, encoding, logger)


def build_pipeline_from_config(
    application: Handler,
    config: PipelineConfig,
    *,
    client_factory: ClientFactory | None = None,
    logger: logging.Logger | None = None,
) -> Handler:
    """build_pipeline with rules and encoding taken from a PipelineConfig."""
    return build_pipeline(
        application,
        proxy_rules=config.proxy_rules,
        encoding=config.error_encoding,
        client_factory=client_factory,
        logger=logger,
        client_cert_header=config.client_cert_header,
    )
