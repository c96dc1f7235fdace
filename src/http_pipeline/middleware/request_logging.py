"""Request and response logging middleware.

Both middleware only observe: the request and the response pass through
unchanged. Raw client certificates never reach the log; the full request is
sanitized first (see security.sanitizer).
"""

from __future__ import annotations

__all__ = [
    "wrap_request_logging",
    "wrap_response_logging",
]

import logging
from pprint import pformat

from http_pipeline.constants import TRACE_LEVEL
from http_pipeline.models import Handler, Request, Response
from http_pipeline.security.sanitizer import sanitize_client_cert
from http_pipeline.utils.logging.logger_setup import get_logger, trace

_logger = get_logger("middleware.logging")


def wrap_request_logging(
    handler: Handler,
    logger: logging.Logger | None = None,
    *,
    client_cert_header: str | None = None,
) -> Handler:
    """Log each request before handing it to handler.

    Logs "Processing <METHOD> <path>" at DEBUG and the sanitized request at TRACE.

    Args:
        handler: The wrapped handler.
        logger: Logger to write to (default: http-pipeline.middleware.logging).
        client_cert_header: Header carrying the client certificate, removed
            from the logged request.

    Returns:
        The logging handler.
    """
    log = logger or _logger

    async def request_logging_handler(request: Request) -> Response | None:
        log.debug("Processing %s %s", request.method.value, request.path)
        if log.isEnabledFor(TRACE_LEVEL):
            sanitized = sanitize_client_cert(request, cert_header=client_cert_header)
            trace(log, "Full request:\n%s", pformat(sanitized))
        return await handler(request)

    return request_logging_handler


def wrap_response_logging(handler: Handler, logger: logging.Logger | None = None) -> Handler:
    """Log the response computed by handler at TRACE, including a None response.

    Args:
        handler: The wrapped handler.
        logger: Logger to write to (default: http-pipeline.middleware.logging).

    Returns:
        The logging handler.
    """
    log = logger or _logger

    async def response_logging_handler(request: Request) -> Response | None:
        response = await handler(request)
        trace(log, "Computed response: %r", response)
        return response

    return response_logging_handler
