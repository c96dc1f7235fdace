"""http-pipeline: composable async HTTP middleware.

Middleware wrap an async handler ``Request -> Response | None`` and each add
one behavior: request/response logging, cache-control and frame-options
headers, client-certificate CN annotation, reverse-proxy forwarding, and
structured error responses.

Usage:
    from http_pipeline import build_pipeline, ProxyRule

    handler = build_pipeline(app, proxy_rules=[ProxyRule(path="/proxy", remote_uri_base="http://upstream")])
    response = await handler(request)
"""

__version__ = "0.1.0"

from http_pipeline.config import HttpOptions, PipelineConfig, ProxyRule
from http_pipeline.errors import (
    wrap_data_errors,
    wrap_error_handling,
    wrap_schema_errors,
    wrap_uncaught_errors,
)
from http_pipeline.exceptions import DataErrorKind, DomainDataError, SchemaValidationError, StructuredError
from http_pipeline.middleware import (
    wrap_add_cache_headers,
    wrap_add_x_frame_options_deny,
    wrap_cookies,
    wrap_request_logging,
    wrap_response_logging,
    wrap_with_certificate_cn,
)
from http_pipeline.models import Handler, HttpMethod, Middleware, Request, Response, ResponseCookie
from http_pipeline.pipeline import build_pipeline, build_pipeline_from_config, compose
from http_pipeline.proxy import wrap_proxy, wrap_proxy_rule
from http_pipeline.responses import ResponseEncoding, build_response, json_response, plain_response
from http_pipeline.security import get_cn_from_x509_certificate, sanitize_client_cert

__all__ = [
    "DataErrorKind",
    "DomainDataError",
    "Handler",
    "HttpMethod",
    "HttpOptions",
    "Middleware",
    "PipelineConfig",
    "ProxyRule",
    "Request",
    "Response",
    "ResponseCookie",
    "ResponseEncoding",
    "SchemaValidationError",
    "StructuredError",
    "__version__",
    "build_pipeline",
    "build_pipeline_from_config",
    "build_response",
    "compose",
    "get_cn_from_x509_certificate",
    "json_response",
    "plain_response",
    "sanitize_client_cert",
    "wrap_add_cache_headers",
    "wrap_add_x_frame_options_deny",
    "wrap_cookies",
    "wrap_data_errors",
    "wrap_error_handling",
    "wrap_proxy",
    "wrap_proxy_rule",
    "wrap_request_logging",
    "wrap_response_logging",
    "wrap_schema_errors",
    "wrap_uncaught_errors",
    "wrap_with_certificate_cn",
]
