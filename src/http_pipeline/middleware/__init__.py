"""Request/response middleware.

Every middleware has the shape ``wrap_x(handler, ...) -> handler`` and can be
composed in any order (see http_pipeline.pipeline for the standard order).
"""

from http_pipeline.middleware.certificate import wrap_with_certificate_cn
from http_pipeline.middleware.cookies import host_only_set_cookie, serialize_cookie, wrap_cookies
from http_pipeline.middleware.headers import wrap_add_cache_headers, wrap_add_x_frame_options_deny
from http_pipeline.middleware.request_logging import wrap_request_logging, wrap_response_logging

__all__ = [
    "host_only_set_cookie",
    "serialize_cookie",
    "wrap_add_cache_headers",
    "wrap_add_x_frame_options_deny",
    "wrap_cookies",
    "wrap_request_logging",
    "wrap_response_logging",
    "wrap_with_certificate_cn",
]
