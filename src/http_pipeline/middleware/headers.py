"""Response header middleware.

Headers are only added to responses the wrapped handler actually produced:
a None response is passed through, never replaced by a fabricated one.
"""

from __future__ import annotations

__all__ = [
    "wrap_add_cache_headers",
    "wrap_add_x_frame_options_deny",
]

from http_pipeline.constants import (
    CACHE_CONTROL_HEADER,
    CACHE_CONTROL_VALUE,
    CACHEABLE_METHODS,
    X_FRAME_OPTIONS_HEADER,
    X_FRAME_OPTIONS_VALUE,
)
from http_pipeline.models import Handler, Request, Response


def wrap_add_cache_headers(handler: Handler) -> Handler:
    """Add cache invalidation headers to GET and PUT responses.

    Sets ``cache-control: private, max-age=0, no-cache``. Responses to other
    methods are returned unmodified.
    """

    async def cache_headers_handler(request: Request) -> Response | None:
        response = await handler(request)
        if response is None:
            return None
        if request.method.value in CACHEABLE_METHODS:
            return response.with_header(CACHE_CONTROL_HEADER, CACHE_CONTROL_VALUE)
        return response

    return cache_headers_handler


def wrap_add_x_frame_options_deny(handler: Handler) -> Handler:
    """Add ``X-Frame-Options: DENY`` to every response."""

    async def x_frame_options_handler(request: Request) -> Response | None:
        response = await handler(request)
        if response is None:
            return None
        return response.with_header(X_FRAME_OPTIONS_HEADER, X_FRAME_OPTIONS_VALUE)

    return x_frame_options_handler
