"""Request and response values passed through the middleware chain.

Both are frozen dataclasses. A middleware that needs to annotate a request
or change a response derives a new value (``Request.evolve``,
``Response.with_header``) instead of mutating the one it was given, so a
value seen by an outer middleware is never changed behind its back.

A handler may return ``None`` to decline a request; every middleware in
this package propagates ``None`` unchanged.
"""

from __future__ import annotations

__all__ = [
    "Handler",
    "HttpMethod",
    "Middleware",
    "Request",
    "Response",
    "ResponseCookie",
]

import dataclasses
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from starlette.datastructures import Headers, MutableHeaders

if TYPE_CHECKING:
    from cryptography import x509


class HttpMethod(str, Enum):
    """HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


def _as_headers(value: Headers | Mapping[str, str] | None) -> Headers:
    if isinstance(value, Headers):
        return value
    return Headers(headers=dict(value or {}))


@dataclass(frozen=True, slots=True)
class Request:
    """Inbound HTTP request.

    Attributes:
        method: Request method.
        path: URI path, e.g. "/proxy/abc".
        query_string: Raw query string without the leading "?".
        headers: Case-insensitive request headers.
        cookies: Cookies parsed from the Cookie header (see wrap_cookies).
        ssl_client_cert: Raw client certificate, if the connection had one.
        ssl_client_cn: Common Name set by wrap_with_certificate_cn.
        ssl_client_cert_cn: Common Name set by sanitize_client_cert.
        authorization: Data attached by an upstream authentication layer.
        body: Request body, or None when there is none.
    """

    method: HttpMethod
    path: str
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)
    cookies: Mapping[str, str] = field(default_factory=dict)
    ssl_client_cert: x509.Certificate | None = None
    ssl_client_cn: str | None = None
    ssl_client_cert_cn: str | None = None
    authorization: Mapping[str, Any] | None = None
    body: bytes | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, HttpMethod):
            object.__setattr__(self, "method", HttpMethod(self.method.upper()))
        object.__setattr__(self, "headers", _as_headers(self.headers))

    def without_header(self, name: str) -> Request:
        """Return a copy with every ``name`` header removed (or self when absent)."""
        if name not in self.headers:
            return self
        headers = MutableHeaders(raw=list(self.headers.raw))
        del headers[name]
        return dataclasses.replace(self, headers=Headers(raw=headers.raw))

    def evolve(self, **changes: Any) -> Request:
        """Return a copy of this request with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True, slots=True)
class ResponseCookie:
    """A cookie to be sent back to the client as a Set-Cookie header.

    Attribute names follow Starlette's ``Response.set_cookie``.
    """

    value: str
    path: str | None = "/"
    domain: str | None = None
    max_age: int | None = None
    expires: str | None = None
    secure: bool = False
    httponly: bool = False
    samesite: str | None = None


@dataclass(frozen=True, slots=True)
class Response:
    """Outbound HTTP response.

    Attributes:
        status: HTTP status code.
        headers: Case-insensitive response headers.
        body: Response body.
        cookies: Pending cookie mutations, serialized by wrap_cookies.
    """

    status: int
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    cookies: Mapping[str, ResponseCookie] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _as_headers(self.headers))

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def with_header(self, name: str, value: str) -> Response:
        """Return a copy with header ``name`` set to ``value`` (replacing any previous value)."""
        headers = MutableHeaders(raw=list(self.headers.raw))
        headers[name] = value
        return dataclasses.replace(self, headers=Headers(raw=headers.raw))

    def evolve(self, **changes: Any) -> Response:
        """Return a copy of this response with the given fields replaced."""
        return dataclasses.replace(self, **changes)


Handler = Callable[[Request], Awaitable[Response | None]]
Middleware = Callable[[Handler], Handler]
