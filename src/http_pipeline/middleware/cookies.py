"""Cookie parsing and serialization middleware.

wrap_cookies is a per-request transform, not a cookie jar: the Cookie
header is parsed into ``Request.cookies`` on the way in, and the cookie
mutations a handler put on ``Response.cookies`` are written out as
Set-Cookie headers on the way back.

Cookie headers are parsed with ``starlette.requests.cookie_parser`` and
Set-Cookie values are rendered with ``http.cookies.SimpleCookie``, as
Starlette's ``Response.set_cookie`` does. Set-Cookie values received from a
remote origin are never parsed into cookies, only edited as text (see
host_only_set_cookie): SimpleCookie reads Cookie headers and loses
attributes it does not know.
"""

from __future__ import annotations

__all__ = [
    "host_only_set_cookie",
    "serialize_cookie",
    "wrap_cookies",
]

import http.cookies

from starlette.datastructures import Headers
from starlette.requests import cookie_parser

from http_pipeline.models import Handler, Request, Response, ResponseCookie

# Attributes that tie a cookie to the remote origin rather than this host
HOST_SCOPED_COOKIE_ATTRIBUTES = frozenset({"domain", "secure"})


def serialize_cookie(name: str, cookie: ResponseCookie) -> str:
    """Render a cookie as a Set-Cookie header value.

    Args:
        name: Cookie name.
        cookie: Cookie value and attributes.

    Returns:
        Header value, e.g. "session=abc; HttpOnly; Path=/".
    """
    jar: http.cookies.BaseCookie[str] = http.cookies.SimpleCookie()
    jar[name] = cookie.value
    morsel = jar[name]
    if cookie.max_age is not None:
        morsel["max-age"] = str(cookie.max_age)
    if cookie.expires is not None:
        morsel["expires"] = cookie.expires
    if cookie.path is not None:
        morsel["path"] = cookie.path
    if cookie.domain is not None:
        morsel["domain"] = cookie.domain
    if cookie.secure:
        morsel["secure"] = True
    if cookie.httponly:
        morsel["httponly"] = True
    if cookie.samesite is not None:
        morsel["samesite"] = cookie.samesite
    return jar.output(header="").strip()


def host_only_set_cookie(header_value: str) -> str:
    """Remove the Domain and Secure attributes from a Set-Cookie header value.

    The name=value pair and every other attribute (Path, Expires, SameSite,
    Partitioned, Priority, ...) are kept verbatim, so the value is not
    re-quoted and attributes this module does not know survive.

    Args:
        header_value: A single Set-Cookie header value.

    Returns:
        The header value scoped to the responding host.
    """
    pair, *attributes = header_value.split(";")
    kept = [pair.strip()]
    for attribute in attributes:
        attribute = attribute.strip()
        name = attribute.split("=", 1)[0].strip().lower()
        if attribute and name not in HOST_SCOPED_COOKIE_ATTRIBUTES:
            kept.append(attribute)
    return "; ".join(kept)


def wrap_cookies(handler: Handler) -> Handler:
    """Parse request cookies and serialize response cookie mutations.

    Args:
        handler: The wrapped handler.

    Returns:
        The cookie-handling handler.
    """

    async def cookies_handler(request: Request) -> Response | None:
        cookie_header = request.headers.get("cookie", "")
        response = await handler(request.evolve(cookies=cookie_parser(cookie_header)))
        if response is None or not response.cookies:
            return response

        raw = list(response.headers.raw)
        for name, cookie in response.cookies.items():
            raw.append((b"set-cookie", serialize_cookie(name, cookie).encode("latin-1")))
        return response.evolve(headers=Headers(raw=raw), cookies={})

    return cookies_handler
