"""Reverse-proxy forwarding.

wrap_proxy relays requests whose path matches a rule to a remote origin and
passes everything else to the wrapped handler. The remote response (status,
headers, raw body) is returned as-is, except that:

- hop-by-hop headers are dropped, since they describe the remote connection
- Set-Cookie headers lose their Domain and Secure attributes, so the
  remote's session cookies apply to this host; the rest of each header
  value is relayed verbatim

Transport failures (connection refused, timeouts) are logged and re-raised
for the error-handling middleware; nothing is retried.
"""

from __future__ import annotations

__all__ = [
    "proxy_request",
    "wrap_proxy",
    "wrap_proxy_rule",
]

import logging
import time
from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import Headers

from http_pipeline.config import HttpOptions
from http_pipeline.constants import HOP_BY_HOP_HEADERS, STRIPPED_REQUEST_HEADERS
from http_pipeline.middleware.cookies import host_only_set_cookie, wrap_cookies
from http_pipeline.models import Handler, Request, Response
from http_pipeline.proxy.matcher import PathMatcher, compile_matcher, path_matches, remote_path
from http_pipeline.proxy.transport import USER_AGENT, ClientFactory, create_httpx_client_factory
from http_pipeline.utils.logging.logger_setup import get_logger
from http_pipeline.validation import is_valid_http_url

if TYPE_CHECKING:
    from http_pipeline.config import ProxyRule

_logger = get_logger("proxy")


def _remote_url(request: Request, matcher: PathMatcher, remote_uri_base: str) -> str:
    url = remote_uri_base.rstrip("/") + remote_path(matcher, request.path)
    if request.query_string:
        url = f"{url}?{request.query_string}"
    return url


def _outbound_headers(request: Request, options: HttpOptions) -> list[tuple[str, str]]:
    headers = [
        (name, value)
        for name, value in request.headers.items()
        if name.lower() not in STRIPPED_REQUEST_HEADERS
    ]
    headers.extend(options.headers.items())
    if "user-agent" not in request.headers and not any(k.lower() == "user-agent" for k in options.headers):
        headers.append(("user-agent", USER_AGENT))
    return headers


def _relayed_response(remote: httpx.Response, content: bytes) -> Response:
    raw: list[tuple[bytes, bytes]] = []
    for name, value in remote.headers.raw:
        name = name.lower()
        if name == b"set-cookie":
            value = host_only_set_cookie(value.decode("latin-1")).encode("latin-1")
        elif name.decode("latin-1") in HOP_BY_HOP_HEADERS:
            continue
        raw.append((name, value))
    return Response(status=remote.status_code, headers=Headers(raw=raw), body=content)


async def proxy_request(
    request: Request,
    matcher: PathMatcher,
    remote_uri_base: str,
    http_options: HttpOptions | None = None,
    *,
    client_factory: ClientFactory | None = None,
    logger: logging.Logger | None = None,
) -> Response:
    """Relay a request to the remote origin and return its response.

    Args:
        request: The matched inbound request.
        matcher: Compiled matcher of the rule (see compile_matcher).
        remote_uri_base: Remote origin base URI.
        http_options: Outbound request options (defaults: HttpOptions()).
        client_factory: Creates the httpx client for this request.
        logger: Logger to write to (default: http-pipeline.proxy).

    Returns:
        The remote response, body undecoded.

    Raises:
        httpx.HTTPError: If the relay fails (connect error, timeout, ...).
    """
    options = http_options or HttpOptions()
    factory = client_factory or create_httpx_client_factory()
    log = logger or _logger
    url = _remote_url(request, matcher, remote_uri_base)

    start_time = time.monotonic()
    try:
        async with factory(options) as client:
            outbound = client.build_request(
                method=request.method.value,
                url=url,
                headers=_outbound_headers(request, options),
                content=request.body or None,
            )
            remote = await client.send(outbound, stream=True)
            try:
                # Raw bytes: the client receives the remote's content-encoding untouched
                content = b"".join([chunk async for chunk in remote.aiter_raw()])
            finally:
                await remote.aclose()
    except httpx.HTTPError as e:
        duration_ms = int((time.monotonic() - start_time) * 1000)
        log.warning(
            {
                "event": "proxy_request_failed",
                "message": f"Failed to relay {request.method.value} {request.path} to {url}: {e}",
                "method": request.method.value,
                "path": request.path,
                "remote_url": url,
                "error_type": type(e).__name__,
                "duration_ms": duration_ms,
            }
        )
        raise

    duration_ms = int((time.monotonic() - start_time) * 1000)
    log.debug(
        {
            "event": "proxy_request",
            "message": f"Relayed {request.method.value} {request.path} to {url}: {remote.status_code}",
            "method": request.method.value,
            "path": request.path,
            "remote_url": url,
            "status_code": remote.status_code,
            "duration_ms": duration_ms,
        }
    )
    return _relayed_response(remote, content)


def wrap_proxy(
    handler: Handler,
    proxied_path: PathMatcher,
    remote_uri_base: str,
    http_options: HttpOptions | None = None,
    *,
    client_factory: ClientFactory | None = None,
    logger: logging.Logger | None = None,
) -> Handler:
    """Proxy requests under proxied_path to remote_uri_base.

    A string proxied_path forwards "/prefix/rest" to remote_uri_base + "/rest";
    a compiled pattern forwards the full path of any request it matches at
    the start of the path. Other requests go to handler. The returned
    handler is wrapped by wrap_cookies.

    Args:
        handler: Handler for requests that don't match.
        proxied_path: Literal path prefix or compiled regular expression.
        remote_uri_base: Remote origin base URI (http or https).
        http_options: Outbound request options.
        client_factory: Creates httpx clients (default: create_httpx_client_factory()).
        logger: Logger to write to (default: http-pipeline.proxy).

    Returns:
        The proxying handler.

    Raises:
        ValueError: If remote_uri_base is not an http(s) URL.
        TypeError: If proxied_path is neither a string nor a pattern.
    """
    if not is_valid_http_url(remote_uri_base):
        raise ValueError(f"remote_uri_base must be an http:// or https:// URL, got {remote_uri_base!r}")

    matcher = compile_matcher(proxied_path)
    factory = client_factory or create_httpx_client_factory()

    async def proxy_handler(request: Request) -> Response | None:
        if path_matches(matcher, request.path):
            return await proxy_request(
                request,
                matcher,
                remote_uri_base,
                http_options,
                client_factory=factory,
                logger=logger,
            )
        return await handler(request)

    return wrap_cookies(proxy_handler)


def wrap_proxy_rule(
    handler: Handler,
    rule: "ProxyRule",
    *,
    client_factory: ClientFactory | None = None,
    logger: logging.Logger | None = None,
) -> Handler:
    """wrap_proxy for a configured ProxyRule."""
    return wrap_proxy(
        handler,
        rule.matcher(),
        rule.remote_uri_base,
        rule.http_options,
        client_factory=client_factory,
        logger=logger,
    )
