"""HTTP client factory for relaying requests to remote origins.

The forwarder asks a factory for an ``httpx.AsyncClient`` per relayed
request. The default factory applies a rule's HttpOptions (timeouts,
redirect policy, TLS verification, mTLS); tests and embedders can pass their
own factory, e.g. one returning a client on an ``httpx.MockTransport``.
"""

from __future__ import annotations

__all__ = [
    "USER_AGENT",
    "ClientFactory",
    "build_timeout",
    "create_httpx_client_factory",
]

import functools
import ssl
from collections.abc import Callable

import httpx

from http_pipeline import __version__
from http_pipeline.config import HttpOptions, MTLSConfig
from http_pipeline.constants import APP_NAME
from http_pipeline.security.mtls import create_mtls_ssl_context

# Added to relayed requests that carry no User-Agent of their own
USER_AGENT = f"{APP_NAME}/{__version__}"

ClientFactory = Callable[[HttpOptions], httpx.AsyncClient]


def build_timeout(options: HttpOptions) -> httpx.Timeout:
    """Translate HttpOptions timeouts into an httpx.Timeout."""
    connect = options.connect_timeout_seconds
    if connect is None:
        connect = options.timeout_seconds
    return httpx.Timeout(options.timeout_seconds, connect=connect)


def create_httpx_client_factory() -> ClientFactory:
    """Create the default client factory.

    SSL contexts are built on first use and then reused by every client the
    factory creates, so certificate files are read once per factory (one
    factory per proxy rule), not once per relayed request.

    Returns:
        Factory callable that creates an httpx.AsyncClient configured from
        HttpOptions.

    Raises:
        FileNotFoundError: (from the factory) If mTLS certificate files don't exist.
        ValueError: (from the factory) If mTLS certificates are invalid.
    """

    @functools.cache
    def tls_verify(mtls: MTLSConfig | None, verify: bool | str) -> bool | ssl.SSLContext:
        if mtls is not None:
            return create_mtls_ssl_context(mtls)
        if isinstance(verify, str):
            return ssl.create_default_context(cafile=verify)
        return verify

    def factory(options: HttpOptions) -> httpx.AsyncClient:
        """Create httpx client for one relayed request."""
        return httpx.AsyncClient(
            timeout=build_timeout(options),
            follow_redirects=options.follow_redirects,
            verify=tls_verify(options.mtls, options.verify),
        )

    return factory
