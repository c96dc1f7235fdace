"""Reverse-proxy forwarding to remote origins."""

from http_pipeline.proxy.forwarder import proxy_request, wrap_proxy, wrap_proxy_rule
from http_pipeline.proxy.matcher import compile_matcher, path_matches
from http_pipeline.proxy.transport import create_httpx_client_factory

__all__ = [
    "compile_matcher",
    "create_httpx_client_factory",
    "path_matches",
    "proxy_request",
    "wrap_proxy",
    "wrap_proxy_rule",
]
