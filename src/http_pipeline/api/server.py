"""FastAPI application serving a pipeline handler.

A single catch-all route converts each Starlette request into a pipeline
Request, awaits the pipeline and converts the result back. A pipeline that
returns None (no handler produced a response) is answered with 404.

Client certificates are taken from the ASGI TLS extension when the server
terminates TLS itself, or from a configured header carrying the URL-encoded
PEM when a TLS-terminating proxy sits in front. Only that proxy may set the
header: it must overwrite any value the client sent. The header is removed
from the request once read, so it is neither logged nor relayed upstream.

Usage:
    app = create_app_from_config(PipelineConfig.load_from_file(path))

    uvicorn.run(app, host="127.0.0.1", port=8080)
"""

from __future__ import annotations

__all__ = [
    "HTTP_METHODS",
    "create_app",
    "create_app_from_config",
]

from typing import TYPE_CHECKING

from cryptography import x509
from fastapi import FastAPI, Request as FastAPIRequest
from fastapi.responses import PlainTextResponse
from starlette.responses import Response as StarletteResponse

from http_pipeline import __version__
from http_pipeline.config import PipelineConfig
from http_pipeline.models import Handler, HttpMethod, Request, Response
from http_pipeline.pipeline import build_pipeline_from_config
from http_pipeline.security.certificates import load_pem_certificate
from http_pipeline.utils.logging.logger_setup import get_logger

if TYPE_CHECKING:
    from http_pipeline.proxy.transport import ClientFactory

_logger = get_logger("api")

HTTP_METHODS = [method.value for method in HttpMethod if method is not HttpMethod.CONNECT]

# Statuses that never carry a body (RFC 9110)
_NO_BODY_STATUSES = frozenset({204, 304})


def _client_certificate(request: FastAPIRequest, client_cert_header: str | None) -> x509.Certificate | None:
    """Extract the client certificate from the TLS extension or the configured header.

    Raises:
        ValueError: If a certificate is present but not valid PEM.
    """
    tls = request.scope.get("extensions", {}).get("tls") or {}
    chain = tls.get("client_cert_chain") or []
    if chain:
        return load_pem_certificate(chain[0])

    if client_cert_header:
        value = request.headers.get(client_cert_header)
        if value:
            return load_pem_certificate(value)
    return None


def _to_starlette_response(response: Response) -> StarletteResponse:
    out = StarletteResponse(content=response.body, status_code=response.status)
    raw = list(response.headers.raw)
    no_body = response.status in _NO_BODY_STATUSES or response.status < 200
    if not no_body and not any(name == b"content-length" for name, _ in raw):
        raw.append((b"content-length", str(len(response.body)).encode("latin-1")))
    out.raw_headers = raw
    return out


def create_app(handler: Handler, *, client_cert_header: str | None = None) -> FastAPI:
    """Create a FastAPI application that serves every request through handler.

    Args:
        handler: The pipeline (see build_pipeline).
        client_cert_header: Header carrying the client certificate as
            URL-encoded PEM, or None to only use the TLS extension.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="http-pipeline",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.pipeline = handler

    @app.api_route("/{path:path}", methods=HTTP_METHODS, include_in_schema=False, response_model=None)
    async def serve(path: str, request: FastAPIRequest) -> StarletteResponse:
        """Run the request through the pipeline."""
        try:
            client_cert = _client_certificate(request, client_cert_header)
        except ValueError as e:
            _logger.warning(
                {
                    "event": "invalid_client_certificate",
                    "message": f"Rejected request with unparseable client certificate: {e}",
                    "path": request.url.path,
                }
            )
            return PlainTextResponse("Invalid client certificate", status_code=400)

        pipeline_request = Request(
            method=request.method,
            path=request.url.path,
            query_string=request.url.query,
            headers=request.headers,
            ssl_client_cert=client_cert,
            body=await request.body() or None,
        )
        if client_cert_header:
            # Consumed here: the certificate now travels as ssl_client_cert
            pipeline_request = pipeline_request.without_header(client_cert_header)
        response = await app.state.pipeline(pipeline_request)
        if response is None:
            return PlainTextResponse("Not Found", status_code=404)
        return _to_starlette_response(response)

    return app


async def _no_application(request: Request) -> Response | None:
    return None


def create_app_from_config(
    config: PipelineConfig,
    application: Handler | None = None,
    *,
    client_factory: "ClientFactory | None" = None,
) -> FastAPI:
    """Create the application for a configured pipeline.

    Args:
        config: Pipeline configuration.
        application: Terminal handler. Defaults to one that returns None, so
            requests no proxy rule covers are answered with 404.
        client_factory: httpx client factory for relayed requests.

    Returns:
        Configured FastAPI application.
    """
    handler = build_pipeline_from_config(
        application or _no_application,
        config,
        client_factory=client_factory,
    )
    return create_app(handler, client_cert_header=config.client_cert_header)
