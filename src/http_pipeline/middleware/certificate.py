"""Client certificate annotation middleware."""

from __future__ import annotations

__all__ = ["wrap_with_certificate_cn"]

from http_pipeline.models import Handler, Request, Response
from http_pipeline.security.certificates import get_cn_from_x509_certificate


def wrap_with_certificate_cn(handler: Handler) -> Handler:
    """Annotate the request with the Common Name of its client certificate.

    The handler receives a copy of the request with ``ssl_client_cn`` set to
    the certificate's CN, or None when the request has no certificate.
    """

    async def certificate_cn_handler(request: Request) -> Response | None:
        cn = get_cn_from_x509_certificate(request.ssl_client_cert)
        return await handler(request.evolve(ssl_client_cn=cn))

    return certificate_cn_handler
