"""Logging-safe views of requests.

Raw client certificates are bulky and sensitive, so diagnostic output shows
the certificate's Common Name instead. The sanitized request is only ever
logged; the request passed down the chain is left untouched.

Usage:
    from http_pipeline.security.sanitizer import sanitize_client_cert

    logger.log(TRACE_LEVEL, pformat(sanitize_client_cert(request)))
"""

from __future__ import annotations

__all__ = ["sanitize_client_cert"]

from http_pipeline.models import Request
from http_pipeline.security.certificates import get_cn_from_x509_certificate

# Copy of the certificate placed under request.authorization by an upstream
# authentication layer
AUTHORIZATION_CERTIFICATE_KEY = "certificate"


def sanitize_client_cert(request: Request, *, cert_header: str | None = None) -> Request:
    """Replace the raw client certificate with its Common Name.

    Applies the following steps:
    1. If ssl_client_cert is set, move its CN to ssl_client_cert_cn and
       clear ssl_client_cert
    2. Remove authorization["certificate"]; an authorization mapping left
       empty becomes None
    3. Remove the cert_header header, which carries the PEM forwarded by a
       TLS terminator

    Sanitizing an already sanitized request returns an equal request.

    Args:
        request: The request to sanitize.
        cert_header: Name of the header carrying the client certificate, if
            one is configured.

    Returns:
        A sanitized copy (or the request itself when nothing changes).
    """
    sanitized = request
    if sanitized.ssl_client_cert is not None:
        sanitized = sanitized.evolve(
            ssl_client_cert=None,
            ssl_client_cert_cn=get_cn_from_x509_certificate(sanitized.ssl_client_cert),
        )

    authorization = sanitized.authorization
    if authorization is not None and AUTHORIZATION_CERTIFICATE_KEY in authorization:
        remaining = {k: v for k, v in authorization.items() if k != AUTHORIZATION_CERTIFICATE_KEY}
        sanitized = sanitized.evolve(authorization=remaining or None)

    if cert_header:
        sanitized = sanitized.without_header(cert_header)

    return sanitized
