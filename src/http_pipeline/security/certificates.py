"""Client certificate helpers.

Certificates are ``cryptography.x509.Certificate`` objects. Their
authenticity has already been checked by the TLS layer; these helpers only
read identity attributes from them.
"""

from __future__ import annotations

__all__ = [
    "get_cn_from_x509_certificate",
    "load_pem_certificate",
]

from urllib.parse import unquote

from cryptography import x509
from cryptography.x509.oid import NameOID


def get_cn_from_x509_certificate(cert: x509.Certificate | None) -> str | None:
    """Return the subject Common Name of a certificate.

    Args:
        cert: The certificate, or None.

    Returns:
        The first subject CN, or None if cert is None or has no CN.
    """
    if cert is None:
        return None
    attributes = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attributes:
        return None
    value = attributes[0].value
    return value if isinstance(value, str) else value.decode("utf-8")


def load_pem_certificate(pem: str | bytes) -> x509.Certificate:
    """Parse a PEM certificate.

    TLS terminators (nginx ``$ssl_client_escaped_cert``) forward the client
    certificate URL-encoded in a header, so percent-escapes are decoded first.

    Args:
        pem: PEM text, optionally URL-encoded.

    Returns:
        The parsed certificate.

    Raises:
        ValueError: If the data is not a valid PEM certificate.
    """
    if isinstance(pem, bytes):
        pem = pem.decode("ascii")
    if "%" in pem:
        pem = unquote(pem)
    return x509.load_pem_x509_certificate(pem.encode("ascii"))
