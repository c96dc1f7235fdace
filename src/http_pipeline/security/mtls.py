"""Client certificates for relaying to remote origins over mutual TLS.

A proxy rule whose HttpOptions carry an MTLSConfig presents that certificate
to the remote origin. The default client factory builds the SSL context on
the first relayed request and reuses it afterwards; a renewed certificate
on disk takes effect after a restart.
"""

from __future__ import annotations

__all__ = [
    "CERT_EXPIRY_WARNING_DAYS",
    "create_mtls_ssl_context",
]

import ssl
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from http_pipeline.security.certificates import load_pem_certificate
from http_pipeline.utils.logging.logger_setup import get_logger

if TYPE_CHECKING:
    from http_pipeline.config import MTLSConfig

logger = get_logger("security.mtls")

# Relaying keeps working inside this window, but every new client logs a warning
CERT_EXPIRY_WARNING_DAYS = 14


def _existing_path(raw: str, description: str) -> Path:
    path = Path(raw).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"mTLS {description} not found: {path}")
    return path


def create_mtls_ssl_context(mtls_config: "MTLSConfig") -> ssl.SSLContext:
    """Build the SSL context for a relay that authenticates with a client certificate.

    The remote origin is verified against the configured CA bundle only,
    not the system trust store.

    Args:
        mtls_config: Certificate, key and CA bundle paths.

    Returns:
        SSL context for httpx's ``verify`` argument.

    Raises:
        FileNotFoundError: If one of the three files is missing.
        ValueError: If the files cannot be loaded, the key does not match
            the certificate, or the certificate has expired.
    """
    cert_path = _existing_path(mtls_config.client_cert_path, "client certificate")
    key_path = _existing_path(mtls_config.client_key_path, "client key")
    ca_path = _existing_path(mtls_config.ca_bundle_path, "CA bundle")

    try:
        context = ssl.create_default_context(cafile=str(ca_path))
        context.load_cert_chain(certfile=str(cert_path), keyfile=str(key_path))
    except ssl.SSLError as e:
        raise ValueError(f"Invalid mTLS certificates: {e}") from e

    _warn_if_expiring(cert_path)
    return context


def _warn_if_expiring(cert_path: Path) -> None:
    cert = load_pem_certificate(cert_path.read_bytes())
    not_after = cert.not_valid_after_utc
    remaining = not_after - datetime.now(timezone.utc)

    if remaining.total_seconds() < 0:
        raise ValueError(f"mTLS client certificate {cert_path} expired on {not_after.date().isoformat()}")

    if remaining.days <= CERT_EXPIRY_WARNING_DAYS:
        logger.warning(
            {
                "event": "mtls_certificate_expiring",
                "message": f"mTLS client certificate {cert_path.name} expires in {remaining.days} days",
                "expires_at": not_after.isoformat(),
                "cert_path": str(cert_path),
            }
        )
