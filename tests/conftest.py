"""Shared fixtures: self-signed client certificates, simple handlers and remote responses."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from http_pipeline.models import Handler, Request, Response

CertFactory = Callable[..., x509.Certificate]


def _build_certificate(
    cn: str | None,
    key: ec.EllipticCurvePrivateKey,
    days_valid: int,
) -> x509.Certificate:
    attributes = [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Test Org")]
    if cn is not None:
        attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, cn))
    name = x509.Name(attributes)
    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=days_valid))
        .sign(key, hashes.SHA256())
    )


@pytest.fixture
def private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def cert_factory(private_key: ec.EllipticCurvePrivateKey) -> CertFactory:
    """Create self-signed certificates: cert_factory(cn="name", days_valid=365)."""

    def factory(cn: str | None = "client.example.com", days_valid: int = 365) -> x509.Certificate:
        return _build_certificate(cn, private_key, days_valid)

    return factory


@pytest.fixture
def client_cert(cert_factory: CertFactory) -> x509.Certificate:
    """Client certificate with CN "client.example.com"."""
    return cert_factory()


@pytest.fixture
def client_cert_pem(client_cert: x509.Certificate) -> str:
    return client_cert.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture
def ok_handler() -> Handler:
    """Handler answering every request with 200 "ok"."""

    async def handler(request: Request) -> Response | None:
        return Response(status=200, headers={"content-type": "text/plain"}, body=b"ok")

    return handler


@pytest.fixture
def none_handler() -> Handler:
    """Handler that declines every request."""

    async def handler(request: Request) -> Response | None:
        return None

    return handler


@pytest.fixture
def upstream_response() -> Callable[..., httpx.Response]:
    """Build a remote response whose body is still unread, as a socket transport delivers it.

    httpx.Response(content=...) reads its body on construction, which the
    relay's raw streaming cannot consume again. Call once per relayed request.
    """

    def build(status: int = 200, body: bytes = b"", headers: list[tuple[str, str]] | None = None) -> httpx.Response:
        return httpx.Response(status, headers=headers, stream=httpx.ByteStream(body))

    return build
