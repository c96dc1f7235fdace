"""Unit tests for request sanitization.

Tests cover:
- Replacing the raw client certificate with its Common Name
- Removing the certificate copy left by an authentication layer
- Removing the header a TLS terminator forwards the certificate in
- Idempotence
"""

from __future__ import annotations

from cryptography import x509

from http_pipeline.models import Request
from http_pipeline.security.sanitizer import sanitize_client_cert


class TestSanitizeClientCert:
    """Tests for sanitize_client_cert."""

    def test_replaces_certificate_with_cn(self, client_cert: x509.Certificate) -> None:
        """The raw certificate is removed and its CN kept under ssl_client_cert_cn."""
        request = Request(method="GET", path="/", ssl_client_cert=client_cert)

        sanitized = sanitize_client_cert(request)

        assert sanitized.ssl_client_cert is None
        assert sanitized.ssl_client_cert_cn == "client.example.com"

    def test_does_not_touch_original_request(self, client_cert: x509.Certificate) -> None:
        request = Request(method="GET", path="/", ssl_client_cert=client_cert)

        sanitize_client_cert(request)

        assert request.ssl_client_cert is client_cert
        assert request.ssl_client_cert_cn is None

    def test_request_without_certificate_unchanged(self) -> None:
        request = Request(method="POST", path="/data", body=b"{}")

        assert sanitize_client_cert(request) == request

    def test_removes_authorization_certificate(self, client_cert: x509.Certificate) -> None:
        """The certificate copy under authorization is dropped, other keys stay."""
        request = Request(
            method="GET",
            path="/",
            authorization={"certificate": client_cert, "name": "client.example.com"},
        )

        sanitized = sanitize_client_cert(request)

        assert sanitized.authorization == {"name": "client.example.com"}

    def test_empty_authorization_becomes_none(self, client_cert: x509.Certificate) -> None:
        request = Request(method="GET", path="/", authorization={"certificate": client_cert})

        assert sanitize_client_cert(request).authorization is None

    def test_sanitize_is_idempotent(self, client_cert: x509.Certificate) -> None:
        """sanitize(sanitize(r)) == sanitize(r)."""
        request = Request(
            method="PUT",
            path="/x",
            headers={"accept": "application/json"},
            ssl_client_cert=client_cert,
            authorization={"certificate": client_cert, "authenticated": True},
        )

        once = sanitize_client_cert(request)

        assert sanitize_client_cert(once) == once

    def test_removes_cert_header(self, client_cert_pem: str) -> None:
        """The forwarded PEM is dropped, whatever the header's case."""
        request = Request(
            method="GET",
            path="/",
            headers={"X-Client-Cert": client_cert_pem.replace("\n", "%0A"), "accept": "text/plain"},
        )

        sanitized = sanitize_client_cert(request, cert_header="x-client-cert")

        assert "x-client-cert" not in sanitized.headers
        assert sanitized.headers["accept"] == "text/plain"
        assert "BEGIN CERTIFICATE" not in repr(sanitized)

    def test_cert_header_kept_when_not_configured(self) -> None:
        request = Request(method="GET", path="/", headers={"x-client-cert": "pem"})

        assert sanitize_client_cert(request).headers["x-client-cert"] == "pem"

    def test_cert_header_removal_is_idempotent(self) -> None:
        request = Request(method="GET", path="/", headers={"x-client-cert": "pem", "accept": "*/*"})

        once = sanitize_client_cert(request, cert_header="x-client-cert")

        assert sanitize_client_cert(once, cert_header="x-client-cert") == once
