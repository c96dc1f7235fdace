"""Unit tests for the mTLS SSL context."""

from __future__ import annotations

import logging
import ssl
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization

from http_pipeline.config import MTLSConfig
from http_pipeline.security.mtls import create_mtls_ssl_context


def _write_pair(tmp_path: Path, cert, key) -> MTLSConfig:
    cert_path = tmp_path / "client.pem"
    key_path = tmp_path / "client-key.pem"
    cert_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    # Self-signed: the certificate doubles as the CA bundle
    return MTLSConfig(
        client_cert_path=str(cert_path),
        client_key_path=str(key_path),
        ca_bundle_path=str(cert_path),
    )


class TestCreateMtlsSslContext:
    """Tests for create_mtls_ssl_context."""

    def test_creates_context(self, tmp_path: Path, client_cert, private_key) -> None:
        config = _write_pair(tmp_path, client_cert, private_key)

        context = create_mtls_ssl_context(config)

        assert isinstance(context, ssl.SSLContext)

    def test_missing_certificate_raises(self, tmp_path: Path, client_cert, private_key) -> None:
        config = _write_pair(tmp_path, client_cert, private_key)
        missing = config.model_copy(update={"client_cert_path": str(tmp_path / "missing.pem")})

        with pytest.raises(FileNotFoundError, match="client certificate not found"):
            create_mtls_ssl_context(missing)

    def test_invalid_certificate_raises(self, tmp_path: Path, client_cert, private_key) -> None:
        config = _write_pair(tmp_path, client_cert, private_key)
        Path(config.client_cert_path).write_text("garbage")

        with pytest.raises(ValueError, match="Invalid mTLS certificates"):
            create_mtls_ssl_context(config)

    def test_expiring_certificate_logs_warning(
        self, tmp_path: Path, cert_factory, private_key, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = _write_pair(tmp_path, cert_factory(days_valid=3), private_key)

        with caplog.at_level(logging.WARNING, logger="http-pipeline"):
            create_mtls_ssl_context(config)

        events = [r.msg["event"] for r in caplog.records if isinstance(r.msg, dict)]
        assert "mtls_certificate_expiring" in events

    def test_expired_certificate_raises(self, tmp_path: Path, cert_factory, private_key) -> None:
        """Certificate validity is encoded to the second, so zero days is already past."""
        config = _write_pair(tmp_path, cert_factory(days_valid=0), private_key)

        with pytest.raises(ValueError, match="expired"):
            create_mtls_ssl_context(config)
