"""Pipeline configuration.

Defines configuration models for proxy rules, outbound HTTP options, error
response encoding and logging. Config is read-only once loaded and shared by
all requests.

Example usage:
    # Load from config file
    config = PipelineConfig.load_from_file(config_path)

    # Save new configuration
    config.save_to_file(config_path)

Example config file:
    {
        "proxy_rules": [
            {"path": "/proxy", "remote_uri_base": "http://upstream:8080"},
            {"path": "^/v[0-9]+/", "match": "regex", "remote_uri_base": "https://api.internal",
             "http_options": {"timeout_seconds": 5, "verify": "/etc/ssl/internal-ca.pem"}}
        ],
        "error_encoding": "json",
        "logging": {"level": "DEBUG"}
    }
"""

from __future__ import annotations

__all__ = [
    "HttpOptions",
    "LoggingConfig",
    "MTLSConfig",
    "PipelineConfig",
    "ProxyRule",
]

import json
import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from http_pipeline.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    MAX_HTTP_TIMEOUT_SECONDS,
    MIN_HTTP_TIMEOUT_SECONDS,
)
from http_pipeline.exceptions import ConfigurationError
from http_pipeline.responses import ResponseEncoding
from http_pipeline.validation import is_valid_http_url


class MTLSConfig(BaseModel):
    """mTLS configuration for authenticating to a remote origin.

    Attributes:
        client_cert_path: Path to client certificate (PEM format).
        client_key_path: Path to client private key (PEM format).
        ca_bundle_path: Path to CA bundle for server verification (PEM format).
    """

    model_config = ConfigDict(frozen=True)

    client_cert_path: str = Field(min_length=1)
    client_key_path: str = Field(min_length=1)
    ca_bundle_path: str = Field(min_length=1)


class HttpOptions(BaseModel):
    """Options for the outbound request to a remote origin.

    Attributes:
        timeout_seconds: Overall timeout for the relayed request.
        connect_timeout_seconds: Connect timeout (defaults to timeout_seconds).
        follow_redirects: Follow redirects from the remote. Off by default so
            redirects reach the client verbatim.
        headers: Extra headers added to every relayed request.
        verify: TLS verification: True, False, or a CA bundle path.
        mtls: Client certificate for mTLS to the remote origin.
    """

    model_config = ConfigDict(frozen=True)

    timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        ge=MIN_HTTP_TIMEOUT_SECONDS,
        le=MAX_HTTP_TIMEOUT_SECONDS,
    )
    connect_timeout_seconds: float | None = Field(
        default=None,
        ge=MIN_HTTP_TIMEOUT_SECONDS,
        le=MAX_HTTP_TIMEOUT_SECONDS,
    )
    follow_redirects: bool = False
    headers: dict[str, str] = Field(default_factory=dict)
    verify: bool | str = True
    mtls: MTLSConfig | None = None


class ProxyRule(BaseModel):
    """A path rule forwarding matching requests to a remote origin.

    Attributes:
        path: Literal path prefix (match="prefix") or regular expression
            (match="regex").
        match: How path is matched against the request path.
        remote_uri_base: Remote origin base URI, e.g. "http://upstream:8080/api".
        http_options: Outbound request options.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    match: Literal["prefix", "regex"] = "prefix"
    remote_uri_base: str = Field(min_length=1)
    http_options: HttpOptions = Field(default_factory=HttpOptions)

    @field_validator("remote_uri_base")
    @classmethod
    def _check_remote_uri_base(cls, value: str) -> str:
        if not is_valid_http_url(value):
            raise ValueError(f"remote_uri_base must be an http:// or https:// URL, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_pattern(self) -> ProxyRule:
        if self.match == "regex":
            try:
                re.compile(self.path)
            except re.error as e:
                raise ValueError(f"Invalid regex path {self.path!r}: {e}") from e
        return self

    def matcher(self) -> str | re.Pattern[str]:
        """Return the path matcher: the prefix string or the compiled pattern."""
        if self.match == "regex":
            return re.compile(self.path)
        return self.path


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level for the pipeline logger. TRACE shows full requests
            and responses.
        log_file: Optional JSONL log file path.
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = None


class PipelineConfig(BaseModel):
    """Complete pipeline configuration.

    Attributes:
        proxy_rules: Rules evaluated in order; the first match is forwarded.
        error_encoding: Encoding of error responses ("json" or "plain").
        client_cert_header: Header carrying the client certificate as
            URL-encoded PEM, for deployments behind a TLS-terminating proxy.
            Set it only when that proxy overwrites the header on every
            request; a client-supplied value would otherwise be trusted.
        logging: Logging configuration.
    """

    proxy_rules: list[ProxyRule] = Field(default_factory=list)
    error_encoding: ResponseEncoding = ResponseEncoding.JSON
    client_cert_header: str | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> PipelineConfig:
        """Load and validate configuration from a JSON file.

        Args:
            config_path: Path to the config file.

        Returns:
            Validated PipelineConfig.

        Raises:
            ConfigurationError: If the file is missing, not valid JSON, or
                fails validation.
        """
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}:\n{e}") from e

    def save_to_file(self, config_path: Path) -> None:
        """Write configuration as JSON, creating the parent directory.

        Args:
            config_path: Destination path.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            json.dumps(self.model_dump(mode="json", exclude_none=True), indent=2) + "\n",
            encoding="utf-8",
        )
