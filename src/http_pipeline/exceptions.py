"""Custom exceptions for http-pipeline.

Exceptions are organized by the error-handling layer that owns them:

Domain data errors (400, wrap_data_errors):
    - DomainDataError: Submitted data is invalid, tagged with a DataErrorKind

Structured errors (500 when they are schema violations, wrap_schema_errors):
    - StructuredError: Failure carrying a message plus attached data
    - SchemaValidationError: A value does not match its expected schema

Everything else is an uncaught error handled by wrap_uncaught_errors.

Startup failures:
    - ConfigurationError: Config file missing, unreadable or invalid

Usage:
    from http_pipeline.exceptions import DataErrorKind, DomainDataError

    raise DomainDataError(DataErrorKind.USER_DATA_INVALID, "Unknown user 'bob'")
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DataErrorKind",
    "DomainDataError",
    "SchemaValidationError",
    "StructuredError",
]

from enum import Enum
from typing import Any


class DataErrorKind(str, Enum):
    """Kinds of domain data errors answered with a 400."""

    REQUEST_DATA_INVALID = "request-data-invalid"
    USER_DATA_INVALID = "user-data-invalid"
    SERVICE_STATUS_VERSION_NOT_FOUND = "service-status-version-not-found"


# =============================================================================
# Domain data errors
# =============================================================================


class DomainDataError(Exception):
    """Raised by a handler when submitted data is invalid.

    Attributes:
        kind: The error kind. Only the DataErrorKind members are caught by
            wrap_data_errors; any other kind is re-raised by that layer.
        message: Human-readable description, returned to plain-text clients.
        data: Extra context included in JSON error bodies.
    """

    def __init__(self, kind: DataErrorKind | str, message: str, **data: Any) -> None:
        """Initialize DomainDataError.

        Args:
            kind: Error kind. Strings naming a known kind are converted to
                DataErrorKind; unknown strings are kept as-is.
            message: Human-readable description.
            **data: Extra context for the error body.
        """
        try:
            kind = DataErrorKind(kind)
        except ValueError:
            pass
        self.kind = kind
        self.message = message
        self.data = data
        super().__init__(message)

    @property
    def is_known_kind(self) -> bool:
        return isinstance(self.kind, DataErrorKind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the body placed under "error" in JSON responses."""
        kind = self.kind.value if isinstance(self.kind, DataErrorKind) else self.kind
        return {"type": kind, "message": self.message, **self.data}

    def __repr__(self) -> str:
        return f"DomainDataError({self.to_dict()['type']!r}, {self.message!r})"


# =============================================================================
# Structured errors
# =============================================================================


class StructuredError(Exception):
    """A failure with a message and attached data.

    wrap_schema_errors inspects the message to decide whether it owns the
    failure, so the message is the classification key, not just text.

    Attributes:
        message: Failure description.
        data: Attached data describing the failure.
    """

    def __init__(self, message: str, data: dict[str, Any] | None = None) -> None:
        self.message = message
        self.data = data or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class SchemaValidationError(StructuredError):
    """A value does not match its expected schema.

    Raised by http_pipeline.validation.validate. The message always contains
    "does not match schema".

    Attributes:
        value: The offending value.
        schema: Name of the expected type.
        errors: Validation error details.
    """

    def __init__(self, value: Any, schema: str, errors: Any) -> None:
        self.value = value
        self.schema = schema
        self.errors = errors
        super().__init__(
            f"Value does not match schema: {errors!r}",
            {
                "type": "schema-error",
                "schema": schema,
                "value": value,
                "error": errors,
            },
        )


# =============================================================================
# Startup failures
# =============================================================================


class ConfigurationError(Exception):
    """Configuration is invalid or incomplete.

    Raised when:
    - Config file does not exist
    - Config file contains invalid JSON
    - Config file fails Pydantic validation
    """
