"""Schema validation for values flowing through handlers.

Handlers call validate() on data they receive or produce. A mismatch raises
SchemaValidationError, which wrap_schema_errors turns into a 500 response.
"""

from __future__ import annotations

__all__ = [
    "is_valid_http_url",
    "validate",
]

from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from http_pipeline.exceptions import SchemaValidationError

T = TypeVar("T")


def validate(schema: type[T] | Any, value: Any) -> T:
    """Validate value against schema and return the validated value.

    Args:
        schema: Any type pydantic can validate (models, Literal, list[int], ...).
        value: The value to check.

    Returns:
        The validated (possibly coerced) value.

    Raises:
        SchemaValidationError: If value does not match schema.
    """
    adapter: TypeAdapter[T] = TypeAdapter(schema)
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        errors = [
            {"loc": list(err.get("loc", [])), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in e.errors()
        ]
        raise SchemaValidationError(value, getattr(schema, "__name__", repr(schema)), errors) from e


def is_valid_http_url(url: str) -> bool:
    """Check if URL has valid HTTP or HTTPS scheme.

    Args:
        url: URL string to validate.

    Returns:
        True if URL starts with http:// or https://.
    """
    return url.startswith("http://") or url.startswith("https://")
