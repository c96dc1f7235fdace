"""Complete HTTP responses in JSON or plain-text encoding."""

from __future__ import annotations

__all__ = [
    "ResponseEncoding",
    "build_response",
    "json_response",
    "plain_response",
]

import json
from enum import Enum
from typing import Any

from http_pipeline.constants import JSON_CONTENT_TYPE, PLAIN_CONTENT_TYPE
from http_pipeline.models import Response


class ResponseEncoding(str, Enum):
    """Body encodings for error responses."""

    JSON = "json"
    PLAIN = "plain"


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def json_response(status: int, body: Any) -> Response:
    """Serialize body as JSON with a UTF-8 JSON content type."""
    return Response(
        status=status,
        headers={"content-type": JSON_CONTENT_TYPE},
        body=json.dumps(body, default=_json_default).encode("utf-8"),
    )


def plain_response(status: int, body: Any) -> Response:
    """Write body as text with a UTF-8 plain-text content type."""
    return Response(
        status=status,
        headers={"content-type": PLAIN_CONTENT_TYPE},
        body=str(body).encode("utf-8"),
    )


def build_response(status: int, body: Any, encoding: ResponseEncoding | str) -> Response:
    """Build a response in the requested encoding.

    Args:
        status: HTTP status code.
        body: Response body. Must be JSON serializable for the JSON encoding.
        encoding: "json" or "plain".

    Returns:
        The complete response.
    """
    if ResponseEncoding(encoding) is ResponseEncoding.JSON:
        return json_response(status, body)
    return plain_response(status, body)
