"""Error-handling middleware.

Three layers turn failures raised by the wrapped handler into responses.
Each owns one category and re-raises everything else to the next layer out:

    wrap_data_errors      DomainDataError of a known kind        -> 400
    wrap_schema_errors    StructuredError "does not match schema" -> 500
    wrap_uncaught_errors  any other Exception                     -> 500

They must be stacked in that order, data innermost, or a broader layer will
claim failures meant for a narrower one. wrap_error_handling applies all
three correctly.

Response format (json):
    {"error": {"type": "user-data-invalid", "message": "..."}}          (400)
    {"error": {"type": "application-error", "message": "..."}}          (500)

Response format (plain):
    the message as text/plain
"""

from __future__ import annotations

__all__ = [
    "wrap_data_errors",
    "wrap_error_handling",
    "wrap_schema_errors",
    "wrap_uncaught_errors",
]

import logging
import re

from http_pipeline.constants import (
    APPLICATION_ERROR_TYPE,
    DATA_ERROR_STATUS,
    SCHEMA_ERROR_KEYS,
    SCHEMA_ERROR_SIGNATURE,
    SCHEMA_ERROR_STATUS,
    UNCAUGHT_ERROR_STATUS,
)
from http_pipeline.exceptions import DomainDataError, StructuredError
from http_pipeline.models import Handler, Request, Response
from http_pipeline.responses import ResponseEncoding, build_response
from http_pipeline.utils.logging.logger_setup import get_logger
from http_pipeline.validation import validate

_logger = get_logger("errors")

_SCHEMA_ERROR_PATTERN = re.compile(SCHEMA_ERROR_SIGNATURE)


def _application_error(status: int, message: str, encoding: ResponseEncoding) -> Response:
    if encoding is ResponseEncoding.JSON:
        return build_response(
            status,
            {"error": {"type": APPLICATION_ERROR_TYPE, "message": message}},
            encoding,
        )
    return build_response(status, message, encoding)


def _describe(error: BaseException) -> str:
    """Render an exception as "<type>: <text>", the type module-qualified unless builtin.

    Only the exception itself is rendered; notes and chained causes are left
    to the logged traceback.
    """
    cls = type(error)
    name = cls.__qualname__
    if cls.__module__ not in ("builtins", "__main__"):
        name = f"{cls.__module__}.{name}"
    text = str(error)
    return f"{name}: {text}" if text else name


def wrap_data_errors(
    handler: Handler,
    encoding: ResponseEncoding | str = ResponseEncoding.JSON,
    logger: logging.Logger | None = None,
) -> Handler:
    """Answer domain data errors with a 400.

    Catches DomainDataError whose kind is request-data-invalid,
    user-data-invalid or service-status-version-not-found. The JSON body is
    ``{"error": <error dict>}``; the plain body is the error message.

    Args:
        handler: The wrapped handler.
        encoding: "json" or "plain".
        logger: Logger to write to (default: http-pipeline.errors).

    Returns:
        The error-handling handler.

    Raises:
        SchemaValidationError: If encoding is not a ResponseEncoding.
    """
    response_encoding = validate(ResponseEncoding, encoding)
    log = logger or _logger

    async def data_errors_handler(request: Request) -> Response | None:
        try:
            return await handler(request)
        except DomainDataError as e:
            if not e.is_known_kind:
                raise
            log.error(
                {
                    "event": "data_error",
                    "message": f"Submitted data is invalid: {e.message}",
                    "kind": e.to_dict()["type"],
                    "path": request.path,
                }
            )
            if response_encoding is ResponseEncoding.JSON:
                return build_response(DATA_ERROR_STATUS, {"error": e.to_dict()}, response_encoding)
            return build_response(DATA_ERROR_STATUS, e.message, response_encoding)

    return data_errors_handler


def wrap_schema_errors(
    handler: Handler,
    encoding: ResponseEncoding | str = ResponseEncoding.JSON,
    logger: logging.Logger | None = None,
) -> Handler:
    """Answer schema validation failures with a 500 describing the mismatch.

    Catches StructuredError whose message matches "does not match schema".
    Other structured errors are re-raised untouched.

    Args:
        handler: The wrapped handler.
        encoding: "json" or "plain".
        logger: Logger to write to (default: http-pipeline.errors).

    Returns:
        The error-handling handler.

    Raises:
        SchemaValidationError: If encoding is not a ResponseEncoding.
    """
    response_encoding = validate(ResponseEncoding, encoding)
    log = logger or _logger

    async def schema_errors_handler(request: Request) -> Response | None:
        try:
            return await handler(request)
        except StructuredError as e:
            if not _SCHEMA_ERROR_PATTERN.search(e.message):
                raise
            details = {key: e.data[key] for key in SCHEMA_ERROR_KEYS if key in e.data}
            message = f"Something unexpected happened: {details}"
            log.error({"event": "schema_error", "message": message, "path": request.path})
            return _application_error(SCHEMA_ERROR_STATUS, message, response_encoding)

    return schema_errors_handler


def wrap_uncaught_errors(
    handler: Handler,
    encoding: ResponseEncoding | str = ResponseEncoding.JSON,
    logger: logging.Logger | None = None,
) -> Handler:
    """Answer every otherwise uncaught error with a 500.

    The message is "Internal Server Error: <ExceptionType>: <text>"; exception
    notes are not part of it. This
    layer never re-raises.

    Args:
        handler: The wrapped handler.
        encoding: "json" or "plain".
        logger: Logger to write to (default: http-pipeline.errors).

    Returns:
        The error-handling handler.

    Raises:
        SchemaValidationError: If encoding is not a ResponseEncoding.
    """
    response_encoding = validate(ResponseEncoding, encoding)
    log = logger or _logger

    async def uncaught_errors_handler(request: Request) -> Response | None:
        try:
            return await handler(request)
        except Exception as e:
            description = _describe(e)
            message = f"Internal Server Error: {description}"
            log.error(
                {
                    "event": "uncaught_error",
                    "message": message,
                    "error_type": type(e).__name__,
                    "path": request.path,
                },
                exc_info=e,
            )
            return _application_error(UNCAUGHT_ERROR_STATUS, message, response_encoding)

    return uncaught_errors_handler


def wrap_error_handling(
    handler: Handler,
    encoding: ResponseEncoding | str = ResponseEncoding.JSON,
    logger: logging.Logger | None = None,
) -> Handler:
    """Apply the data, schema and uncaught error layers, innermost first."""
    handler = wrap_data_errors(handler, encoding, logger)
    handler = wrap_schema_errors(handler, encoding, logger)
    return wrap_uncaught_errors(handler, encoding, logger)
