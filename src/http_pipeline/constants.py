"""Application-wide constants for http-pipeline.

Constants that define pipeline behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Logging
    "TRACE_LEVEL",
    # Response headers
    "CACHE_CONTROL_HEADER",
    "CACHE_CONTROL_VALUE",
    "CACHEABLE_METHODS",
    "X_FRAME_OPTIONS_HEADER",
    "X_FRAME_OPTIONS_VALUE",
    # Content types
    "JSON_CONTENT_TYPE",
    "PLAIN_CONTENT_TYPE",
    # Error classification
    "DATA_ERROR_STATUS",
    "SCHEMA_ERROR_STATUS",
    "UNCAUGHT_ERROR_STATUS",
    "APPLICATION_ERROR_TYPE",
    "SCHEMA_ERROR_SIGNATURE",
    "SCHEMA_ERROR_KEYS",
    # Proxy forwarding
    "HOP_BY_HOP_HEADERS",
    "STRIPPED_REQUEST_HEADERS",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "MIN_HTTP_TIMEOUT_SECONDS",
    "MAX_HTTP_TIMEOUT_SECONDS",
    # Server
    "DEFAULT_HOST",
    "DEFAULT_PORT",
]

APP_NAME: str = "http-pipeline"

# Finer than DEBUG; registered with the logging module in utils.logging
TRACE_LEVEL: int = 5

# =============================================================================
# Response headers
# =============================================================================

CACHE_CONTROL_HEADER: str = "cache-control"
CACHE_CONTROL_VALUE: str = "private, max-age=0, no-cache"
CACHEABLE_METHODS: frozenset[str] = frozenset({"GET", "PUT"})

X_FRAME_OPTIONS_HEADER: str = "X-Frame-Options"
X_FRAME_OPTIONS_VALUE: str = "DENY"

JSON_CONTENT_TYPE: str = "application/json; charset=utf-8"
PLAIN_CONTENT_TYPE: str = "text/plain; charset=utf-8"

# =============================================================================
# Error classification
# =============================================================================

DATA_ERROR_STATUS: int = 400
SCHEMA_ERROR_STATUS: int = 500
UNCAUGHT_ERROR_STATUS: int = 500

APPLICATION_ERROR_TYPE: str = "application-error"

# Structured failures whose message matches this are schema violations
SCHEMA_ERROR_SIGNATURE: str = r"does not match schema"

# Keys of a schema failure's data that are echoed in the response
SCHEMA_ERROR_KEYS: tuple[str, ...] = ("error", "value", "type")

# =============================================================================
# Proxy forwarding
# =============================================================================

# Hop-by-hop headers (RFC 7230 §6.1) must not cross connection boundaries
HOP_BY_HOP_HEADERS: frozenset[str] = frozenset(
    {
        "connection",
        "keep-alive",
        "transfer-encoding",
        "te",
        "trailer",
        "upgrade",
        "proxy-authenticate",
        "proxy-authorization",
    }
)

# Recomputed by the HTTP client for the outbound request
STRIPPED_REQUEST_HEADERS: frozenset[str] = HOP_BY_HOP_HEADERS | {"host", "content-length"}

DEFAULT_HTTP_TIMEOUT_SECONDS: float = 30.0
MIN_HTTP_TIMEOUT_SECONDS: float = 0.1
MAX_HTTP_TIMEOUT_SECONDS: float = 600.0

# =============================================================================
# Server
# =============================================================================

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8080
