"""JSONL formatting for the optional pipeline log file."""

from __future__ import annotations

__all__ = ["ISO8601Formatter"]

import json
import logging
from datetime import datetime, timezone


def _utc_timestamp(created: float) -> str:
    """``2025-12-04T10:48:37.123Z`` for a LogRecord.created value."""
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class ISO8601Formatter(logging.Formatter):
    """One JSON object per record: time, level and logger, then the event fields.

    Structured events (dict messages such as ``{"event": "proxy_request", ...}``)
    are merged in as-is; any other message is rendered under "message".
    Values JSON cannot encode (paths, datetimes) are written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "time": _utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
        }
        if isinstance(record.msg, dict):
            entry.update(record.msg)
        else:
            entry["message"] = record.getMessage()
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
