"""Logging utilities and helpers.

This package provides logging infrastructure for http-pipeline:
- iso_formatter: ISO 8601 timestamp formatting for JSONL logs
- logger_setup: TRACE level, console formatting and logger configuration

Import directly from submodules:
    from http_pipeline.utils.logging.logger_setup import get_logger, trace
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
