"""Command-line interface for http-pipeline.

Provides commands for validating configuration and serving a configured
pipeline.
"""

from .main import cli, main

__all__ = ["cli", "main"]
