"""serve command: run the configured pipeline with uvicorn.

Requests matching a proxy rule are relayed to its remote origin; all other
requests are answered with 404.
"""

from __future__ import annotations

__all__ = ["serve"]

from pathlib import Path

import click
import uvicorn

from http_pipeline.api.server import create_app_from_config
from http_pipeline.config import PipelineConfig
from http_pipeline.constants import DEFAULT_HOST, DEFAULT_PORT
from http_pipeline.exceptions import ConfigurationError
from http_pipeline.utils.logging.logger_setup import configure_logging

from ..styling import style_error


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the pipeline config file (JSON)",
)
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Bind address")
@click.option("--port", default=DEFAULT_PORT, show_default=True, type=int, help="Bind port")
def serve(config_path: Path, host: str, port: int) -> None:
    """Serve the configured pipeline.

    Example:
        http-pipeline serve --config pipeline.json --port 8080
    """
    try:
        config = PipelineConfig.load_from_file(config_path)
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1) from e

    log_file = Path(config.logging.log_file).expanduser() if config.logging.log_file else None
    configure_logging(config.logging.level, log_file)

    app = create_app_from_config(config)
    uvicorn.run(app, host=host, port=port, log_level="info")
