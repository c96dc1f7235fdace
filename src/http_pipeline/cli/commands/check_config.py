"""check-config command: validate a pipeline config file."""

from __future__ import annotations

__all__ = ["check_config"]

from pathlib import Path

import click

from http_pipeline.config import PipelineConfig
from http_pipeline.exceptions import ConfigurationError

from ..styling import style_error, style_header, style_label, style_rule, style_success


@click.command("check-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the pipeline config file (JSON)",
)
def check_config(config_path: Path) -> None:
    """Validate a config file and list its proxy rules.

    Exits with status 1 if the file is missing or invalid.

    Example:
        http-pipeline check-config --config pipeline.json
    """
    try:
        config = PipelineConfig.load_from_file(config_path)
    except ConfigurationError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1) from e

    click.echo(style_success(f"Configuration valid: {config_path}"))
    click.echo(f"{style_label('Error encoding')} {config.error_encoding.value}")
    click.echo(f"{style_label('Log level')} {config.logging.level}")
    click.echo()
    click.echo(style_header("Proxy rules"))
    if not config.proxy_rules:
        click.echo("  (none)")
    for rule in config.proxy_rules:
        click.echo(style_rule(rule))
