"""Entry point of the http-pipeline command.

Commands:
    check-config - Validate a config file and list its proxy rules
    serve        - Serve the configured pipeline with uvicorn

Subcommand help:
    http-pipeline COMMAND -h   Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from http_pipeline import __version__

from .commands.check_config import check_config
from .commands.serve import serve


class PipelineGroup(click.Group):
    """Command group that ends its help with a config file example."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        formatter.write(
            """
Example config (pipeline.json):
  {
    "proxy_rules": [
      {"path": "/proxy", "remote_uri_base": "http://upstream:8080"}
    ],
    "error_encoding": "json"
  }

  http-pipeline check-config -c pipeline.json
  http-pipeline serve -c pipeline.json --port 8080
"""
        )


@click.group(
    cls=PipelineGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Run a request pipeline that relays matching paths to remote origins."""
    if version:
        click.echo(f"http-pipeline {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


for command in (check_config, serve):
    cli.add_command(command)


def main() -> None:
    cli()
