"""Colored output for CLI commands.

Section headers are cyan, outcomes are prefixed with a green check or a red
cross, and proxy rules are rendered as one aligned line each.
"""

from __future__ import annotations

__all__ = [
    "style_error",
    "style_header",
    "style_label",
    "style_rule",
    "style_success",
]

import click

from http_pipeline.config import ProxyRule


def style_header(title: str) -> str:
    """Render a section title, e.g. ``--- Proxy rules ---``."""
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_label(label: str) -> str:
    return click.style(label + ":", fg="cyan", bold=True)


def _outcome(mark: str, message: str, color: str) -> str:
    return click.style(f"{mark} {message}", fg=color)


def style_success(message: str) -> str:
    return _outcome("✓", message, "green")


def style_error(message: str) -> str:
    """Render a failure; callers echo it to stderr."""
    return _outcome("✗", message, "red")


def style_rule(rule: ProxyRule) -> str:
    """Render a proxy rule as ``  <path> (<match>) -> <remote>`` with a dim match kind.

    Example:
        >>> click.echo(style_rule(ProxyRule(path="/proxy", remote_uri_base="http://upstream")))
          /proxy (prefix) -> http://upstream
    """
    match = click.style(f"({rule.match})", dim=True)
    return f"  {rule.path} {match} -> {rule.remote_uri_base}"
