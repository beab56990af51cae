"""Output helpers for the tonkit CLI."""

import json
from typing import Any

import click

from tonkit_cli.core.constants import Icons


def format_error(msg: str) -> str:
    """Format an error message with red color and icon."""
    return click.style(f"{Icons.ERROR} {msg}", fg="red")


class CliOutput:
    """Unified CLI output utility with consistent formatting.

    Diagnostics go to stderr so that stdout carries only command results
    (JSON documents the editor host reads back).
    """

    @staticmethod
    def error(message: str) -> None:
        click.echo(format_error(message), err=True)

    @staticmethod
    def plain(message: str) -> None:
        click.echo(message)

    @staticmethod
    def json(data: Any, pretty: bool = False) -> None:
        """Echo ``data`` as a JSON document on stdout."""
        click.echo(json.dumps(data, indent=2 if pretty else None))
