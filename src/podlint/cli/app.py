"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

app = typer.Typer(
    name="podlint",
    help="podlint - Lint live Kubernetes pods for misconfigurations and resource waste.",
    no_args_is_help=True,
)


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _register_commands() -> None:
    from podlint.cli.commands.lint_cmd import app as lint_app

    app.add_typer(lint_app, name="lint", help="Lint pods")


_register_commands()


def main() -> None:
    app()
