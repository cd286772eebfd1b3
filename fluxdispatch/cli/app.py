"""Main Typer application — imports and registers all CLI commands.

Entry point: ``fluxdispatch`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from fluxdispatch import __version__
from fluxdispatch.cli.commands.demo import demo_cmd
from fluxdispatch.config import config

app = typer.Typer(
    name="fluxdispatch",
    help="fluxdispatch: synchronous broadcast dispatcher with wait_for ordering.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Log level (defaults to FLUXDISPATCH_LOG_LEVEL).",
    ),
) -> None:
    """Configure logging before any command runs."""
    default = "DEBUG" if config.debug else config.log_level
    level = (log_level or default).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command(name="demo", help="Run the flight destination wait_for demo.")(demo_cmd)


@app.command(name="version", help="Show the installed version.")
def version_cmd() -> None:
    Console().print(f"fluxdispatch {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
