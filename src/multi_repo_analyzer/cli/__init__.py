"""CLI interface using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

app = typer.Typer(name="mra", help="multi-repo-analyzer — cross-repository code search")

err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    # stdout belongs to the MCP transport; diagnostics always go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Repository registry (default: $MULTI_REPO_ANALYZER_CONFIG or ./repos.toml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Search code across the repositories listed in a TOML registry."""
    _configure_logging(verbose)
    ctx.obj = {"config_path": config}


def load_cli_config(ctx: typer.Context):
    """Load the registry named on the command line, exiting on config errors."""
    from ..core.config import ConfigError, load_config

    config_path = (ctx.obj or {}).get("config_path")
    try:
        return load_config(config_path)
    except ConfigError as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)


# Import subcommand modules to register them
from . import repo_cmds  # noqa: F401, E402
from . import search_cmds  # noqa: F401, E402
from . import mcp_cmds  # noqa: F401, E402
