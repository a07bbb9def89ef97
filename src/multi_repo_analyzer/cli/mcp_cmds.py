"""MCP server commands."""

from __future__ import annotations

import typer
from rich.console import Console

from . import app

console = Console(stderr=True)
mcp_app = typer.Typer(help="MCP server management")
app.add_typer(mcp_app, name="mcp")


@mcp_app.command("serve")
def mcp_serve(ctx: typer.Context):
    """Start the MCP server (stdio transport)."""
    from ..core.config import ConfigError

    config_path = (ctx.obj or {}).get("config_path")
    try:
        from ..mcp.server import run_server

        run_server(config_path)
    except ImportError:
        console.print("[red]MCP not available. Install with: pip install 'multi-repo-analyzer[mcp]'[/red]")
        raise typer.Exit(1)
    except ConfigError as exc:
        console.print(str(exc), style="red", markup=False, highlight=False)
        raise typer.Exit(1)
