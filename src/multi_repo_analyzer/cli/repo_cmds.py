"""Repository registry commands."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import app, load_cli_config

console = Console()


@app.command("repos")
def repo_list(ctx: typer.Context):
    """List configured repositories and whether their paths resolved."""
    config = load_cli_config(ctx)

    if not config.repos:
        console.print("[dim]No configured repositories.[/dim]")
        return

    table = Table(title=f"Configured Repositories ({len(config.repos)})")
    table.add_column("Name")
    table.add_column("Labels")
    table.add_column("Path")
    table.add_column("Priority paths")
    table.add_column("Status", justify="center")

    for r in config.repos:
        table.add_row(
            r.name,
            ", ".join(r.labels),
            str(r.root) if r.root else "(not configured)",
            ", ".join(r.priority_paths),
            "[green]✓[/green]" if r.available else "[red]✗[/red]",
        )

    console.print(table)


@app.command("context")
def repo_context(
    ctx: typer.Context,
    repo: Optional[List[str]] = typer.Option(None, "--repo", "-r", help="Repository name (repeatable)"),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Repository label (repeatable)"),
):
    """Print the context files (README.md, CLAUDE.md, ...) of matching repositories."""
    from ..core.operations import get_repo_context

    config = load_cli_config(ctx)
    text = get_repo_context(config, repos=repo, labels=label)
    console.print(text, markup=False, highlight=False, soft_wrap=True)
