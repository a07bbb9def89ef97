"""Search commands."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.console import Console

from . import app, load_cli_config

console = Console()

_SCOPE_HELP = "Search scope: priority (priority paths only) | full"


def _emit(coro) -> None:
    from ..core.operations import InvalidRequestError

    try:
        text = asyncio.run(coro)
    except InvalidRequestError as exc:
        raise typer.BadParameter(str(exc))
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Search pattern (regular expression)"),
    repo: Optional[List[str]] = typer.Option(None, "--repo", "-r", help="Repository name (repeatable)"),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Repository label (repeatable)"),
    glob: Optional[str] = typer.Option(None, "--glob", "-g", help="File pattern, e.g. '*.ts'"),
    scope: str = typer.Option("priority", "--scope", "-s", help=_SCOPE_HELP),
):
    """Regex search across repositories."""
    from ..core.operations import search_code

    config = load_cli_config(ctx)
    _emit(search_code(config, query, repos=repo, labels=label, glob=glob, scope=scope))


@app.command("api-callers")
def api_callers(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path, e.g. /api/v1/users/:id"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="HTTP method, e.g. GET"),
    repo: Optional[List[str]] = typer.Option(None, "--repo", "-r", help="Repository name (repeatable)"),
    label: Optional[List[str]] = typer.Option(None, "--label", "-l", help="Repository label (repeatable)"),
    scope: str = typer.Option("priority", "--scope", "-s", help=_SCOPE_HELP),
):
    """Find HTTP client calls to an API endpoint."""
    from ..core.operations import find_api_callers

    config = load_cli_config(ctx)
    _emit(find_api_callers(config, path, method=method, repos=repo, labels=label, scope=scope))


@app.command("deps")
def deps(
    ctx: typer.Context,
    source_repo: str = typer.Argument(..., help="Repository whose usages are searched for"),
    target: Optional[List[str]] = typer.Option(None, "--target", "-t", help="Target repository (repeatable)"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Extra keyword: API path, module or function"),
    scope: str = typer.Option("priority", "--scope", "-s", help=_SCOPE_HELP),
):
    """Find references to SOURCE_REPO from other repositories."""
    from ..core.operations import find_cross_repo_dependencies

    config = load_cli_config(ctx)
    _emit(find_cross_repo_dependencies(config, source_repo, target_repos=target, path=path, scope=scope))
