"""MCP server for multi-repo-analyzer — cross-repository code search tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

try:
    from mcp.server.fastmcp import FastMCP
except ImportError:
    FastMCP = None

from ..core import operations
from ..core.config import AnalyzerConfig, load_config

logger = logging.getLogger(__name__)

if FastMCP:
    mcp = FastMCP("multi-repo-analyzer")
else:
    mcp = None

_config: AnalyzerConfig | None = None
_config_path: Path | None = None


def _get_config() -> AnalyzerConfig:
    """Load the registry on first use and reuse it for the rest of the session."""
    global _config
    if _config is None:
        _config = load_config(_config_path)
        available = sum(1 for r in _config.repos if r.available)
        logger.info("Loaded %d repositories (%d available)", len(_config.repos), available)
    return _config


if mcp:

    @mcp.tool()
    async def list_repos() -> str:
        """List configured repositories with labels, path, priority paths and availability."""
        return operations.list_repos(_get_config())

    @mcp.tool()
    async def get_repo_context(
        repos: list[str] | None = None,
        labels: list[str] | None = None,
    ) -> str:
        """Read context files (README.md, CLAUDE.md, ...) to understand a project before searching.

        Args:
            repos: Repository names to include
            labels: Include repositories carrying any of these labels (e.g. ["backend"])
        """
        return operations.get_repo_context(_get_config(), repos=repos, labels=labels)

    @mcp.tool()
    async def search_code(
        query: str,
        repos: list[str] | None = None,
        labels: list[str] | None = None,
        glob: str | None = None,
        scope: Literal["priority", "full"] = "priority",
    ) -> str:
        """Regex search across repositories.

        Args:
            query: Search pattern (regular expression)
            repos: Repository names to search
            labels: Search repositories carrying any of these labels (e.g. ["backend"])
            glob: File pattern (e.g. "*.ts", "*.tf")
            scope: "priority" searches priority paths only (default), "full" the whole repository
        """
        return await operations.search_code(
            _get_config(), query, repos=repos, labels=labels, glob=glob, scope=scope
        )

    @mcp.tool()
    async def find_api_callers(
        path: str,
        method: str | None = None,
        repos: list[str] | None = None,
        labels: list[str] | None = None,
        scope: Literal["priority", "full"] = "priority",
    ) -> str:
        """Find fetch/axios/etc. calls to an API endpoint across repositories.

        Args:
            path: API path (e.g. "/api/v1/users/:id")
            method: HTTP method to narrow results (e.g. "GET", "POST")
            repos: Repository names to search
            labels: Search repositories carrying any of these labels
            scope: "priority" (default) or "full"
        """
        return await operations.find_api_callers(
            _get_config(), path, method=method, repos=repos, labels=labels, scope=scope
        )

    @mcp.tool()
    async def find_cross_repo_dependencies(
        source_repo: str,
        target_repos: list[str] | None = None,
        path: str | None = None,
        scope: Literal["priority", "full"] = "priority",
    ) -> str:
        """Trace references to source_repo from other repositories.

        Args:
            source_repo: Repository whose usages are searched for
            target_repos: Repositories to search (default: every other available repository)
            path: Extra keyword such as an API path, module or function name
            scope: "priority" (default) or "full"
        """
        return await operations.find_cross_repo_dependencies(
            _get_config(), source_repo, target_repos=target_repos, path=path, scope=scope
        )


def run_server(config_path: str | Path | None = None):
    """Run the MCP server (stdio transport)."""
    global _config_path, _config
    if mcp is None:
        raise ImportError("mcp package is not installed")
    _config_path = Path(config_path) if config_path else None
    _config = None
    _get_config()
    logger.info("MCP server started")
    mcp.run()
