"""Cross-repo search orchestrator — runs one ripgrep search per repository."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING, Callable

from .ripgrep import Match, RepoSearchResult, SearchError, resolve_roots, run_search

if TYPE_CHECKING:
    from .config import SearchConfig
    from .repos import RepositoryDescriptor

logger = logging.getLogger(__name__)

PostFilter = Callable[[list[Match]], list[Match]]


async def search_repo(
    repo: RepositoryDescriptor,
    pattern: str,
    search_config: SearchConfig,
    scope: str = "priority",
    glob: str | None = None,
) -> RepoSearchResult:
    """Search one repository and attach repo-relative paths to its matches."""
    roots = resolve_roots(repo, scope)
    matches = await run_search(
        pattern,
        roots,
        glob=glob,
        context_lines=search_config.context_lines,
        max_results=search_config.max_results,
        exclude_patterns=list(search_config.exclude_patterns),
    )
    for match in matches:
        match.relative_path = os.path.relpath(match.absolute_path, repo.root)
    return RepoSearchResult(repo_name=repo.name, matches=matches)


async def _search_isolated(
    repo: RepositoryDescriptor,
    pattern: str,
    search_config: SearchConfig,
    scope: str,
    glob: str | None,
    post_filter: PostFilter | None,
) -> RepoSearchResult | None:
    """search_repo that logs and swallows per-repo failures (returns None)."""
    try:
        result = await search_repo(repo, pattern, search_config, scope=scope, glob=glob)
    except (SearchError, OSError) as exc:
        logger.warning("Search failed for %s: %s", repo.name, exc)
        return None
    except Exception as exc:
        logger.warning("Unexpected error searching %s: %s", repo.name, exc, exc_info=True)
        return None

    if post_filter is not None:
        result.matches = post_filter(result.matches)
    return result


async def search_repos_sequential(
    repos: list[RepositoryDescriptor],
    pattern: str,
    search_config: SearchConfig,
    scope: str = "priority",
    glob: str | None = None,
    post_filter: PostFilter | None = None,
) -> list[RepoSearchResult]:
    """Search *repos* one after another. Failed repos are left out of the result."""
    results: list[RepoSearchResult] = []
    for repo in repos:
        result = await _search_isolated(repo, pattern, search_config, scope, glob, post_filter)
        if result is not None:
            results.append(result)
    return results


async def search_repos_concurrent(
    repos: list[RepositoryDescriptor],
    pattern: str,
    search_config: SearchConfig,
    scope: str = "priority",
    glob: str | None = None,
    post_filter: PostFilter | None = None,
) -> list[RepoSearchResult]:
    """Search all *repos* at once. Results keep the order of *repos*."""
    outcomes = await asyncio.gather(
        *(_search_isolated(repo, pattern, search_config, scope, glob, post_filter) for repo in repos)
    )
    return [r for r in outcomes if r is not None]
