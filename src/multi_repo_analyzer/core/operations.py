"""The five analyzer operations, independent of MCP or CLI transport.

Each operation takes the loaded AnalyzerConfig and returns the text shown to
the caller. Malformed input raises InvalidRequestError before any search runs.
"""

from __future__ import annotations

from functools import partial

from .config import AnalyzerConfig
from .context import read_repo_context
from .cross_repo import search_repos_concurrent, search_repos_sequential
from .formatter import NO_MATCHES, format_repo_list, format_results
from .patterns import (
    apply_method_filter,
    build_api_caller_patterns,
    build_cross_repo_patterns,
    join_patterns,
)
from .repos import find_repo, select_dependency_targets, select_repos
from .ripgrep import SCOPES

NO_MATCHING_REPOS = "No matching repositories found."
NO_CONTEXT_FILES = "No context files found."
NO_TARGET_REPOS = "No target repositories available."


class InvalidRequestError(ValueError):
    """A tool was called with arguments that cannot be searched."""


def _require_text(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise InvalidRequestError(f"{name} must be a non-empty string")
    return value


def _check_scope(scope: str) -> str:
    if scope not in SCOPES:
        raise InvalidRequestError(f"scope must be one of {', '.join(SCOPES)} (got {scope!r})")
    return scope


def list_repos(config: AnalyzerConfig) -> str:
    return format_repo_list(config.repos)


def get_repo_context(
    config: AnalyzerConfig,
    repos: list[str] | None = None,
    labels: list[str] | None = None,
) -> str:
    targets = select_repos(config.repos, repos, labels)
    if not targets:
        return NO_MATCHING_REPOS

    sections = [s for s in (read_repo_context(r) for r in targets) if s]
    if not sections:
        return NO_CONTEXT_FILES
    return "\n\n".join(sections)


async def search_code(
    config: AnalyzerConfig,
    query: str,
    repos: list[str] | None = None,
    labels: list[str] | None = None,
    glob: str | None = None,
    scope: str = "priority",
) -> str:
    """Regex search across the selected repositories."""
    _require_text(query, "query")
    _check_scope(scope)

    targets = select_repos(config.repos, repos, labels)
    if not targets:
        return NO_MATCHING_REPOS

    results = await search_repos_sequential(targets, query, config.search, scope=scope, glob=glob)
    return format_results(results)


async def find_api_callers(
    config: AnalyzerConfig,
    path: str,
    method: str | None = None,
    repos: list[str] | None = None,
    labels: list[str] | None = None,
    scope: str = "priority",
) -> str:
    """Find HTTP client calls to an API path, optionally narrowed by method."""
    _require_text(path, "path")
    _check_scope(scope)
    if method is not None:
        method = method.strip() or None

    targets = select_repos(config.repos, repos, labels)
    if not targets:
        return NO_MATCHING_REPOS

    pattern = join_patterns(build_api_caller_patterns(path))
    post_filter = partial(apply_method_filter, method=method) if method else None
    results = await search_repos_sequential(
        targets, pattern, config.search, scope=scope, post_filter=post_filter
    )
    return format_results(results)


async def find_cross_repo_dependencies(
    config: AnalyzerConfig,
    source_repo: str,
    target_repos: list[str] | None = None,
    path: str | None = None,
    scope: str = "priority",
) -> str:
    """Find references to *source_repo* (by name variants or *path*) in other repos."""
    _require_text(source_repo, "source_repo")
    _check_scope(scope)

    source = find_repo(config.repos, source_repo)
    if source is None:
        return f'Source repository "{source_repo}" not found or unavailable.'

    targets = select_dependency_targets(config.repos, source.name, target_repos)
    if not targets:
        return NO_TARGET_REPOS

    pattern = join_patterns(build_cross_repo_patterns(source.name, path))
    results = await search_repos_concurrent(targets, pattern, config.search, scope=scope)

    body = format_results(results)
    if body == NO_MATCHES:
        return f'No dependencies from "{source.name}" found in target repositories.'
    return f'Dependencies from "{source.name}" found in target repositories:\n\n{body}'
