"""Core search orchestration for multi-repo-analyzer."""

from .config import AnalyzerConfig, ConfigError, SearchConfig, load_config, validate_config
from .cross_repo import search_repo, search_repos_concurrent, search_repos_sequential
from .formatter import format_repo_list, format_results
from .operations import (
    InvalidRequestError,
    find_api_callers,
    find_cross_repo_dependencies,
    get_repo_context,
    list_repos,
    search_code,
)
from .repos import RepositoryDescriptor, select_dependency_targets, select_repos
from .ripgrep import Match, RepoSearchResult, SearchError, resolve_roots, run_search

__all__ = [
    "AnalyzerConfig",
    "ConfigError",
    "SearchConfig",
    "load_config",
    "validate_config",
    "search_repo",
    "search_repos_concurrent",
    "search_repos_sequential",
    "format_repo_list",
    "format_results",
    "InvalidRequestError",
    "find_api_callers",
    "find_cross_repo_dependencies",
    "get_repo_context",
    "list_repos",
    "search_code",
    "RepositoryDescriptor",
    "select_dependency_targets",
    "select_repos",
    "Match",
    "RepoSearchResult",
    "SearchError",
    "resolve_roots",
    "run_search",
]
