"""Configuration management — TOML repository registry plus .env path bindings."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .repos import RepositoryDescriptor

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MULTI_REPO_ANALYZER_CONFIG"
DEFAULT_CONFIG_NAME = "repos.toml"

DEFAULT_MAX_RESULTS = 50
DEFAULT_CONTEXT_LINES = 3


class ConfigError(Exception):
    """The registry file is missing or malformed."""


@dataclass(frozen=True)
class SearchConfig:
    max_results: int = DEFAULT_MAX_RESULTS
    context_lines: int = DEFAULT_CONTEXT_LINES
    exclude_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class RepoConfig:
    """One ``[repositories.<name>]`` table before path resolution."""

    name: str
    env_key: str | None = None
    path: str | None = None
    labels: tuple[str, ...] = ()
    description: str = ""
    context_files: tuple[str, ...] = ()
    priority_paths: tuple[str, ...] = ()


@dataclass
class ValidationResult:
    repos: list[RepoConfig] = field(default_factory=list)
    search: SearchConfig = field(default_factory=SearchConfig)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class AnalyzerConfig:
    repos: list[RepositoryDescriptor]
    search: SearchConfig = field(default_factory=SearchConfig)
    source: Path | None = None


def default_config_path() -> Path:
    """Registry location: $MULTI_REPO_ANALYZER_CONFIG, else ./repos.toml."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _string_list(value: Any, where: str, errors: list[str]) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        errors.append(f"{where} must be a list of strings")
        return ()
    return tuple(value)


def _optional_string(value: Any, where: str, errors: list[str]) -> str | None:
    if value is None or isinstance(value, str):
        return value
    errors.append(f"{where} must be a string")
    return None


def _validate_repo(name: str, raw: Any, errors: list[str]) -> RepoConfig | None:
    where = f"repositories.{name}"
    if not isinstance(raw, dict):
        errors.append(f"{where} must be a table")
        return None

    env_key = _optional_string(raw.get("env_key"), f"{where}.env_key", errors)
    path = _optional_string(raw.get("path"), f"{where}.path", errors)
    if not env_key and not path:
        errors.append(f"{where} needs either env_key or path")

    description = raw.get("description", "")
    if not isinstance(description, str):
        errors.append(f"{where}.description must be a string")
        description = ""

    return RepoConfig(
        name=name,
        env_key=env_key,
        path=path,
        labels=_string_list(raw.get("labels"), f"{where}.labels", errors),
        description=description,
        context_files=_string_list(raw.get("context_files"), f"{where}.context_files", errors),
        priority_paths=_string_list(raw.get("priority_paths"), f"{where}.priority_paths", errors),
    )


def _validate_search(raw: Any, errors: list[str]) -> SearchConfig:
    if raw is None:
        return SearchConfig()
    if not isinstance(raw, dict):
        errors.append("search must be a table")
        return SearchConfig()

    max_results = raw.get("max_results", DEFAULT_MAX_RESULTS)
    if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results <= 0:
        errors.append("search.max_results must be a positive integer")
        max_results = DEFAULT_MAX_RESULTS

    context_lines = raw.get("context_lines", DEFAULT_CONTEXT_LINES)
    if isinstance(context_lines, bool) or not isinstance(context_lines, int) or context_lines < 0:
        errors.append("search.context_lines must be a non-negative integer")
        context_lines = DEFAULT_CONTEXT_LINES

    return SearchConfig(
        max_results=max_results,
        context_lines=context_lines,
        exclude_patterns=_string_list(raw.get("exclude_patterns"), "search.exclude_patterns", errors),
    )


def validate_config(raw: dict[str, Any]) -> ValidationResult:
    """Check the parsed registry and collect every problem found."""
    result = ValidationResult()

    repositories = raw.get("repositories")
    if not isinstance(repositories, dict):
        result.errors.append("repositories table is required")
        repositories = {}

    for name, repo_raw in repositories.items():
        repo = _validate_repo(name, repo_raw, result.errors)
        if repo is not None:
            result.repos.append(repo)

    result.search = _validate_search(raw.get("search"), result.errors)
    return result


def _resolve_repo(repo: RepoConfig, base_dir: Path) -> RepositoryDescriptor:
    """Turn a RepoConfig into a descriptor; unresolved paths mark it unavailable."""
    raw_path: str | None
    if repo.env_key:
        raw_path = os.environ.get(repo.env_key)
        if not raw_path:
            logger.warning('env_key "%s" is not defined for %s', repo.env_key, repo.name)
    else:
        raw_path = repo.path

    root: Path | None = None
    available = False
    if raw_path:
        root = Path(os.path.expandvars(raw_path)).expanduser()
        if not root.is_absolute():
            root = base_dir / root
        available = root.exists()
        if not available:
            logger.warning("Path not found for %s: %s", repo.name, root)

    return RepositoryDescriptor(
        name=repo.name,
        root=root,
        labels=repo.labels,
        description=repo.description,
        context_files=repo.context_files,
        priority_paths=repo.priority_paths,
        available=available,
    )


def load_config(config_path: str | Path | None = None) -> AnalyzerConfig:
    """Load the registry, resolve each repository root and apply search defaults.

    A ``.env`` file beside the registry is loaded first; variables already set
    in the environment take precedence.
    """
    path = Path(config_path).expanduser() if config_path else default_config_path()
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    load_dotenv(path.parent / ".env", override=False)

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    validation = validate_config(raw)
    if not validation.ok:
        raise ConfigError(f"Invalid config {path}:\n  " + "\n  ".join(validation.errors))

    base_dir = path.parent.resolve()
    repos = [_resolve_repo(r, base_dir) for r in validation.repos]
    return AnalyzerConfig(repos=repos, search=validation.search, source=path)
