"""Repository descriptors and target selection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RepositoryDescriptor:
    name: str
    root: Path | None
    labels: tuple[str, ...] = ()
    description: str = ""
    context_files: tuple[str, ...] = ()
    priority_paths: tuple[str, ...] = ()
    available: bool = False


def select_repos(
    repos: list[RepositoryDescriptor],
    names: list[str] | None = None,
    labels: list[str] | None = None,
) -> list[RepositoryDescriptor]:
    """Filter available repos by name or label (OR). No filter = all available repos."""
    available = [r for r in repos if r.available]
    if not names and not labels:
        return available

    name_set = set(names or [])
    label_set = set(labels or [])
    return [r for r in available if r.name in name_set or label_set.intersection(r.labels)]


def select_dependency_targets(
    repos: list[RepositoryDescriptor],
    source_name: str,
    target_names: list[str] | None = None,
) -> list[RepositoryDescriptor]:
    """Available repos to scan for references to *source_name*.

    With *target_names* only those repos are returned; otherwise every
    available repo except the source itself.
    """
    candidates = [r for r in repos if r.available and r.name != source_name]
    if target_names:
        wanted = set(target_names)
        return [r for r in candidates if r.name in wanted]
    return candidates


def find_repo(repos: list[RepositoryDescriptor], name: str) -> RepositoryDescriptor | None:
    """Return the available repo called *name*, or None."""
    for repo in repos:
        if repo.name == name and repo.available:
            return repo
    return None
