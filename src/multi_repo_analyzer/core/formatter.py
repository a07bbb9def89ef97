"""Plain-text reports returned by the tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .repos import RepositoryDescriptor
    from .ripgrep import RepoSearchResult

NO_MATCHES = "No matches found."


def format_results(results: list[RepoSearchResult]) -> str:
    """Group matches by repository; repos without matches are omitted."""
    total = sum(len(r.matches) for r in results)
    if total == 0:
        return NO_MATCHES

    sections: list[str] = []
    for result in results:
        if not result.matches:
            continue
        lines = [f"## {result.repo_name} ({len(result.matches)} matches)"]
        lines.extend(f"{m.relative_path}:{m.line_number}: {m.line_text}" for m in result.matches)
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def format_repo_list(repos: list[RepositoryDescriptor]) -> str:
    lines = ["## Configured Repositories", ""]
    for repo in repos:
        labels = f" [{', '.join(repo.labels)}]" if repo.labels else ""
        status = "✓ available" if repo.available else "✗ path not found"

        lines.append(f"- {repo.name}{labels}")
        lines.append(f"  Path: {repo.root if repo.root else '(not configured)'}")
        lines.append(f"  Description: {repo.description}")
        if repo.priority_paths:
            lines.append(f"  Priority paths: {', '.join(repo.priority_paths)}")
        lines.append(f"  Status: {status}")
        lines.append("")
    return "\n".join(lines)
