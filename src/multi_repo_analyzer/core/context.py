"""Context documents — README.md, CLAUDE.md and friends for each repository."""

from __future__ import annotations

import logging
from pathlib import Path

from .repos import RepositoryDescriptor

logger = logging.getLogger(__name__)


def read_repo_context(repo: RepositoryDescriptor) -> str:
    """Return the repo's context files as a Markdown section, or "" if none were read."""
    if not repo.context_files or repo.root is None:
        return ""

    parts: list[str] = []
    for name in repo.context_files:
        file_path = Path(repo.root) / name
        try:
            content = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Context file not found: %s/%s", repo.name, name)
            continue
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read context file %s/%s: %s", repo.name, name, exc)
            continue
        parts.append(f"### {name}\n\n{content.rstrip()}")

    if not parts:
        return ""
    return f"## {repo.name}\n\n" + "\n\n".join(parts)
