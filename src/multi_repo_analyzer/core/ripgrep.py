"""Search executor — runs ripgrep as a child process and parses its JSON output."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .repos import RepositoryDescriptor

logger = logging.getLogger(__name__)

RG_BINARY = "rg"
SCOPES = ("priority", "full")


class SearchError(Exception):
    """ripgrep could not be started or exited with an error status."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


@dataclass
class SubMatch:
    text: str
    start: int
    end: int


@dataclass
class Match:
    absolute_path: str
    line_number: int
    line_text: str
    relative_path: str = ""
    submatches: list[SubMatch] = field(default_factory=list)


@dataclass
class RepoSearchResult:
    repo_name: str
    matches: list[Match] = field(default_factory=list)


def build_rg_args(
    pattern: str,
    roots: list[str | Path],
    glob: str | None = None,
    context_lines: int = 0,
    max_results: int = 50,
    exclude_patterns: list[str] | None = None,
) -> list[str]:
    """Build the ripgrep argument list (without the binary itself)."""
    args = ["--json", "--no-heading"]
    if context_lines > 0:
        args.extend(["--context", str(context_lines)])
    args.extend(["--max-count", str(max_results)])
    for exclude in exclude_patterns or []:
        args.extend(["--glob", f"!{exclude}"])
    if glob:
        args.extend(["--glob", glob])
    # patterns may start with "-" (e.g. "->render")
    args.append("--")
    args.append(pattern)
    args.extend(str(r) for r in roots)
    return args


def _arbitrary_text(data: dict[str, Any] | None) -> str:
    """Decode ripgrep's {"text": ...} / {"bytes": base64} union."""
    if not data:
        return ""
    if "text" in data:
        return data["text"]
    raw = base64.b64decode(data.get("bytes", ""))
    return raw.decode("utf-8", errors="replace")


def parse_rg_output(output: str) -> list[Match]:
    """Parse ripgrep --json output, keeping only ``match`` records."""
    matches: list[Match] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            logger.debug("Skipping non-JSON line from ripgrep: %s", line[:100])
            continue
        if record.get("type") != "match":
            continue

        data = record["data"]
        matches.append(
            Match(
                absolute_path=_arbitrary_text(data.get("path")),
                line_number=data["line_number"],
                line_text=_arbitrary_text(data.get("lines")).rstrip(),
                submatches=[
                    SubMatch(text=_arbitrary_text(s.get("match")), start=s["start"], end=s["end"])
                    for s in data.get("submatches", [])
                ],
            )
        )
    return matches


async def run_search(
    pattern: str,
    roots: list[str | Path],
    *,
    glob: str | None = None,
    context_lines: int = 0,
    max_results: int = 50,
    exclude_patterns: list[str] | None = None,
) -> list[Match]:
    """Run ripgrep once over *roots* and return its matches.

    Exit status 1 means "no matches" and yields an empty list. Any other
    non-zero status, or failure to spawn ``rg``, raises SearchError.
    """
    if not roots:
        raise ValueError("run_search requires at least one root")

    args = build_rg_args(pattern, roots, glob, context_lines, max_results, exclude_patterns)
    try:
        proc = await asyncio.create_subprocess_exec(
            RG_BINARY,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise SearchError(f"Failed to spawn ripgrep: {exc}") from exc

    stdout, stderr = await proc.communicate()
    err_text = stderr.decode("utf-8", errors="replace").strip() if stderr else ""

    if proc.returncode not in (0, 1):
        raise SearchError(
            f"ripgrep failed (code {proc.returncode}): {err_text}",
            returncode=proc.returncode,
            stderr=err_text,
        )
    if proc.returncode == 1 or not stdout:
        return []
    return parse_rg_output(stdout.decode("utf-8", errors="replace"))


def resolve_roots(repo: RepositoryDescriptor, scope: str = "priority") -> list[Path]:
    """Pick the directories to search for *repo*.

    ``full`` searches the whole repository. ``priority`` searches the configured
    priority paths that exist on disk and falls back to the repository root
    when none are configured or none exist.
    """
    if scope not in SCOPES:
        raise ValueError(f"Unknown scope: {scope!r} (expected 'priority' or 'full')")
    if repo.root is None:
        raise ValueError(f"Repository {repo.name!r} has no resolved root")

    root = Path(repo.root)
    if scope == "full" or not repo.priority_paths:
        return [root]

    existing = [root / p for p in repo.priority_paths if (root / p).exists()]
    if not existing:
        logger.debug("No priority paths exist for %s, searching repository root", repo.name)
        return [root]
    return existing
