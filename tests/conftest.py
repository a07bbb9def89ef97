"""Shared fixtures: repository trees, descriptors and a fake ripgrep process."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path

import pytest

from multi_repo_analyzer.core.config import AnalyzerConfig, SearchConfig
from multi_repo_analyzer.core.repos import RepositoryDescriptor


class FakeProcess:
    def __init__(self, returncode: int, stdout: bytes = b"", stderr: bytes = b""):
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self):
        return self._stdout, self._stderr


class FakeRipgrep:
    """Stands in for asyncio.create_subprocess_exec; records every argv."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.responses: dict[str, tuple[int, bytes, bytes] | BaseException] = {}
        self.default: tuple[int, bytes, bytes] = (1, b"", b"")

    def respond(self, root, returncode=0, stdout=b"", stderr=b""):
        """Reply for any invocation whose last root lies under *root*."""
        self.responses[str(root)] = (returncode, stdout, stderr)

    def fail_spawn(self, root, exc: BaseException | None = None):
        self.responses[str(root)] = exc or FileNotFoundError("rg")

    def _lookup(self, args: list[str]):
        last_root = args[-1]
        for root, outcome in self.responses.items():
            if last_root == root or last_root.startswith(root + "/"):
                return outcome
        return self.default

    async def __call__(self, program, *args, **kwargs):
        self.calls.append([program, *args])
        outcome = self._lookup(list(args))
        if isinstance(outcome, BaseException):
            raise outcome
        returncode, stdout, stderr = outcome
        await asyncio.sleep(0)
        return FakeProcess(returncode, stdout, stderr)


@pytest.fixture
def fake_rg(monkeypatch):
    fake = FakeRipgrep()
    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake)
    return fake


@pytest.fixture
def rg_output():
    """Factory building ripgrep --json output for (path, line_number, text) tuples."""

    def _make(matches, needle: str | None = None) -> bytes:
        records = []
        paths_seen = []
        for path, line_number, text in matches:
            path = str(path)
            if path not in paths_seen:
                paths_seen.append(path)
                records.append({"type": "begin", "data": {"path": {"text": path}}})
            submatches = []
            if needle and needle in text:
                start = text.index(needle)
                submatches.append({"match": {"text": needle}, "start": start, "end": start + len(needle)})
            records.append(
                {
                    "type": "match",
                    "data": {
                        "path": {"text": path},
                        "lines": {"text": text + "\n"},
                        "line_number": line_number,
                        "absolute_offset": 0,
                        "submatches": submatches,
                    },
                }
            )
        for path in paths_seen:
            records.append({"type": "end", "data": {"path": {"text": path}}})
        records.append({"type": "summary", "data": {"stats": {"matches": len(matches)}}})
        return ("\n".join(json.dumps(r) for r in records) + "\n").encode()

    return _make


@pytest.fixture
def make_repo(tmp_path):
    """Factory creating a repository directory and its descriptor."""

    def _make(
        name: str,
        labels=(),
        priority_paths=(),
        context_files=(),
        available: bool = True,
        create_dirs=(),
    ) -> RepositoryDescriptor:
        root = tmp_path / name
        if available:
            root.mkdir(parents=True, exist_ok=True)
            for d in create_dirs:
                (root / d).mkdir(parents=True, exist_ok=True)
        return RepositoryDescriptor(
            name=name,
            root=root if available else None,
            labels=tuple(labels),
            description=f"{name} repository",
            context_files=tuple(context_files),
            priority_paths=tuple(priority_paths),
            available=available,
        )

    return _make


@pytest.fixture
def search_config():
    return SearchConfig(max_results=50, context_lines=0, exclude_patterns=())


@pytest.fixture
def three_repos(make_repo, search_config):
    """sub-backend and web-frontend are available, legacy is not."""
    repos = [
        make_repo("sub-backend", labels=["backend", "api"], priority_paths=["src"], create_dirs=["src"]),
        make_repo("legacy", labels=["backend"], available=False),
        make_repo("web-frontend", labels=["frontend"]),
    ]
    return AnalyzerConfig(repos=repos, search=search_config)


@pytest.fixture
def registry(tmp_path) -> Path:
    """A repos.toml with two resolvable repositories and one missing one."""
    (tmp_path / "sub-backend" / "src").mkdir(parents=True)
    (tmp_path / "sub-backend" / "README.md").write_text("# Sub backend\n\nServes /api/v1/users.\n")
    (tmp_path / "web-frontend").mkdir()

    config_path = tmp_path / "repos.toml"
    config_path.write_text(
        """
[repositories.sub-backend]
env_key = "MRA_TEST_SUB_BACKEND"
labels = ["backend"]
description = "Backend API"
context_files = ["README.md", "CLAUDE.md"]
priority_paths = ["src"]

[repositories.web-frontend]
path = "web-frontend"
labels = ["frontend"]
description = "Web client"

[repositories.ghost]
path = "does-not-exist"
labels = ["backend"]
description = "Removed long ago"

[search]
max_results = 20
context_lines = 1
exclude_patterns = ["node_modules"]
""",
        encoding="utf-8",
    )
    (tmp_path / ".env").write_text(f"MRA_TEST_SUB_BACKEND={tmp_path / 'sub-backend'}\n")
    return config_path


_ENV_VARS = ("MRA_TEST_SUB_BACKEND", "MULTI_REPO_ANALYZER_CONFIG")


@pytest.fixture(autouse=True)
def _clean_env():
    # load_dotenv writes straight into os.environ
    for var in _ENV_VARS:
        os.environ.pop(var, None)
    yield
    for var in _ENV_VARS:
        os.environ.pop(var, None)
