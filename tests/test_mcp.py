"""Tests for MCP server tool functions."""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture(autouse=True)
def _require_mcp():
    pytest.importorskip("mcp.server.fastmcp")


@pytest.fixture
def loaded(three_repos, monkeypatch):
    monkeypatch.setattr("multi_repo_analyzer.mcp.server._config", three_repos)
    return three_repos


class TestServerImport:
    def test_fastmcp_server_is_created(self):
        from multi_repo_analyzer.mcp import server

        assert server.FastMCP is not None
        assert server.mcp is not None


class TestConfigCaching:
    def test_loads_once(self, registry, monkeypatch):
        from multi_repo_analyzer.mcp import server

        monkeypatch.setattr(server, "_config", None)
        monkeypatch.setattr(server, "_config_path", registry)
        first = server._get_config()
        assert server._get_config() is first
        assert [r.name for r in first.repos] == ["sub-backend", "web-frontend", "ghost"]


class TestMCPTools:
    def test_list_repos(self, loaded):
        from multi_repo_analyzer.mcp.server import list_repos

        text = asyncio.run(list_repos())
        assert "## Configured Repositories" in text
        assert "- legacy [backend]" in text

    def test_get_repo_context_no_files(self, loaded):
        from multi_repo_analyzer.mcp.server import get_repo_context

        assert asyncio.run(get_repo_context(repos=["sub-backend"])) == "No context files found."

    def test_search_code(self, loaded, fake_rg, rg_output):
        from multi_repo_analyzer.mcp.server import search_code

        frontend = next(r for r in loaded.repos if r.name == "web-frontend")
        fake_rg.respond(frontend.root, 0, rg_output([(frontend.root / "a.ts", 7, "useQuery()")]))
        text = asyncio.run(search_code("useQuery", labels=["frontend"]))
        assert text == "## web-frontend (1 matches)\na.ts:7: useQuery()"

    def test_find_api_callers(self, loaded, fake_rg):
        from multi_repo_analyzer.mcp.server import find_api_callers

        assert asyncio.run(find_api_callers("/api/v1/users", method="GET")) == "No matches found."
        assert len(fake_rg.calls) == 2

    def test_find_cross_repo_dependencies_unknown_source(self, loaded, fake_rg):
        from multi_repo_analyzer.mcp.server import find_cross_repo_dependencies

        text = asyncio.run(find_cross_repo_dependencies("ghost-repo"))
        assert text == 'Source repository "ghost-repo" not found or unavailable.'

    def test_invalid_request_raises(self, loaded):
        from multi_repo_analyzer.core.operations import InvalidRequestError
        from multi_repo_analyzer.mcp.server import search_code

        with pytest.raises(InvalidRequestError):
            asyncio.run(search_code(""))
