"""multi-repo-analyzer — cross-repository code search over MCP."""

__version__ = "0.1.0"
