"""MCP transport for the analyzer tools."""
