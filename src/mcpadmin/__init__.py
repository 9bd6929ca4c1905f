"""Inspect and manage MCP server definitions across projects."""

__version__ = "0.1.0"
