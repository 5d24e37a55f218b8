"""
Tool catalog for the Melodies MCP server.

Descriptors are static; the handlers behind them live in
melodies_mcp.dispatcher.
"""
from __future__ import annotations

from .catalog import DOWNLOAD_VERSIONS, TOOLS, ToolName, tool_names

__all__ = ["DOWNLOAD_VERSIONS", "TOOLS", "ToolName", "tool_names"]
