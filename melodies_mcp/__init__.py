"""Melodies music-catalog API exposed as MCP tools."""
from __future__ import annotations

__version__ = "1.0.0"
