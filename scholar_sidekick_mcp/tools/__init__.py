"""Scholar Sidekick MCP tools."""

from .export import register_export_tool
from .format import register_format_tool
from .resolve import register_resolve_tool

__all__ = ["register_export_tool", "register_format_tool", "register_resolve_tool"]
