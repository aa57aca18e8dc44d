"""MCP server assembly."""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from . import SERVER_NAME
from .config import ClientConfig, resolve_config
from .tools import register_export_tool, register_format_tool, register_resolve_tool


def create_mcp_server(config: Optional[ClientConfig] = None) -> FastMCP:
    """Create a FastMCP server with the Scholar tools registered.

    Args:
        config: Client configuration. Resolved from the environment when omitted.

    Returns:
        FastMCP: Server ready to ``run()`` on any MCP transport.
    """
    cfg = config or resolve_config()

    server = FastMCP(SERVER_NAME)
    register_format_tool(server, cfg)
    register_export_tool(server, cfg)
    register_resolve_tool(server, cfg)
    return server
