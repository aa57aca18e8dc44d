"""
Scholar Sidekick MCP Server
Connects MCP clients (Claude Desktop, IDE agents) to the Scholar Sidekick
citation API: format citations, export bibliography files, resolve identifiers.
"""

__version__ = "0.3.0"

SERVER_NAME = "scholar-sidekick"
USER_AGENT = f"scholar-sidekick-mcp/{__version__}"
