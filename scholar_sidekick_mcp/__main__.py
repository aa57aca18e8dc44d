#!/usr/bin/env python3
"""
Scholar Sidekick MCP Server — stdio entry point.

Setup:
  1. pip install scholar-sidekick-mcp
  2. Optionally set RAPIDAPI_KEY (and RAPIDAPI_HOST) for RapidAPI access,
     or SCHOLAR_SIDEKICK_URL to target a self-hosted instance
  3. Add "scholar-sidekick-mcp" as a stdio server in your MCP client config
"""

import asyncio
import logging
import os
import sys

from .client import check_connection
from .config import resolve_config
from .server import create_mcp_server

logger = logging.getLogger("scholar_sidekick_mcp")


def main() -> None:
    # stdout carries the MCP stdio stream; diagnostics go to stderr.
    logging.basicConfig(
        level=os.environ.get("SCHOLAR_SIDEKICK_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = resolve_config()
        asyncio.run(check_connection(config.base_url))

        server = create_mcp_server(config)
        logger.info("Scholar Sidekick MCP server started (target: %s)", config.base_url)
        server.run()
    except Exception as e:
        logger.error("Fatal: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
