"""resolveIdentifier tool."""

import json
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import format_citation
from ..config import ClientConfig
from ..models import FormatRequest
from .helpers import error_result, parse_format_payload, payload_failure, text_result


async def resolve_identifier_tool(config: ClientConfig, text: str) -> CallToolResult:
    """Resolve identifiers to bibliographic records and return them as a JSON array."""
    result = await format_citation(config, FormatRequest(text=text, output="json"))

    failed = payload_failure(result)
    if failed is not None:
        return error_result(failed)

    items = parse_format_payload(result.data).items or []
    return text_result(json.dumps(items, indent=2, ensure_ascii=False))


def register_resolve_tool(server: FastMCP, config: ClientConfig) -> None:
    @server.tool(
        name="resolveIdentifier",
        title="Resolve Identifier",
        description=(
            "Resolve academic identifiers (DOIs, PMIDs, PMCIDs, ISBNs, arXiv IDs, "
            "ISSNs, ADS bibcodes) to structured bibliographic metadata (title, authors, "
            "journal, year, identifiers, etc.) without formatting. Returns JSON objects."
        ),
        annotations={
            "title": "Resolve Identifier",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def resolveIdentifier(
        text: Annotated[
            str,
            Field(
                description=(
                    "One or more identifiers to resolve (DOIs, PMIDs, PMCIDs, ISBNs, arXiv IDs, "
                    "ISSNs, ADS bibcodes) separated by newlines"
                )
            ),
        ],
    ) -> CallToolResult:
        return await resolve_identifier_tool(config, text)
