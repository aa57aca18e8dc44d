"""formatCitation tool."""

import json
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import format_citation
from ..config import ClientConfig
from ..models import FormatRequest, OutputMode
from .helpers import (
    build_metadata,
    error_result,
    parse_format_payload,
    payload_failure,
    select_output,
    text_result,
)


async def format_citation_tool(
    config: ClientConfig,
    text: str,
    style: Optional[str] = None,
    lang: Optional[str] = None,
    footnote: Optional[bool] = None,
    output: Optional[OutputMode] = None,
) -> CallToolResult:
    """Format identifiers and wrap the citation plus a metadata block."""
    result = await format_citation(
        config,
        FormatRequest(
            text=text,
            style=style,
            lang=lang,
            footnote=footnote,
            output=output or "text",
        ),
    )

    failed = payload_failure(result)
    if failed is not None:
        return error_result(failed)

    blocks = [select_output(parse_format_payload(result.data))]
    metadata = build_metadata(result)
    if metadata:
        blocks.append(f"\n---\nMetadata: {json.dumps(metadata, separators=(',', ':'), ensure_ascii=False)}")
    return text_result(*blocks)


def register_format_tool(server: FastMCP, config: ClientConfig) -> None:
    @server.tool(
        name="formatCitation",
        title="Format Citation",
        description=(
            "Format academic citations from identifiers (DOIs, PMIDs, ISBNs, arXiv IDs, etc.) "
            "into a specific citation style. Returns formatted text, HTML, or structured JSON. "
            "Supports Vancouver, AMA, APA, IEEE, CSE, and 10,000+ CSL styles."
        ),
        annotations={
            "title": "Format Citation",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def formatCitation(
        text: Annotated[
            str,
            Field(description="One or more identifiers (DOIs, PMIDs, ISBNs, arXiv IDs, etc.) separated by newlines"),
        ],
        style: Annotated[
            Optional[str],
            Field(description="Citation style: vancouver (default), ama, apa, ieee, cse, or any CSL style ID"),
        ] = None,
        lang: Annotated[
            Optional[str],
            Field(description="Locale for formatting (e.g. en-US, en-GB, fr-FR)"),
        ] = None,
        footnote: Annotated[
            Optional[bool],
            Field(description="Format as footnotes instead of bibliography entries"),
        ] = None,
        output: Annotated[
            Optional[OutputMode],
            Field(description="Output format (default: text)"),
        ] = None,
    ) -> CallToolResult:
        return await format_citation_tool(config, text, style, lang, footnote, output)
