"""exportCitation tool."""

from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from ..client import export_citation
from ..config import ClientConfig
from ..models import ExportFormat, ExportRequest
from .helpers import error_result, text_result


async def export_citation_tool(
    config: ClientConfig,
    text: str,
    format: ExportFormat,
    style: Optional[str] = None,
    lang: Optional[str] = None,
) -> CallToolResult:
    """Export identifiers and return the file body verbatim.

    The export body is not JSON, so only transport-level failures are errors.
    """
    result = await export_citation(
        config,
        ExportRequest(text=text, format=format, style=style, lang=lang),
    )
    if not result.ok:
        return error_result(result)
    return text_result(result.data if result.data is not None else "")


def register_export_tool(server: FastMCP, config: ClientConfig) -> None:
    @server.tool(
        name="exportCitation",
        title="Export Citation",
        description=(
            "Export academic citations to bibliography file formats: "
            "BibTeX (.bib), RIS, CSV, CSL-JSON, EndNote XML, EndNote Refer, "
            "RefWorks, MEDLINE/NBIB, Zotero RDF, or plain text."
        ),
        annotations={
            "title": "Export Citation",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def exportCitation(
        text: Annotated[
            str,
            Field(description="One or more identifiers (DOIs, PMIDs, ISBNs, etc.) separated by newlines"),
        ],
        format: Annotated[ExportFormat, Field(description="Export format")],
        style: Annotated[
            Optional[str],
            Field(description="Citation style (used only for txt export)"),
        ] = None,
        lang: Annotated[
            Optional[str],
            Field(description="Locale for formatting (e.g. en-US)"),
        ] = None,
    ) -> CallToolResult:
        return await export_citation_tool(config, text, format, style, lang)
