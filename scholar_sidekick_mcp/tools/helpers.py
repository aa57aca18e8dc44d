"""Result builders shared by the Scholar tools."""

import json
from typing import Any, Callable, Dict, Optional, Tuple

from mcp.types import CallToolResult, TextContent
from pydantic import ValidationError

from ..models import ApiResult, FormatApiResponse, as_text

# Metadata key -> response header it is read from.
_METADATA_HEADERS = (
    ("formatter", "x-scholar-formatter"),
    ("styleUsed", "x-scholar-style-used"),
    ("cslWarning", "x-csl-warning"),
    ("warnings", "x-scholar-warnings"),
)


def text_result(*texts: str) -> CallToolResult:
    """Build a successful tool result with one text block per argument."""
    return CallToolResult(content=[TextContent(type="text", text=t) for t in texts])


def error_result(result: ApiResult) -> CallToolResult:
    """Build an MCP error result from a failed API call."""
    parts = []
    if result.error:
        parts.append(result.error)
    if result.request_id:
        parts.append(f"(request-id: {result.request_id})")
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error: {' '.join(parts)}")],
        isError=True,
    )


def build_metadata(result: ApiResult) -> Dict[str, str]:
    """Summarize request id and Scholar response headers, omitting absent ones."""
    meta: Dict[str, str] = {}
    if result.request_id:
        meta["requestId"] = result.request_id
    for key, header in _METADATA_HEADERS:
        if result.headers.get(header):
            meta[key] = result.headers[header]
    return meta


def parse_format_payload(data: Any) -> FormatApiResponse:
    """Coerce the decoded /api/format body into a FormatApiResponse.

    A non-JSON body (served with another content type) is taken as plain text.
    """
    if isinstance(data, dict):
        try:
            return FormatApiResponse.model_validate(data)
        except ValidationError:
            return FormatApiResponse.model_construct(**data)
    if isinstance(data, str):
        return FormatApiResponse(text=data)
    return FormatApiResponse()


def payload_failure(result: ApiResult) -> Optional[ApiResult]:
    """Return the result to report as an error, or None if the call succeeded.

    The backend may answer 2xx with ``ok: false`` in the payload; that counts
    as a failure too, and the payload's own error message wins.
    """
    if not result.ok:
        return result
    payload = parse_format_payload(result.data)
    if payload.ok is False:
        error = as_text(payload.error) if payload.error is not None else result.error
        return result.model_copy(update={"error": error})
    return None


def _text_field(name: str) -> Callable[[FormatApiResponse], Optional[str]]:
    def pick(payload: FormatApiResponse) -> Optional[str]:
        value = getattr(payload, name, None)
        return None if value is None else as_text(value)
    return pick


def _dump_items(payload: FormatApiResponse) -> Optional[str]:
    items = getattr(payload, "items", None)
    if items is None:
        return None
    return json.dumps(items, indent=2, ensure_ascii=False)


_OUTPUT_ORDER: Tuple[Tuple[str, Callable[[FormatApiResponse], Optional[str]]], ...] = (
    ("text", _text_field("text")),
    ("html", _text_field("html")),
    ("items", _dump_items),
)


def select_output(payload: FormatApiResponse) -> str:
    """Pick the first representation present: text, then html, then items as JSON."""
    for _name, pick in _OUTPUT_ORDER:
        value = pick(payload)
        if value is not None:
            return value
    return ""
