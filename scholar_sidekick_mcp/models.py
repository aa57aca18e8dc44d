"""Request, response and result models for the Scholar Sidekick API."""

import json
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Response headers copied into ApiResult.headers; nothing else is kept.
SCHOLAR_HEADER_NAMES = (
    "x-request-id",
    "x-scholar-cache",
    "x-scholar-formatter",
    "x-scholar-style-used",
    "x-csl-warning",
    "x-scholar-warnings",
)

OutputMode = Literal["text", "html", "json"]

ExportFormat = Literal[
    "bib",
    "ris",
    "csv",
    "csl",
    "endnote-refer",
    "endnote-xml",
    "refworks",
    "medline",
    "zotero-rdf",
    "txt",
]


# ─── Request Bodies ──────────────────────────────────────────────────────────


class FormatRequest(BaseModel):
    """Body posted to /api/format."""
    model_config = ConfigDict(extra="forbid")

    text: str
    style: Optional[str] = None
    lang: Optional[str] = None
    footnote: Optional[bool] = None
    output: Optional[OutputMode] = None


class ExportRequest(BaseModel):
    """Body posted to /api/export."""
    model_config = ConfigDict(extra="forbid")

    text: str
    format: ExportFormat
    style: Optional[str] = None
    lang: Optional[str] = None


# ─── Responses ───────────────────────────────────────────────────────────────


class FormatApiResponse(BaseModel):
    """JSON payload of /api/format. Owned by the backend; every field is optional.

    Pass-through fields accept any JSON value; callers render them with ``as_text``.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    ok: Optional[Any] = None
    text: Optional[Any] = None
    html: Optional[Any] = None
    items: Optional[Any] = None
    error: Optional[Any] = None
    message: Optional[Any] = None
    code: Optional[Any] = None
    formatter: Optional[Any] = None
    style_used: Optional[Any] = Field(default=None, alias="styleUsed")
    lang: Optional[Any] = None
    warnings: Optional[Any] = None


class ApiResult(BaseModel):
    """Outcome of a single API call.

    ``status`` is 0 when no HTTP response was received (timeout or
    transport failure). ``data`` is set only when ``ok`` is true.
    """

    ok: bool
    status: int
    data: Any = None
    error: Optional[str] = None
    request_id: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)


def as_text(value: Any) -> str:
    """Render a JSON value as message text: strings as-is, containers as JSON."""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
