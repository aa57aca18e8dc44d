"""HTTP client for the Scholar Sidekick API.

Every call is a single POST with no retries. Failures of any kind are
returned as an ``ApiResult`` with ``ok=False``; nothing here raises.
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

import httpx

from . import USER_AGENT
from .config import DEFAULT_RAPIDAPI_HOST, ClientConfig
from .models import (
    SCHOLAR_HEADER_NAMES,
    ApiResult,
    ExportRequest,
    FormatRequest,
    as_text,
)

logger = logging.getLogger(__name__)

HEALTH_CHECK_TIMEOUT = 5.0

# ─── Helpers ─────────────────────────────────────────────────────────────────


def _get_headers(config: ClientConfig, request_id: str) -> Dict[str, str]:
    """Return outbound headers, adding RapidAPI credentials only when a key is set."""
    headers = {
        "Content-Type": "application/json",
        "x-request-id": request_id,
        "User-Agent": USER_AGENT,
    }
    if config.api_key:
        headers["X-RapidAPI-Key"] = config.api_key
        headers["X-RapidAPI-Host"] = config.api_host or DEFAULT_RAPIDAPI_HOST
    return headers


def _scholar_headers(response: httpx.Response) -> Dict[str, str]:
    """Pick the allow-listed Scholar headers that are present and non-empty."""
    found: Dict[str, str] = {}
    for name in SCHOLAR_HEADER_NAMES:
        value = response.headers.get(name)
        if value:
            found[name] = value
    return found


def _error_message(response: httpx.Response) -> str:
    """Extract an error message from a non-2xx response body."""
    fallback = f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    for key in ("error", "message"):
        if body.get(key) is not None:
            return as_text(body[key])
    return fallback


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


# ─── Core HTTP caller ────────────────────────────────────────────────────────


async def call_api(
    config: ClientConfig,
    path: str,
    body: Dict[str, Any],
    expect_raw_text: bool = False,
) -> ApiResult:
    """POST a JSON body to the Scholar API and classify the outcome.

    Args:
        config: Client configuration (base URL, credentials, timeout).
        path: API path beginning with '/', e.g. '/api/format'.
        body: JSON-serializable request body.
        expect_raw_text: Decode a successful body as text regardless of content type.

    Returns:
        ApiResult: ``ok=True`` with decoded ``data``, or ``ok=False`` with ``error``.
        ``status`` is 0 when no response was received.
    """
    url = f"{config.base_url}{path}"
    request_id = str(uuid.uuid4())
    timeout = config.timeout_ms / 1000

    logger.debug("POST %s (request-id: %s)", url, request_id)

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await asyncio.wait_for(
                client.post(url, headers=_get_headers(config, request_id), json=body),
                timeout=timeout,
            )
    except (httpx.TimeoutException, asyncio.TimeoutError):
        logger.warning("POST %s timed out after %dms (request-id: %s)", url, config.timeout_ms, request_id)
        return ApiResult(
            ok=False,
            status=0,
            error=f"Request timed out after {config.timeout_ms}ms",
            request_id=request_id,
        )
    except Exception as e:
        logger.warning("POST %s failed: %s (request-id: %s)", url, e, request_id)
        return ApiResult(
            ok=False,
            status=0,
            error=f"Network error: {e}",
            request_id=request_id,
        )

    headers = _scholar_headers(response)
    response_rid = response.headers.get("x-request-id") or request_id

    if not response.is_success:
        error = _error_message(response)
        logger.warning("POST %s returned %d: %s (request-id: %s)", url, response.status_code, error, response_rid)
        return ApiResult(
            ok=False,
            status=response.status_code,
            error=error,
            request_id=response_rid,
            headers=headers,
        )

    if expect_raw_text or not _is_json(response):
        data: Any = response.text
    else:
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("POST %s returned malformed JSON (request-id: %s)", url, response_rid)
            return ApiResult(
                ok=False,
                status=response.status_code,
                error=f"Invalid JSON response: {e}",
                request_id=response_rid,
                headers=headers,
            )

    return ApiResult(
        ok=True,
        status=response.status_code,
        data=data,
        request_id=response_rid,
        headers=headers,
    )


# ─── Convenience wrappers ────────────────────────────────────────────────────


async def format_citation(config: ClientConfig, request: FormatRequest) -> ApiResult:
    """Format identifiers into citations. ``data`` is the decoded JSON payload."""
    return await call_api(config, "/api/format", request.model_dump(exclude_none=True))


async def export_citation(config: ClientConfig, request: ExportRequest) -> ApiResult:
    """Export identifiers to a bibliography file format. ``data`` is raw text."""
    return await call_api(
        config,
        "/api/export",
        request.model_dump(exclude_none=True),
        expect_raw_text=True,
    )


# ─── Startup probe ───────────────────────────────────────────────────────────


async def check_connection(base_url: str) -> Optional[int]:
    """Probe ``<base_url>/api/health`` and log the outcome.

    Returns the HTTP status, or None when the server could not be reached.
    Never raises: an unreachable backend only produces a warning.
    """
    try:
        async with httpx.AsyncClient(timeout=HEALTH_CHECK_TIMEOUT) as client:
            response = await client.get(f"{base_url}/api/health")
    except Exception:
        logger.warning(
            "Cannot reach Scholar Sidekick at %s. "
            "Ensure the server is running or set SCHOLAR_SIDEKICK_URL.",
            base_url,
        )
        return None

    if response.is_success:
        logger.info("Connected to Scholar Sidekick at %s", base_url)
    else:
        logger.warning("Scholar Sidekick returned HTTP %d at %s", response.status_code, base_url)
    return response.status_code
