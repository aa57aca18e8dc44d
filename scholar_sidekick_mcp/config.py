"""Client configuration resolved once from the process environment."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# ─── Configuration ───────────────────────────────────────────────────────────

DEFAULT_RAPIDAPI_HOST = "scholar-sidekick.p.rapidapi.com"
DEFAULT_TIMEOUT_MS = 30_000

ENV_BASE_URL = "SCHOLAR_SIDEKICK_URL"
ENV_TIMEOUT_MS = "SCHOLAR_SIDEKICK_TIMEOUT_MS"
ENV_RAPIDAPI_KEY = "RAPIDAPI_KEY"
ENV_RAPIDAPI_HOST = "RAPIDAPI_HOST"


class ClientConfig(BaseModel):
    """Connection settings shared by every tool registration."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = Field(..., description="API origin without a trailing slash")
    api_key: Optional[str] = Field(default=None, description="RapidAPI key")
    api_host: Optional[str] = Field(default=None, description="RapidAPI host, set only with a key")
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)


def _parse_timeout(raw: Optional[str]) -> int:
    """Return the timeout override in ms, or the default when unusable."""
    if not raw:
        return DEFAULT_TIMEOUT_MS
    try:
        value = int(float(raw.strip()))
    except (ValueError, OverflowError):
        return DEFAULT_TIMEOUT_MS
    return value if value > 0 else DEFAULT_TIMEOUT_MS


def resolve_config(env: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from environment-style input.

    Never fails: every missing or malformed value falls back to a default.

    Args:
        env: Variables to read. Defaults to ``os.environ``.

    Returns:
        ClientConfig: Immutable configuration for the API client.
    """
    if env is None:
        env = os.environ

    host_override = env.get(ENV_RAPIDAPI_HOST) or None
    base_url = env.get(ENV_BASE_URL) or f"https://{host_override or DEFAULT_RAPIDAPI_HOST}"
    if base_url.endswith("/"):
        base_url = base_url[:-1]

    api_key = env.get(ENV_RAPIDAPI_KEY) or None
    api_host = (host_override or DEFAULT_RAPIDAPI_HOST) if api_key else None

    return ClientConfig(
        base_url=base_url,
        api_key=api_key,
        api_host=api_host,
        timeout_ms=_parse_timeout(env.get(ENV_TIMEOUT_MS)),
    )
