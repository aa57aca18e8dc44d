"""
Pytest Configuration and Shared Fixtures
=========================================
Fake Scholar API backed by httpx.MockTransport, plus a default client config.
"""

from typing import Any, Dict, List, Optional, Union

import httpx
import pytest

from scholar_sidekick_mcp.config import ClientConfig

BASE_URL = "http://localhost:3000"


def json_response(
    body: Any, status: int = 200, headers: Optional[Dict[str, str]] = None
) -> httpx.Response:
    """JSON response echoing a fixed request id."""
    return httpx.Response(
        status,
        json=body,
        headers={"x-request-id": "test-rid-123", **(headers or {})},
    )


def text_response(
    body: str,
    status: int = 200,
    content_type: str = "text/plain; charset=utf-8",
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """Plain-text response echoing a fixed request id."""
    return httpx.Response(
        status,
        content=body.encode("utf-8"),
        headers={"content-type": content_type, "x-request-id": "test-rid-456", **(headers or {})},
    )


class FakeScholarApi:
    """Queue of canned responses (or exceptions) served to httpx in order."""

    def __init__(self) -> None:
        self.queue: List[Any] = []
        self.requests: List[httpx.Request] = []

    def respond(self, item: Union[httpx.Response, Exception, Any]) -> None:
        self.queue.append(item)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.queue.pop(0)
        if callable(item):
            return await item(request)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def scholar_api(monkeypatch) -> FakeScholarApi:
    """Route every httpx.AsyncClient through a FakeScholarApi."""
    api = FakeScholarApi()
    transport = httpx.MockTransport(api.handler)
    real_client = httpx.AsyncClient

    def _client(*args, **kwargs):
        kwargs["transport"] = transport
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)
    return api


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, timeout_ms=5000)
