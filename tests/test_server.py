"""End-to-end tests through an in-memory MCP client session."""

import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from scholar_sidekick_mcp import SERVER_NAME
from scholar_sidekick_mcp.server import create_mcp_server
from tests.conftest import json_response, text_response


@pytest.mark.asyncio
async def test_lists_all_three_tools(config):
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        tools = (await client.list_tools()).tools

    assert sorted(t.name for t in tools) == ["exportCitation", "formatCitation", "resolveIdentifier"]
    export_schema = next(t for t in tools if t.name == "exportCitation").inputSchema
    assert set(export_schema["required"]) == {"text", "format"}


def test_server_name(config):
    assert create_mcp_server(config).name == SERVER_NAME


@pytest.mark.asyncio
async def test_format_citation_end_to_end(scholar_api, config):
    scholar_api.respond(
        json_response(
            {"ok": True, "formatter": "builtin", "styleUsed": "apa", "text": "Smith, J. (2020). Test."},
            headers={"x-scholar-formatter": "builtin", "x-scholar-style-used": "apa"},
        )
    )
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        result = await client.call_tool("formatCitation", {"text": "10.1038/test", "style": "apa"})

    assert not result.isError
    assert result.content[0].text == "Smith, J. (2020). Test."
    assert 'formatter":"builtin' in result.content[1].text


@pytest.mark.asyncio
async def test_export_citation_end_to_end(scholar_api, config):
    bibtex = "@article{Smith2020,\n  title={Test}\n}\n"
    scholar_api.respond(text_response(bibtex, content_type="text/x-bibtex; charset=utf-8"))
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        result = await client.call_tool("exportCitation", {"text": "10.1038/test", "format": "bib"})

    assert not result.isError
    assert result.content[0].text == bibtex


@pytest.mark.asyncio
async def test_resolve_identifier_end_to_end(scholar_api, config):
    items = [{"title": "Resolved Paper"}]
    scholar_api.respond(json_response({"ok": True, "items": items}))
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        result = await client.call_tool("resolveIdentifier", {"text": "10.1038/test"})

    assert not result.isError
    assert json.loads(result.content[0].text)[0]["title"] == "Resolved Paper"


@pytest.mark.asyncio
async def test_api_errors_surface_as_tool_errors(scholar_api, config):
    scholar_api.respond(json_response({"ok": False, "error": "Rate limit exceeded"}, status=429))
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        result = await client.call_tool("formatCitation", {"text": "10.1038/test"})

    assert result.isError is True
    assert "Rate limit exceeded" in result.content[0].text


@pytest.mark.asyncio
async def test_invalid_export_format_rejected_before_calling_api(scholar_api, config):
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        result = await client.call_tool("exportCitation", {"text": "10.1038/test", "format": "docx"})

    assert result.isError is True
    assert scholar_api.requests == []


@pytest.mark.asyncio
async def test_uses_environment_config_when_none_given(scholar_api, monkeypatch):
    monkeypatch.setenv("SCHOLAR_SIDEKICK_URL", "http://custom:9999/")
    monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
    scholar_api.respond(json_response({"ok": True}))
    server = create_mcp_server()

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        await client.call_tool("resolveIdentifier", {"text": "10.1038/test"})

    assert str(scholar_api.last_request.url) == "http://custom:9999/api/format"


@pytest.mark.asyncio
async def test_loosely_typed_payload_still_formats(scholar_api, config):
    scholar_api.respond(json_response({"ok": True, "text": "Smith J.", "warnings": "Normalized"}))
    server = create_mcp_server(config)

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        result = await client.call_tool("formatCitation", {"text": "10.1234/test"})

    assert not result.isError
    assert result.content[0].text == "Smith J."
