"""End-to-end registration through FastMCP."""

import json

import httpx
import pytest

from openavdb_mcp.server import create_server

EXPECTED_TOOLS = {
    "search_airports",
    "get_airport",
    "get_airport_fbos",
    "get_airports_batch",
    "search_fbos",
    "get_fbo",
    "get_fuel_prices",
    "search_aircraft",
    "get_aircraft",
    "search_charter_companies",
    "get_charter_company",
    "search_charter_brokers",
    "get_charter_broker",
    "search_flight_schools",
    "get_flight_school",
    "search_fractional_providers",
    "get_fractional_provider",
    "search_hangars",
    "get_hangar",
    "search_fleet",
    "get_fleet_stats",
    "search_flight_activity",
    "get_activity_stats",
    "list_watchlists",
    "get_watchlist",
    "get_watchlist_aircraft",
    "create_watchlist",
    "add_aircraft_to_watchlist",
    "get_auth_status",
    "start_login",
}


@pytest.fixture
def mcp():
    return create_server()


async def test_all_tools_registered(mcp):
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    assert set(tools) == EXPECTED_TOOLS
    assert all(tool.description for tool in tools.values())


async def test_tool_schema_carries_descriptions_and_bounds(mcp):
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    schema = tools["search_airports"].inputSchema["properties"]
    assert schema["limit"]["default"] == 20
    assert schema["limit"]["minimum"] == 1
    assert "state" in schema and "description" in schema["state"]
    assert tools["get_airport"].inputSchema["required"] == ["icao"]


async def test_call_tool_through_server(mcp, installed_client, transport):
    transport.responses = [httpx.Response(200, json={"data": [], "meta": {"total": 0}})]
    await mcp.call_tool("search_hangars", {"airport": "KAUS"})
    assert transport.requests[0].url.path == "/v1/hangars"
    assert transport.requests[0].url.params["airport"] == "KAUS"


async def test_resources_and_prompts_registered(mcp):
    resources = await mcp.list_resources()
    assert len(resources) == 8

    prompts = {prompt.name for prompt in await mcp.list_prompts()}
    assert prompts == {
        "analyze-airport",
        "compare-fbos",
        "find-aircraft",
        "research-charter",
        "find-flight-schools",
        "market-analysis",
        "create-fleet-watchlist",
    }


async def test_read_overview_resource(mcp):
    contents = list(await mcp.read_resource("openavdb://api/overview"))
    assert json.loads(contents[0].content)["name"] == "OpenAvDB API"


async def test_render_prompt(mcp):
    result = await mcp.get_prompt("find-flight-schools", {"location": "kaus"})
    assert "Find flight schools near or in: KAUS" in result.messages[0].content.text
