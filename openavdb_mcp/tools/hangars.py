from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_hangars(
    airport: Annotated[Optional[str], Field(description="ICAO code of airport")] = None,
    min_sqft: Annotated[Optional[int], Field(description="Minimum hangar size in square feet")] = None,
    max_sqft: Annotated[Optional[int], Field(description="Maximum hangar size in square feet")] = None,
    available: Annotated[Optional[bool], Field(description="Filter by availability status")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "searching hangars",
        lambda client: client.hangars.list(
            airport=airport,
            min_sqft=min_sqft,
            max_sqft=max_sqft,
            available=available,
            **page(limit, offset),
        ),
    )
    return collection_text("hangars", response)


async def get_hangar(id: Annotated[str, Field(description="Hangar ID")]) -> str:
    return data_text(await call_api("getting hangar", lambda client: client.hangars.get(id)))


def get_tools() -> dict[str, Any]:
    return {
        "search_hangars": {
            "func": search_hangars,
            "title": "Search hangars",
            "description": "Search for aircraft hangars by airport, size, or availability.",
        },
        "get_hangar": {
            "func": get_hangar,
            "title": "Get hangar",
            "description": "Get detailed information about a specific hangar.",
        },
    }
