from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_fleet(
    airport: Annotated[Optional[str], Field(description="ICAO code of airport")] = None,
    aircraft_type: Annotated[Optional[str], Field(description="Aircraft type category")] = None,
    owner_type: Annotated[
        Optional[str],
        Field(description='Owner type (e.g., "Individual", "Corporate", "LLC")'),
    ] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "searching fleet",
        lambda client: client.fleet.list(
            airport=airport,
            aircraft_type=aircraft_type,
            owner_type=owner_type,
            **page(limit, offset),
        ),
    )
    return collection_text("fleet", response)


async def get_fleet_stats(
    airport: Annotated[Optional[str], Field(description="ICAO code to get stats for")] = None,
    aircraft_type: Annotated[Optional[str], Field(description="Aircraft type to get stats for")] = None,
) -> str:
    response = await call_api(
        "getting fleet stats",
        lambda client: client.fleet.stats(airport=airport, aircraft_type=aircraft_type),
    )
    return data_text(response)


def get_tools() -> dict[str, Any]:
    return {
        "search_fleet": {
            "func": search_fleet,
            "title": "Search fleet",
            "description": "Search for based aircraft at airports by type or owner category.",
        },
        "get_fleet_stats": {
            "func": get_fleet_stats,
            "title": "Get fleet statistics",
            "description": "Get aggregated fleet statistics for an airport or aircraft type.",
        },
    }
