from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_aircraft(
    type: Annotated[
        Optional[str],
        Field(description='Aircraft type (e.g., "Fixed Wing Single-Engine", "Rotorcraft")'),
    ] = None,
    manufacturer: Annotated[Optional[str], Field(description="Aircraft manufacturer name")] = None,
    based_airport: Annotated[Optional[str], Field(description="ICAO code of home airport")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    """Search the FAA aircraft registry."""
    response = await call_api(
        "searching aircraft",
        lambda client: client.aircraft.list(
            type=type,
            manufacturer=manufacturer,
            based_airport=based_airport,
            **page(limit, offset),
        ),
    )
    return collection_text("aircraft", response)


async def get_aircraft(
    registration: Annotated[str, Field(description='Aircraft N-number/registration (e.g., "N12345")')],
) -> str:
    return data_text(await call_api("getting aircraft", lambda client: client.aircraft.get(registration)))


def get_tools() -> dict[str, Any]:
    return {
        "search_aircraft": {
            "func": search_aircraft,
            "title": "Search aircraft",
            "description": "Search the FAA aircraft registry by type, manufacturer, or home airport.",
        },
        "get_aircraft": {
            "func": get_aircraft,
            "title": "Get aircraft",
            "description": "Get detailed information about a specific aircraft by its N-number (registration).",
        },
    }
