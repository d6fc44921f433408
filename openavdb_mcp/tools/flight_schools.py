from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_flight_schools(
    state: Annotated[Optional[str], Field(description="Two-letter US state code")] = None,
    airport: Annotated[Optional[str], Field(description="ICAO code of airport")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "searching flight schools",
        lambda client: client.flight_schools.list(state=state, airport=airport, **page(limit, offset)),
    )
    return collection_text("flight_schools", response)


async def get_flight_school(id: Annotated[str, Field(description="Flight school ID")]) -> str:
    return data_text(await call_api("getting flight school", lambda client: client.flight_schools.get(id)))


def get_tools() -> dict[str, Any]:
    return {
        "search_flight_schools": {
            "func": search_flight_schools,
            "title": "Search flight schools",
            "description": "Search for flight training schools by state or airport.",
        },
        "get_flight_school": {
            "func": get_flight_school,
            "title": "Get flight school",
            "description": "Get detailed information about a specific flight school.",
        },
    }
