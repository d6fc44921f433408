from typing import Annotated, Any, Dict, List, Literal, Optional

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, page
from openavdb_mcp.utils.response_utils import to_text

MAX_BATCH = 20


async def search_airports(
    state: Annotated[Optional[str], Field(description='Two-letter US state code (e.g., "TX", "CA")')] = None,
    city: Annotated[Optional[str], Field(description="City name to filter by")] = None,
    min_runway: Annotated[Optional[int], Field(description="Minimum runway length in feet")] = None,
    towered: Annotated[Optional[bool], Field(description="Filter by control tower status")] = None,
    fbo_count: Annotated[Optional[int], Field(description="Exact number of FBOs at the airport")] = None,
    min_fbo_count: Annotated[Optional[int], Field(description="Minimum number of FBOs")] = None,
    max_fbo_count: Annotated[Optional[int], Field(description="Maximum number of FBOs")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    """Search US airports and return the matching page as JSON."""
    response = await call_api(
        "searching airports",
        lambda client: client.airports.list(
            state=state,
            city=city,
            min_runway=min_runway,
            towered=towered,
            fbo_count=fbo_count,
            min_fbo_count=min_fbo_count,
            max_fbo_count=max_fbo_count,
            **page(limit, offset),
        ),
    )
    return collection_text("airports", response, offset=offset)


async def get_airport(
    icao: Annotated[str, Field(description='ICAO code of the airport (e.g., "KAUS", "KJFK")')],
    include: Annotated[
        Optional[List[Literal["fbos", "fleet", "activity"]]],
        Field(description="Additional data to include: fbos (Fixed Base Operators), fleet (based aircraft), activity (flight activity)"),
    ] = None,
) -> str:
    """Airport details, with side-loaded relations and field descriptions when the API returns them."""
    response = await call_api(
        "getting airport",
        lambda client: client.airports.get(
            icao,
            include=",".join(include) if include else None,
            describe_fields=True,
        ),
    )
    result: Dict[str, Any] = {"airport": response.get("data")}
    if response.get("_included"):
        result["included"] = response["_included"]
    field_descriptions = (response.get("_meta") or {}).get("field_descriptions")
    if field_descriptions:
        result["field_descriptions"] = field_descriptions
    return to_text(result)


async def get_airport_fbos(
    icao: Annotated[str, Field(description='ICAO code of the airport (e.g., "KAUS")')],
) -> str:
    response = await call_api("getting FBOs", lambda client: client.airports.fbos(icao))
    return to_text(
        {
            "airport": icao.upper(),
            "fbos": response.get("data"),
            "total": (response.get("meta") or {}).get("total"),
        }
    )


async def get_airports_batch(
    icaos: Annotated[List[str], Field(description="Array of ICAO codes (max 20)")],
) -> str:
    """Fetch several airports at once through the comma-joined `icao` filter."""
    if len(icaos) > MAX_BATCH:
        raise ToolError(f"Error: Maximum {MAX_BATCH} ICAO codes per request")
    response = await call_api("getting airports", lambda client: client.airports.list(icao=",".join(icaos)))
    meta = response.get("meta") or {}
    return to_text(
        {
            "airports": response.get("data"),
            "found": meta.get("found"),
            "requested": meta.get("requested"),
            "not_found": meta.get("not_found"),
        }
    )


def get_tools() -> dict[str, Any]:
    return {
        "search_airports": {
            "func": search_airports,
            "title": "Search airports",
            "description": "Search for US airports by state, city, runway length, FBO count, or control tower status. Returns a list of airports matching the criteria.",
        },
        "get_airport": {
            "func": get_airport,
            "title": "Get airport",
            "description": "Get detailed information about a specific airport by ICAO code. Can optionally include FBOs, fleet, and activity data.",
        },
        "get_airport_fbos": {
            "func": get_airport_fbos,
            "title": "Get airport FBOs",
            "description": "Get all Fixed Base Operators (FBOs) at a specific airport. FBOs provide services like fuel, hangars, and ground handling.",
        },
        "get_airports_batch": {
            "func": get_airports_batch,
            "title": "Get airports (batch)",
            "description": "Get multiple airports by their ICAO codes in a single request. Efficient for comparing airports.",
        },
    }
