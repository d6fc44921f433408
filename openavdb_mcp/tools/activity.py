from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_flight_activity(
    airport: Annotated[Optional[str], Field(description="ICAO code of airport")] = None,
    operation_type: Annotated[Optional[str], Field(description='Type of operation (e.g., "IFR", "VFR")')] = None,
    start_date: Annotated[Optional[str], Field(description="Start date (YYYY-MM-DD format)")] = None,
    end_date: Annotated[Optional[str], Field(description="End date (YYYY-MM-DD format)")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "searching flight activity",
        lambda client: client.activity.list(
            airport=airport,
            operation_type=operation_type,
            start_date=start_date,
            end_date=end_date,
            **page(limit, offset),
        ),
    )
    return collection_text("activity", response)


async def get_activity_stats(
    airport: Annotated[Optional[str], Field(description="ICAO code to get stats for")] = None,
    period: Annotated[
        Optional[str],
        Field(description='Time period (e.g., "day", "week", "month", "year")'),
    ] = None,
) -> str:
    response = await call_api(
        "getting activity stats",
        lambda client: client.activity.stats(airport=airport, period=period),
    )
    return data_text(response)


def get_tools() -> dict[str, Any]:
    return {
        "search_flight_activity": {
            "func": search_flight_activity,
            "title": "Search flight activity",
            "description": "Search for flight activity records by airport, operation type, or date range.",
        },
        "get_activity_stats": {
            "func": get_activity_stats,
            "title": "Get activity statistics",
            "description": "Get aggregated flight activity statistics for an airport.",
        },
    }
