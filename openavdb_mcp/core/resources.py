"""Browsable MCP resources.

One static overview of the API plus a handful of sample collections that are
fetched live each time they are read. A failed fetch is reported inside the
resource body rather than raised, so browsing never errors out.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, List

from mcp.server.fastmcp.resources import FunctionResource, Resource

from openavdb_mcp.core.api_client import ApiClient, ApiResponse, get_client
from openavdb_mcp.utils.response_utils import format_error, to_text

logger = logging.getLogger(__name__)

HUB_AIRPORTS = "KJFK,KLAX,KORD,KDFW,KDEN,KATL,KSFO,KLAS,KMIA,KPHX"

API_OVERVIEW: Dict[str, Any] = {
    "name": "OpenAvDB API",
    "version": "2.0.0",
    "description": "Aviation database API providing data on US airports, FBOs, aircraft, and more.",
    "collections": {
        "airports": {
            "description": "US airports with runway, services, and ownership data",
            "count": "4,700+",
            "endpoint": "/v1/airports",
        },
        "fbos": {
            "description": "Fixed Base Operators with fuel prices and services",
            "count": "3,800+",
            "endpoint": "/v1/fbos",
        },
        "aircraft": {
            "description": "FAA aircraft registry with owner and type data",
            "count": "300,000+",
            "endpoint": "/v1/aircraft",
        },
        "charter": {
            "description": "Part 135 charter companies and brokers",
            "companies": "1,100+",
            "brokers": "800+",
            "endpoint": "/v1/charter/companies",
        },
        "flightSchools": {
            "description": "Flight training schools",
            "count": "2,900+",
            "endpoint": "/v1/flight-schools",
        },
        "fleet": {"description": "Based aircraft fleet analytics", "endpoint": "/v1/fleet"},
        "activity": {"description": "Flight activity data", "endpoint": "/v1/activity"},
    },
    "documentation": "https://openavdb-prod.web.app/api/docs",
}


async def read_api_overview() -> str:
    return to_text(API_OVERVIEW)


def sample_reader(
    title: str,
    what: str,
    key: str,
    request: Callable[[ApiClient], Awaitable[ApiResponse]],
    total_key: str = "total",
) -> Callable[[], Awaitable[str]]:
    """Build a reader that fetches one sample page and wraps it under `key`."""

    async def _read() -> str:
        try:
            response = await request(get_client())
        except Exception as e:
            logger.warning("Resource fetch failed for %s: %r", title, e)
            return to_text({"error": format_error(f"fetching {what}", e)})
        payload: Dict[str, Any] = {"title": title}
        if total_key:
            payload[total_key] = (response.get("meta") or {}).get("total")
        payload[key] = response.get("data")
        return to_text(payload)

    return _read


def _state_airports(state: str, state_name: str) -> Callable[[], Awaitable[str]]:
    return sample_reader(
        f"Top 20 {state_name} Airports",
        f"{state_name} airports",
        "airports",
        lambda client: client.airports.list(state=state, limit=20),
        total_key="total_in_state",
    )


# (name, uri, description, reader)
RESOURCE_DEFINITIONS: List[tuple] = [
    ("api-overview", "openavdb://api/overview", "Collections and endpoints offered by the OpenAvDB API", read_api_overview),
    ("top-airports-texas", "openavdb://airports/state/TX", "Top 20 Texas airports", _state_airports("TX", "Texas")),
    ("top-airports-california", "openavdb://airports/state/CA", "Top 20 California airports", _state_airports("CA", "California")),
    ("top-airports-florida", "openavdb://airports/state/FL", "Top 20 Florida airports", _state_airports("FL", "Florida")),
    (
        "major-hub-airports",
        "openavdb://airports/hubs",
        "Major US hub airports",
        sample_reader(
            "Major US Hub Airports",
            "hub airports",
            "airports",
            lambda client: client.airports.list(icao=HUB_AIRPORTS),
            total_key="",
        ),
    ),
    (
        "aircraft-cessna",
        "openavdb://aircraft/manufacturer/CESSNA",
        "Sample of Cessna aircraft in the FAA registry",
        sample_reader(
            "Cessna Aircraft (Sample)",
            "Cessna aircraft",
            "aircraft",
            lambda client: client.aircraft.list(manufacturer="CESSNA", limit=20),
        ),
    ),
    (
        "charter-companies",
        "openavdb://charter/companies",
        "Sample of Part 135 charter companies",
        sample_reader(
            "Charter Companies (Sample)",
            "charter companies",
            "companies",
            lambda client: client.charter.companies(limit=20),
        ),
    ),
    (
        "flight-schools",
        "openavdb://flight-schools",
        "Sample of flight training schools",
        sample_reader(
            "Flight Schools (Sample)",
            "flight schools",
            "schools",
            lambda client: client.flight_schools.list(limit=20),
        ),
    ),
]


def get_resources() -> List[Resource]:
    return [
        FunctionResource(uri=uri, name=name, description=description, mime_type="application/json", fn=reader)
        for name, uri, description, reader in RESOURCE_DEFINITIONS
    ]
