"""Aircraft watchlist tools. All of them need a signed-in user."""
from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import call_api, data_text
from openavdb_mcp.utils.response_utils import to_text

WatchlistId = Annotated[str, Field(description="Watchlist ID")]


async def list_watchlists() -> str:
    response = await call_api("listing watchlists", lambda client: client.watchlists.list())
    return to_text(
        {
            "watchlists": response.get("data"),
            "total": (response.get("meta") or {}).get("total"),
        }
    )


async def get_watchlist(id: WatchlistId) -> str:
    return data_text(await call_api("getting watchlist", lambda client: client.watchlists.get(id)))


async def get_watchlist_aircraft(id: WatchlistId) -> str:
    response = await call_api("getting watchlist aircraft", lambda client: client.watchlists.aircraft(id))
    return to_text(
        {
            "watchlist_id": id,
            "aircraft": response.get("data"),
            "total": (response.get("meta") or {}).get("total"),
        }
    )


async def create_watchlist(
    name: Annotated[str, Field(description="Name for the watchlist")],
    description: Annotated[Optional[str], Field(description="Optional description")] = None,
) -> str:
    response = await call_api(
        "creating watchlist",
        lambda client: client.watchlists.create(name=name, description=description),
    )
    return to_text({"message": "Watchlist created successfully", "watchlist": response.get("data")})


async def add_aircraft_to_watchlist(
    watchlist_id: Annotated[str, Field(description="ID of the watchlist")],
    registration: Annotated[str, Field(description="Aircraft N-number/registration")],
) -> str:
    response = await call_api(
        "adding aircraft to watchlist",
        lambda client: client.watchlists.add_aircraft(watchlist_id, registration),
    )
    return to_text({"message": "Aircraft added to watchlist", "result": response.get("data")})


def get_tools() -> dict[str, Any]:
    return {
        "list_watchlists": {
            "func": list_watchlists,
            "title": "List watchlists",
            "description": "List all aircraft watchlists for the authenticated user.",
        },
        "get_watchlist": {
            "func": get_watchlist,
            "title": "Get watchlist",
            "description": "Get detailed information about a specific watchlist.",
        },
        "get_watchlist_aircraft": {
            "func": get_watchlist_aircraft,
            "title": "Get watchlist aircraft",
            "description": "Get all aircraft in a specific watchlist with their current details.",
        },
        "create_watchlist": {
            "func": create_watchlist,
            "title": "Create watchlist",
            "description": "Create a new aircraft watchlist.",
        },
        "add_aircraft_to_watchlist": {
            "func": add_aircraft_to_watchlist,
            "title": "Add aircraft to watchlist",
            "description": "Add an aircraft to a watchlist by its registration number.",
        },
    }
