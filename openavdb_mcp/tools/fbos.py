from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_fbos(
    state: Annotated[Optional[str], Field(description='Two-letter US state code (e.g., "TX", "CA")')] = None,
    airport: Annotated[Optional[str], Field(description="Filter by airport ICAO code")] = None,
    brand: Annotated[Optional[str], Field(description="Filter by FBO brand/chain name")] = None,
    towered: Annotated[
        Optional[bool],
        Field(description="Filter by airport control tower status (true = towered, false = non-towered)"),
    ] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "searching FBOs",
        lambda client: client.fbos.list(state=state, airport=airport, brand=brand, towered=towered, **page(limit, offset)),
    )
    return collection_text("fbos", response)


async def get_fbo(id: Annotated[str, Field(description="FBO ID")]) -> str:
    return data_text(await call_api("getting FBO", lambda client: client.fbos.get(id)))


async def get_fuel_prices(
    min_price: Annotated[Optional[float], Field(description="Minimum fuel price per gallon")] = None,
    max_price: Annotated[Optional[float], Field(description="Maximum fuel price per gallon")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "getting fuel prices",
        lambda client: client.fbos.fuel(min_price=min_price, max_price=max_price, **page(limit, offset)),
    )
    return collection_text("fuel_prices", response)


def get_tools() -> dict[str, Any]:
    return {
        "search_fbos": {
            "func": search_fbos,
            "title": "Search FBOs",
            "description": "Search for Fixed Base Operators (FBOs) by state, airport, brand, or tower status. FBOs are service providers at airports.",
        },
        "get_fbo": {
            "func": get_fbo,
            "title": "Get FBO",
            "description": "Get detailed information about a specific FBO by its ID.",
        },
        "get_fuel_prices": {
            "func": get_fuel_prices,
            "title": "Get fuel prices",
            "description": "Search for aviation fuel prices across FBOs. Useful for finding the best fuel deals.",
        },
    }
