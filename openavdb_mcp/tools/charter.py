from typing import Annotated, Any, Optional

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_charter_companies(
    certificate_type: Annotated[Optional[str], Field(description="FAA certificate type")] = None,
    state: Annotated[Optional[str], Field(description="Two-letter US state code")] = None,
    limit: Limit = DEFAULT_LIMIT,
    offset: Offset = 0,
) -> str:
    response = await call_api(
        "searching charter companies",
        lambda client: client.charter.companies(certificate_type=certificate_type, state=state, **page(limit, offset)),
    )
    return collection_text("companies", response)


async def get_charter_company(id: Annotated[str, Field(description="Charter company ID")]) -> str:
    return data_text(await call_api("getting charter company", lambda client: client.charter.get_company(id)))


async def search_charter_brokers(limit: Limit = DEFAULT_LIMIT, offset: Offset = 0) -> str:
    response = await call_api(
        "searching charter brokers",
        lambda client: client.charter.brokers(**page(limit, offset)),
    )
    return collection_text("brokers", response)


async def get_charter_broker(id: Annotated[str, Field(description="Charter broker ID")]) -> str:
    return data_text(await call_api("getting charter broker", lambda client: client.charter.get_broker(id)))


def get_tools() -> dict[str, Any]:
    return {
        "search_charter_companies": {
            "func": search_charter_companies,
            "title": "Search charter companies",
            "description": "Search for Part 135 charter companies by certificate type or state.",
        },
        "get_charter_company": {
            "func": get_charter_company,
            "title": "Get charter company",
            "description": "Get detailed information about a specific charter company.",
        },
        "search_charter_brokers": {
            "func": search_charter_brokers,
            "title": "Search charter brokers",
            "description": "Search for charter brokers who arrange private flights.",
        },
        "get_charter_broker": {
            "func": get_charter_broker,
            "title": "Get charter broker",
            "description": "Get detailed information about a specific charter broker.",
        },
    }
