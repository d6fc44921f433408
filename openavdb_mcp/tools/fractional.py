from typing import Annotated, Any

from pydantic import Field

from openavdb_mcp.tools._common import DEFAULT_LIMIT, Limit, Offset, call_api, collection_text, data_text, page


async def search_fractional_providers(limit: Limit = DEFAULT_LIMIT, offset: Offset = 0) -> str:
    response = await call_api(
        "searching fractional providers",
        lambda client: client.fractional.providers(**page(limit, offset)),
    )
    return collection_text("providers", response)


async def get_fractional_provider(id: Annotated[str, Field(description="Provider ID")]) -> str:
    return data_text(
        await call_api("getting fractional provider", lambda client: client.fractional.get_provider(id))
    )


def get_tools() -> dict[str, Any]:
    return {
        "search_fractional_providers": {
            "func": search_fractional_providers,
            "title": "Search fractional providers",
            "description": "Search for fractional aircraft ownership providers (e.g., NetJets, Flexjet).",
        },
        "get_fractional_provider": {
            "func": get_fractional_provider,
            "title": "Get fractional provider",
            "description": "Get detailed information about a specific fractional ownership provider.",
        },
    }
