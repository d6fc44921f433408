"""Shared plumbing for tool modules (skipped by server discovery: leading underscore)."""
import logging
from typing import Annotated, Any, Awaitable, Callable, Dict

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from openavdb_mcp.core.api_client import ApiClient, ApiResponse, get_client
from openavdb_mcp.utils.response_utils import format_error, to_text

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

Limit = Annotated[int, Field(description="Maximum results to return (max 100)", ge=1)]
Offset = Annotated[int, Field(description="Pagination offset", ge=0)]


def page(limit: int, offset: int) -> Dict[str, int]:
    return {"limit": min(limit, MAX_LIMIT), "offset": offset}


async def call_api(action: str, request: Callable[[ApiClient], Awaitable[ApiResponse]]) -> ApiResponse:
    """Run one API request; any failure becomes a ToolError carrying a single descriptive line."""
    try:
        return await request(get_client())
    except Exception as e:
        logger.warning("Tool call failed while %s: %r", action, e)
        raise ToolError(format_error(action, e)) from e


def collection_text(key: str, response: ApiResponse, **extra: Any) -> str:
    data = response.get("data") or []
    payload: Dict[str, Any] = {
        key: data,
        "total": (response.get("meta") or {}).get("total"),
        "showing": len(data),
    }
    payload.update(extra)
    return to_text(payload)


def data_text(response: ApiResponse) -> str:
    return to_text(response.get("data"))
