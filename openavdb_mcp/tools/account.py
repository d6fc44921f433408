import logging
from typing import Any

from mcp.server.fastmcp.exceptions import ToolError

from openavdb_mcp.core.auth import get_credential_store, launch_login_flow
from openavdb_mcp.core.config import get_config
from openavdb_mcp.utils.response_utils import format_error, to_text

logger = logging.getLogger(__name__)


async def get_auth_status() -> str:
    """Report whether a valid OpenAvDB token is available and for which account."""
    store = get_credential_store()
    try:
        authenticated = await store.is_authenticated()
        email = await store.get_current_email() if authenticated else None
    except Exception as e:
        logger.warning("Auth status check failed: %r", e)
        raise ToolError(format_error("checking authentication", e)) from e
    return to_text({"authenticated": authenticated, "email": email})


async def start_login() -> str:
    """Open the OpenAvDB sign-in page in the user's browser."""
    cfg = get_config() or {}
    url = launch_login_flow(cfg.get("api_base_url", ""))
    return to_text(
        {
            "message": "Opened the OpenAvDB login page. If the browser did not open, visit the URL below.",
            "login_url": url,
        }
    )


def get_tools() -> dict[str, Any]:
    return {
        "get_auth_status": {
            "func": get_auth_status,
            "title": "Authentication status",
            "description": "Check whether the server is signed in to OpenAvDB. Watchlist tools require authentication.",
        },
        "start_login": {
            "func": start_login,
            "title": "Start login",
            "description": "Open the OpenAvDB login page in a browser so the user can sign in.",
        },
    }
