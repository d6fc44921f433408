from openavdb_mcp.utils.get_endpoint import build_url, get_endpoint
from openavdb_mcp.utils.response_utils import format_error, to_text

__all__ = ["build_url", "get_endpoint", "format_error", "to_text"]
