from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def get_endpoint(base_url: str, version: str, endpoint: str) -> str:
    """Resolve an API endpoint to a full URL.

    Absolute `http(s)://` endpoints are returned untouched; anything else is
    placed under `{base_url}/{version}` with exactly one slash at each join.
    """
    if endpoint.startswith("http"):
        return endpoint
    base = base_url.rstrip("/")
    version = version.strip("/")
    path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
    return f"{base}/{version}{path}" if version else f"{base}{path}"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append `params` as a query string, skipping None and empty-string values.

    Values are stringified as-is; multi-value filters must already be joined
    into one comma-separated string by the caller.
    """
    if not params:
        return endpoint
    query = urlencode(
        [(key, _query_value(value)) for key, value in params.items() if value is not None and value != ""],
        safe=",",
    )
    return f"{endpoint}?{query}" if query else endpoint
