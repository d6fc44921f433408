import pytest

from openavdb_mcp.core.errors import (
    ApiClientError,
    ApiTimeoutError,
    AuthenticationRequiredError,
)
from openavdb_mcp.utils import build_url, format_error, get_endpoint, to_text


@pytest.mark.parametrize(
    "base, version, endpoint, expected",
    [
        ("https://api.test", "v1", "/airports", "https://api.test/v1/airports"),
        ("https://api.test/", "v1", "airports", "https://api.test/v1/airports"),
        ("https://api.test/api", "/v1/", "/fbos/fuel", "https://api.test/api/v1/fbos/fuel"),
        ("https://api.test", "", "/airports", "https://api.test/airports"),
        ("https://api.test", "v1", "http://other.test/x", "http://other.test/x"),
    ],
)
def test_get_endpoint(base, version, endpoint, expected):
    assert get_endpoint(base, version, endpoint) == expected


def test_build_url():
    assert build_url("/airports") == "/airports"
    assert build_url("/airports", {"state": None}) == "/airports"
    assert build_url("/airports", {"icao": "KAUS,KSAT", "towered": False}) == "/airports?icao=KAUS,KSAT&towered=false"
    assert build_url("/airports", {"city": "San Antonio"}) == "/airports?city=San+Antonio"


def test_format_api_error_without_suggestions():
    err = ApiClientError("Invalid state", status=400, code="INVALID_PARAM")
    assert format_error("searching airports", err) == "Error searching airports: Invalid state (INVALID_PARAM, HTTP 400)"


def test_format_other_errors():
    assert format_error("getting airport", ApiTimeoutError("https://api.test/v1/airports", 50)) == (
        "Error getting airport: Request to https://api.test/v1/airports timed out after 50 ms"
    )
    assert format_error("listing watchlists", AuthenticationRequiredError()) == (
        "Error listing watchlists: Authentication required. Please sign in first."
    )
    assert format_error("x", KeyError()) == "Error x: Unknown error (KeyError)"


def test_to_text_keeps_unicode():
    assert to_text({"city": "São Paulo"}) == '{\n  "city": "São Paulo"\n}'
