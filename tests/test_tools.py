"""Tool handler tests: parameter shaping, output payloads and error text."""

import json

import httpx
import pytest
from mcp.server.fastmcp.exceptions import ToolError

from openavdb_mcp.tools import account, airports, aircraft, charter, fbos, watchlists

from .conftest import BASE_URL, make_credential


def ok(data, meta=None, **extra):
    body = {"data": data, **extra}
    if meta is not None:
        body["meta"] = meta
    return httpx.Response(200, json=body)


class TestSearchTools:
    async def test_search_airports_payload(self, installed_client, transport):
        transport.responses = [ok([{"icao": "KAUS"}, {"icao": "KSAT"}], meta={"total": 212})]

        result = json.loads(await airports.search_airports(state="TX", towered=True))

        assert result == {"airports": [{"icao": "KAUS"}, {"icao": "KSAT"}], "total": 212, "showing": 2, "offset": 0}
        params = dict(transport.requests[0].url.params)
        assert params == {"state": "TX", "towered": "true", "limit": "20", "offset": "0"}

    async def test_limit_is_capped_at_100(self, installed_client, transport):
        transport.responses = [ok([], meta={"total": 0})]
        await fbos.search_fbos(limit=500, offset=40)
        params = transport.requests[0].url.params
        assert params["limit"] == "100"
        assert params["offset"] == "40"

    async def test_missing_meta_gives_null_total(self, installed_client, transport):
        transport.responses = [ok([{"id": "c1"}])]
        result = json.loads(await charter.search_charter_companies(state="FL"))
        assert result == {"companies": [{"id": "c1"}], "total": None, "showing": 1}

    async def test_fuel_price_filters(self, installed_client, transport):
        transport.responses = [ok([{"fbo": "f1", "jet_a": 6.1}], meta={"total": 1})]
        result = json.loads(await fbos.get_fuel_prices(max_price=6.5))
        assert result["fuel_prices"] == [{"fbo": "f1", "jet_a": 6.1}]
        assert transport.requests[0].url.path == "/v1/fbos/fuel"
        assert transport.requests[0].url.params["max_price"] == "6.5"


class TestDetailTools:
    async def test_get_airport_with_includes_and_field_descriptions(self, installed_client, transport):
        transport.responses = [
            ok(
                {"icao": "KAUS", "name": "Austin-Bergstrom"},
                _included={"fbos": [{"id": "f1"}]},
                _meta={"field_descriptions": {"icao": "ICAO code"}},
            )
        ]

        result = json.loads(await airports.get_airport("kaus", include=["fbos", "fleet"]))

        request = transport.requests[0]
        assert request.url.path == "/v1/airports/KAUS"
        assert request.url.params["include"] == "fbos,fleet"
        assert request.url.params["describe_fields"] == "true"
        assert result == {
            "airport": {"icao": "KAUS", "name": "Austin-Bergstrom"},
            "included": {"fbos": [{"id": "f1"}]},
            "field_descriptions": {"icao": "ICAO code"},
        }

    async def test_get_airport_without_extras(self, installed_client, transport):
        transport.responses = [ok({"icao": "KSAT"})]
        result = json.loads(await airports.get_airport("KSAT"))
        assert result == {"airport": {"icao": "KSAT"}}
        assert "include" not in transport.requests[0].url.params

    async def test_get_airport_fbos(self, installed_client, transport):
        transport.responses = [ok([{"id": "f1"}], meta={"total": 1})]
        result = json.loads(await airports.get_airport_fbos("kaus"))
        assert result == {"airport": "KAUS", "fbos": [{"id": "f1"}], "total": 1}

    async def test_get_aircraft_returns_data(self, installed_client, transport):
        transport.responses = [ok({"registration": "N12345", "model": "C172"})]
        result = json.loads(await aircraft.get_aircraft("n12345"))
        assert result == {"registration": "N12345", "model": "C172"}
        assert transport.requests[0].url.path == "/v1/aircraft/N12345"


class TestBatch:
    async def test_batch_joins_codes(self, installed_client, transport):
        transport.responses = [
            ok([{"icao": "KAUS"}], meta={"found": 1, "requested": 2, "not_found": ["KZZZ"]})
        ]

        result = json.loads(await airports.get_airports_batch(["KAUS", "KZZZ"]))

        assert transport.requests[0].url.params["icao"] == "KAUS,KZZZ"
        assert result == {"airports": [{"icao": "KAUS"}], "found": 1, "requested": 2, "not_found": ["KZZZ"]}

    async def test_more_than_twenty_codes_rejected_without_request(self, installed_client, transport):
        codes = [f"K{i:03d}" for i in range(21)]
        with pytest.raises(ToolError, match="Maximum 20 ICAO codes per request"):
            await airports.get_airports_batch(codes)
        assert transport.requests == []


class TestErrors:
    async def test_api_error_text_keeps_code_and_suggestions(self, installed_client, transport):
        transport.responses = [
            httpx.Response(
                404,
                json={
                    "error": "Airport not found",
                    "code": "NOT_FOUND",
                    "status": 404,
                    "suggestions": {"did_you_mean": ["KAUS"]},
                },
            )
        ]

        with pytest.raises(ToolError) as exc_info:
            await airports.get_airport("KAUZ")

        assert str(exc_info.value) == (
            'Error getting airport: Airport not found (NOT_FOUND, HTTP 404). Suggestions: {"did_you_mean": ["KAUS"]}'
        )

    async def test_watchlist_without_sign_in(self, installed_client, transport):
        with pytest.raises(ToolError, match="Error listing watchlists: Authentication required"):
            await watchlists.list_watchlists()
        assert transport.requests == []


class TestWatchlists:
    @pytest.fixture(autouse=True)
    def signed_in(self, installed_client):
        installed_client.credentials._set_cached(make_credential("wl-token"))

    async def test_list(self, transport):
        transport.responses = [ok([{"id": "w1"}], meta={"total": 1})]
        result = json.loads(await watchlists.list_watchlists())
        assert result == {"watchlists": [{"id": "w1"}], "total": 1}
        assert transport.requests[0].headers["authorization"] == "Bearer wl-token"

    async def test_aircraft(self, transport):
        transport.responses = [ok([{"registration": "N1"}], meta={"total": 1})]
        result = json.loads(await watchlists.get_watchlist_aircraft("w1"))
        assert result == {"watchlist_id": "w1", "aircraft": [{"registration": "N1"}], "total": 1}

    async def test_create(self, transport):
        transport.responses = [httpx.Response(201, json={"data": {"id": "w9", "name": "Jets"}})]
        result = json.loads(await watchlists.create_watchlist("Jets", description="Mid-size jets"))
        assert result == {"message": "Watchlist created successfully", "watchlist": {"id": "w9", "name": "Jets"}}
        assert json.loads(transport.requests[0].content) == {"name": "Jets", "description": "Mid-size jets"}

    async def test_add_aircraft(self, transport):
        transport.responses = [ok({"watchlist_id": "w9", "registration": "N512AB"})]
        result = json.loads(await watchlists.add_aircraft_to_watchlist("w9", "N512AB"))
        assert result["message"] == "Aircraft added to watchlist"
        assert result["result"] == {"watchlist_id": "w9", "registration": "N512AB"}


class TestAccount:
    async def test_status_signed_out(self, installed_client):
        assert json.loads(await account.get_auth_status()) == {"authenticated": False, "email": None}

    async def test_status_signed_in(self, installed_client):
        installed_client.credentials._set_cached(make_credential(email="pilot@example.com"))
        assert json.loads(await account.get_auth_status()) == {"authenticated": True, "email": "pilot@example.com"}

    async def test_start_login_opens_browser(self, installed_client, monkeypatch):
        opened = []
        monkeypatch.setattr("webbrowser.open", lambda url: opened.append(url) or True)

        result = json.loads(await account.start_login())

        assert result["login_url"] == f"{BASE_URL}/auth/login?redirect=mcp"
        assert opened == [result["login_url"]]


def test_every_module_exposes_described_tools():
    for module in (account, airports, aircraft, charter, fbos, watchlists):
        for name, meta in module.get_tools().items():
            assert callable(meta["func"]), name
            assert meta["title"] and meta["description"], name
