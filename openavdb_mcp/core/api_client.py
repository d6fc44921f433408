"""OpenAvDB REST API client.

`ApiClient.dispatch` performs exactly one HTTP call per invocation and either
returns the parsed response envelope or raises one of the errors in
`core.errors`. The resource namespaces (`client.airports`, `client.watchlists`,
...) only shape parameters and paths on top of `get`/`list`/`post`.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, TypedDict

import httpx

from openavdb_mcp.core.auth import CredentialStore, get_credential_store
from openavdb_mcp.core.config import get_config
from openavdb_mcp.core.errors import (
    ApiClientError,
    ApiTimeoutError,
    AuthenticationRequiredError,
    MalformedResponseError,
    UnknownApiError,
)
from openavdb_mcp.utils.get_endpoint import build_url, get_endpoint

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

Params = Mapping[str, Any]


class ApiResponse(TypedDict, total=False):
    data: Any
    meta: Dict[str, Any]
    links: Dict[str, Optional[str]]
    _links: Dict[str, str]
    _included: Dict[str, Any]
    _meta: Dict[str, Any]


class ApiClient:
    def __init__(
        self,
        credentials: CredentialStore,
        base_url: str,
        version: str = "v1",
        timeout_ms: int = 30000,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.base_url = base_url
        self.version = version
        self.timeout_ms = timeout_ms
        self._transport = transport

        self.airports = Airports(self)
        self.fbos = Fbos(self)
        self.aircraft = Aircraft(self)
        self.charter = Charter(self)
        self.flight_schools = FlightSchools(self)
        self.fractional = Fractional(self)
        self.hangars = Hangars(self)
        self.fleet = Fleet(self)
        self.activity = Activity(self)
        self.watchlists = Watchlists(self)

    async def dispatch(
        self,
        endpoint: str,
        method: str = "GET",
        json_body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        require_auth: bool = False,
    ) -> ApiResponse:
        request_headers = dict(DEFAULT_HEADERS)

        token = await self.credentials.get_token()
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        elif require_auth:
            raise AuthenticationRequiredError()

        if headers:
            request_headers.update(headers)

        url = get_endpoint(self.base_url, self.version, endpoint)
        timeout_s = self.timeout_ms / 1000
        logger.debug("%s %s (auth=%s)", method, url, bool(token))

        async with httpx.AsyncClient(transport=self._transport, timeout=timeout_s) as client:
            try:
                response = await asyncio.wait_for(
                    client.request(method, url, headers=request_headers, json=json_body),
                    timeout=timeout_s,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                logger.warning("%s %s timed out after %d ms", method, url, self.timeout_ms)
                raise ApiTimeoutError(url, self.timeout_ms) from e
            except Exception as e:
                logger.warning("%s %s failed: %s", method, url, e)
                raise UnknownApiError(str(e) or type(e).__name__) from e

        try:
            body = response.json()
        except ValueError as e:
            logger.warning("Failed to decode JSON from %s (HTTP %d)", url, response.status_code)
            raise MalformedResponseError(url, response.status_code, str(e)) from e

        if not response.is_success:
            if not isinstance(body, dict):
                raise MalformedResponseError(url, response.status_code, "error body is not a JSON object")
            error = ApiClientError.from_body(body, response.status_code)
            logger.info("%s %s -> %d %s", method, url, error.status, error.code)
            raise error

        return body

    async def get(
        self,
        endpoint: str,
        params: Optional[Params] = None,
        require_auth: bool = False,
    ) -> ApiResponse:
        """Fetch a single resource; `data` is an object."""
        return await self.dispatch(build_url(endpoint, params), require_auth=require_auth)

    async def list(
        self,
        endpoint: str,
        params: Optional[Params] = None,
        require_auth: bool = False,
    ) -> ApiResponse:
        """Fetch a collection; `data` is a list. Same request as `get`."""
        return await self.dispatch(build_url(endpoint, params), require_auth=require_auth)

    async def post(self, endpoint: str, body: Any) -> ApiResponse:
        """Create or mutate a resource. Always requires authentication."""
        return await self.dispatch(endpoint, method="POST", json_body=body, require_auth=True)


class _Resource:
    def __init__(self, client: ApiClient):
        self._client = client


class Airports(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/airports", params)

    async def get(self, icao: str, **params: Any) -> ApiResponse:
        return await self._client.get(f"/airports/{icao.upper()}", params)

    async def fbos(self, icao: str) -> ApiResponse:
        return await self._client.list(f"/airports/{icao.upper()}/fbos")


class Fbos(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/fbos", params)

    async def get(self, fbo_id: str) -> ApiResponse:
        return await self._client.get(f"/fbos/{fbo_id}")

    async def fuel(self, **params: Any) -> ApiResponse:
        return await self._client.list("/fbos/fuel", params)


class Aircraft(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/aircraft", params)

    async def get(self, registration: str) -> ApiResponse:
        return await self._client.get(f"/aircraft/{registration.upper()}")


class Charter(_Resource):
    async def companies(self, **params: Any) -> ApiResponse:
        return await self._client.list("/charter/companies", params)

    async def get_company(self, company_id: str) -> ApiResponse:
        return await self._client.get(f"/charter/companies/{company_id}")

    async def brokers(self, **params: Any) -> ApiResponse:
        return await self._client.list("/charter/brokers", params)

    async def get_broker(self, broker_id: str) -> ApiResponse:
        return await self._client.get(f"/charter/brokers/{broker_id}")


class FlightSchools(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/flight-schools", params)

    async def get(self, school_id: str) -> ApiResponse:
        return await self._client.get(f"/flight-schools/{school_id}")


class Fractional(_Resource):
    # Fractional aircraft live in the fleet collection and are not yet
    # filterable by provider, so there is no aircraft accessor here.
    async def providers(self, **params: Any) -> ApiResponse:
        return await self._client.list("/fractional", params)

    async def get_provider(self, provider_id: str) -> ApiResponse:
        return await self._client.get(f"/fractional/{provider_id}")


class Hangars(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/hangars", params)

    async def get(self, hangar_id: str) -> ApiResponse:
        return await self._client.get(f"/hangars/{hangar_id}")


class Fleet(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/fleet", params)

    async def stats(self, **params: Any) -> ApiResponse:
        return await self._client.get("/fleet/stats", params)


class Activity(_Resource):
    async def list(self, **params: Any) -> ApiResponse:
        return await self._client.list("/activity", params)

    async def stats(self, **params: Any) -> ApiResponse:
        return await self._client.get("/activity/stats", params)


class Watchlists(_Resource):
    """Per-user watchlists. Every call requires a signed-in user."""

    async def list(self) -> ApiResponse:
        return await self._client.list("/watchlists", require_auth=True)

    async def get(self, watchlist_id: str) -> ApiResponse:
        return await self._client.get(f"/watchlists/{watchlist_id}", require_auth=True)

    async def aircraft(self, watchlist_id: str) -> ApiResponse:
        return await self._client.list(f"/watchlists/{watchlist_id}/aircraft", require_auth=True)

    async def create(self, name: str, description: Optional[str] = None) -> ApiResponse:
        body: Dict[str, Any] = {"name": name}
        if description is not None:
            body["description"] = description
        return await self._client.post("/watchlists", body)

    async def add_aircraft(self, watchlist_id: str, registration: str) -> ApiResponse:
        return await self._client.post(f"/watchlists/{watchlist_id}/aircraft", {"registration": registration})


_client: Optional[ApiClient] = None


def set_client(client: Optional[ApiClient]) -> None:
    global _client
    _client = client


def get_client() -> ApiClient:
    """Return the process-wide client, building it from configuration on first use."""
    global _client
    if _client is None:
        cfg = get_config() or {}
        _client = ApiClient(
            credentials=get_credential_store(),
            base_url=cfg.get("api_base_url", "https://openavdb-prod.web.app/api"),
            version=cfg.get("api_version", "v1"),
            timeout_ms=int(cfg.get("request_timeout_ms", 30000)),
        )
    return _client

