"""Shared fixtures for the OpenAvDB MCP tests.

Provides:
  - Mock HTTP transport for httpx (records requests, can stall or fail)
  - An in-memory identity provider standing in for Firebase
  - CredentialStore / ApiClient instances wired to both
  - Isolation of configuration, token file and process-wide singletons
"""

import asyncio
from typing import Optional

import httpx
import pytest

from openavdb_mcp.core.api_client import ApiClient, set_client
from openavdb_mcp.core.auth import Credential, CredentialStore, set_credential_store
from openavdb_mcp.core.config import ConfigLoader
from openavdb_mcp.core.errors import InvalidCredentialsError
from openavdb_mcp.core.identity import now_ms

BASE_URL = "https://api.test"
HOUR_MS = 3600 * 1000


class MockTransport(httpx.AsyncBaseTransport):
    """Mock HTTP transport that returns preconfigured responses.

    Each request pops the next response from the list; when the list is
    exhausted a 500 error body is returned. `delay` stalls every request (to
    exercise timeouts) and records whether the stalled call was cancelled.
    `error` is raised instead of answering.
    """

    def __init__(
        self,
        responses: Optional[list[httpx.Response]] = None,
        delay: Optional[float] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []
        self.delay = delay
        self.error = error
        self.cancelled = False

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        if self.responses:
            template = self.responses.pop(0)
            return httpx.Response(template.status_code, headers=template.headers, content=template.content)
        return httpx.Response(500, json={"error": "No more mock responses", "code": "MOCK_EXHAUSTED", "status": 500})


class FakeSession:
    def __init__(
        self,
        token: str = "live-token",
        email: Optional[str] = "pilot@example.com",
        refresh_token: str = "refresh-1",
        expires_in_ms: int = HOUR_MS,
    ):
        self.token = token
        self.email = email
        self.refresh_token = refresh_token
        self.expires_at = now_ms() + expires_in_ms
        self.token_calls = 0

    async def get_token(self):
        self.token_calls += 1
        return self.token, self.expires_at


class FakeProvider:
    """In-memory identity provider accepting a single email/password pair."""

    def __init__(self, session: Optional[FakeSession] = None):
        self.session = session
        self.accepted = ("pilot@example.com", "secret")
        self.session_lookups = 0
        self.sign_out_calls = 0
        self.fail_sign_out = False

    async def get_current_session(self):
        self.session_lookups += 1
        return self.session

    async def exchange_credentials(self, email, secret):
        if (email, secret) != self.accepted:
            raise InvalidCredentialsError(reason="INVALID_LOGIN_CREDENTIALS")
        self.session = FakeSession(token="signed-in-token", email=email)
        return self.session

    async def exchange_custom_token(self, token):
        self.session = FakeSession(token=f"custom-{token}", email="ci@example.com")
        return self.session

    async def sign_out(self):
        self.sign_out_calls += 1
        if self.fail_sign_out:
            raise RuntimeError("network down")
        self.session = None


def make_credential(token: str = "cached-token", expires_in_ms: int = HOUR_MS, email: str = "pilot@example.com"):
    return Credential(id_token=token, refresh_token="refresh-0", expires_at=now_ms() + expires_in_ms, email=email)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config at temp paths and reset process-wide singletons around each test."""
    monkeypatch.setenv("OPENAVDB_TOKEN_PATH", str(tmp_path / "token.json"))
    monkeypatch.setenv("OPENAVDB_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("OPENAVDB_API_URL", BASE_URL)
    ConfigLoader.reset()
    set_client(None)
    set_credential_store(None)
    yield
    ConfigLoader.reset()
    set_client(None)
    set_credential_store(None)


@pytest.fixture
def token_path(tmp_path):
    return tmp_path / "openavdb" / "token.json"


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def store(provider, token_path):
    return CredentialStore(provider, token_path)


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def client(store, transport):
    return ApiClient(store, base_url=BASE_URL, timeout_ms=2000, transport=transport)


@pytest.fixture
def installed_client(client):
    """Make `client` the one tools and resources resolve through get_client()."""
    set_client(client)
    set_credential_store(client.credentials)
    return client
