"""Identity provider sessions used by the credential store.

`IdentityProvider` and `Session` describe the only capabilities the store
needs. `FirebaseIdentityProvider` implements them against the Firebase Auth
REST API (identitytoolkit + securetoken), which is what the OpenAvDB web app
signs users in with.
"""

import logging
import time
from typing import Any, Dict, Optional, Protocol, Tuple

import httpx

from openavdb_mcp.core.errors import ApiTimeoutError, InvalidCredentialsError, UnknownApiError

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

# Firebase refreshes an ID token when it is within five minutes of expiry
SESSION_REFRESH_MARGIN_MS = 5 * 60 * 1000

# Firebase error codes that mean the user has to sign in again
AUTH_FAILURE_CODES = {
    "EMAIL_NOT_FOUND",
    "INVALID_PASSWORD",
    "INVALID_LOGIN_CREDENTIALS",
    "INVALID_EMAIL",
    "MISSING_PASSWORD",
    "USER_DISABLED",
    "USER_NOT_FOUND",
    "INVALID_CUSTOM_TOKEN",
    "CREDENTIAL_MISMATCH",
    "TOKEN_EXPIRED",
    "INVALID_REFRESH_TOKEN",
    "INVALID_ID_TOKEN",
}


def now_ms() -> int:
    return int(time.time() * 1000)


class Session(Protocol):
    """A live signed-in session held by the identity provider."""

    email: Optional[str]
    refresh_token: str

    async def get_token(self) -> Tuple[str, int]:
        """Return `(id_token, expires_at_ms)`, refreshing internally if needed."""
        ...


class IdentityProvider(Protocol):
    async def get_current_session(self) -> Optional[Session]: ...

    async def exchange_credentials(self, email: str, secret: str) -> Session: ...

    async def exchange_custom_token(self, token: str) -> Session: ...

    async def sign_out(self) -> None: ...


class FirebaseSession:
    def __init__(
        self,
        provider: "FirebaseIdentityProvider",
        id_token: str,
        refresh_token: str,
        expires_at: int,
        email: Optional[str] = None,
        uid: Optional[str] = None,
    ):
        self._provider = provider
        self.id_token = id_token
        self.refresh_token = refresh_token
        self.expires_at = expires_at
        self.email = email
        self.uid = uid

    async def get_token(self) -> Tuple[str, int]:
        if self.expires_at - now_ms() <= SESSION_REFRESH_MARGIN_MS:
            await self._provider.refresh_session(self)
        return self.id_token, self.expires_at


class FirebaseIdentityProvider:
    """Firebase Auth over REST.

    The live session only exists in process memory, like the Firebase web SDK
    with in-memory persistence; the credential store keeps the durable copy.
    """

    def __init__(
        self,
        api_key: str,
        timeout_ms: int = 30000,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        project_id: Optional[str] = None,
        auth_domain: Optional[str] = None,
    ):
        self.api_key = api_key
        self.project_id = project_id
        self.auth_domain = auth_domain
        self.timeout_ms = timeout_ms
        self._transport = transport
        self._session: Optional[FirebaseSession] = None

    async def get_current_session(self) -> Optional[FirebaseSession]:
        return self._session

    async def exchange_credentials(self, email: str, secret: str) -> FirebaseSession:
        data = await self._post(
            f"{IDENTITY_TOOLKIT_URL}/accounts:signInWithPassword",
            json={"email": email, "password": secret, "returnSecureToken": True},
        )
        self._session = self._session_from(data, email=data.get("email") or email)
        logger.info("Signed in to Firebase project %s as %s", self.project_id or "(default)", self._session.email)
        return self._session

    async def exchange_custom_token(self, token: str) -> FirebaseSession:
        data = await self._post(
            f"{IDENTITY_TOOLKIT_URL}/accounts:signInWithCustomToken",
            json={"token": token, "returnSecureToken": True},
        )
        session = self._session_from(data, email=data.get("email"))
        if not session.email:
            session.email = await self._lookup_email(session.id_token)
        self._session = session
        logger.info(
            "Signed in to Firebase project %s with a custom token (%s)",
            self.project_id or "(default)",
            session.email or "no email",
        )
        return session

    async def refresh_session(self, session: FirebaseSession) -> None:
        try:
            data = await self._post(
                SECURE_TOKEN_URL,
                data={"grant_type": "refresh_token", "refresh_token": session.refresh_token},
            )
        except InvalidCredentialsError:
            if self._session is session:
                self._session = None
            raise
        session.id_token = data["id_token"]
        session.refresh_token = data.get("refresh_token", session.refresh_token)
        session.expires_at = now_ms() + int(data.get("expires_in", 3600)) * 1000
        logger.debug("Refreshed Firebase ID token for %s", session.email)

    async def sign_out(self) -> None:
        self._session = None

    def _session_from(self, data: Dict[str, Any], email: Optional[str]) -> FirebaseSession:
        try:
            return FirebaseSession(
                provider=self,
                id_token=data["idToken"],
                refresh_token=data["refreshToken"],
                expires_at=now_ms() + int(data.get("expiresIn", 3600)) * 1000,
                email=email,
                uid=data.get("localId"),
            )
        except KeyError as e:
            raise UnknownApiError(f"Firebase response is missing {e.args[0]}") from e

    async def _lookup_email(self, id_token: str) -> Optional[str]:
        data = await self._post(f"{IDENTITY_TOOLKIT_URL}/accounts:lookup", json={"idToken": id_token})
        users = data.get("users") or []
        return users[0].get("email") if users else None

    async def _post(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        timeout = self.timeout_ms / 1000
        async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
            try:
                resp = await client.post(url, params={"key": self.api_key}, **kwargs)
            except httpx.TimeoutException as e:
                raise ApiTimeoutError(url, self.timeout_ms) from e
            except httpx.HTTPError as e:
                raise UnknownApiError(f"Identity provider request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if resp.is_success:
            if not isinstance(body, dict):
                raise UnknownApiError(f"Identity provider returned a non-object body (HTTP {resp.status_code})")
            return body

        message = ""
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = str(body["error"].get("message", ""))
        reason = message.split(" : ", 1)[0].strip()
        if reason in AUTH_FAILURE_CODES:
            raise InvalidCredentialsError(f"Sign-in rejected: {reason}", reason=reason)
        raise UnknownApiError(f"Identity provider error (HTTP {resp.status_code}): {message or resp.text}")
