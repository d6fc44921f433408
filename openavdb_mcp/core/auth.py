"""Bearer-token cache for OpenAvDB API access.

`CredentialStore` hands the API client a valid ID token, looking in three
places from cheapest to most expensive: the in-memory credential, the token
file on disk, and the identity provider's live session. Each tier is checked
against `EXPIRY_MARGIN_MS` before it is trusted.
"""

import json
import logging
import threading
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from openavdb_mcp.core.config import get_config
from openavdb_mcp.core.identity import FirebaseIdentityProvider, IdentityProvider, Session, now_ms

logger = logging.getLogger(__name__)

EXPIRY_MARGIN_MS = 60_000


@dataclass
class Credential:
    id_token: str
    refresh_token: str
    expires_at: int
    email: str

    def is_valid(self, at_ms: Optional[int] = None) -> bool:
        at_ms = now_ms() if at_ms is None else at_ms
        return self.expires_at > at_ms + EXPIRY_MARGIN_MS

    def to_json(self) -> Dict[str, Any]:
        return {
            "idToken": self.id_token,
            "refreshToken": self.refresh_token,
            "expiresAt": self.expires_at,
            "email": self.email,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Credential":
        return cls(
            id_token=str(data["idToken"]),
            refresh_token=str(data.get("refreshToken") or ""),
            expires_at=int(data["expiresAt"]),
            email=str(data.get("email") or ""),
        )


class CredentialStore:
    """Owns the single cached credential and its persisted copy.

    The cached field is swapped under a lock so readers never see a half
    written credential. Renewals are not coordinated: two concurrent misses
    may both renew and the last one to finish wins.
    """

    def __init__(self, provider: IdentityProvider, token_path: str | Path):
        self.provider = provider
        self.token_path = Path(token_path)
        self._lock = threading.Lock()
        self._cached: Optional[Credential] = None

    @property
    def cached(self) -> Optional[Credential]:
        with self._lock:
            return self._cached

    def _set_cached(self, credential: Optional[Credential]) -> None:
        with self._lock:
            self._cached = credential

    def load_stored(self) -> Optional[Credential]:
        """Read the token file. Any read or parse failure means "nothing stored"."""
        try:
            data = json.loads(self.token_path.read_text(encoding="utf-8"))
            return Credential.from_json(data)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.token_path, e)
            return None

    def save(self, credential: Credential) -> None:
        """Write the token file, creating parent directories. Failures propagate."""
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        self.token_path.write_text(json.dumps(credential.to_json(), indent=2), encoding="utf-8")

    async def adopt_session(self, session: Session) -> Credential:
        """Derive a credential from a live session, persist it and cache it."""
        token, expires_at = await session.get_token()
        credential = Credential(
            id_token=token,
            refresh_token=session.refresh_token or "",
            expires_at=int(expires_at),
            email=session.email or "",
        )
        self.save(credential)
        self._set_cached(credential)
        return credential

    async def get_token(self) -> Optional[str]:
        """Return a bearer token valid for at least another minute, or None."""
        cached = self.cached
        if cached is not None and cached.is_valid():
            return cached.id_token

        stored = self.load_stored()
        if stored is not None and stored.is_valid():
            self._set_cached(stored)
            logger.debug("Using stored token for %s", stored.email)
            return stored.id_token

        session = await self.provider.get_current_session()
        if session is None:
            return None

        credential = await self.adopt_session(session)
        logger.info("Obtained a fresh token for %s", credential.email or "current session")
        return credential.id_token

    async def sign_in(self, email: str, password: str) -> Credential:
        session = await self.provider.exchange_credentials(email, password)
        return await self.adopt_session(session)

    async def sign_in_with_token(self, custom_token: str) -> Session:
        """Start a live session from a pre-issued custom token (headless/CI).

        The cache is filled by the next `get_token()` call, or at once by
        passing the returned session to `adopt_session()`.
        """
        return await self.provider.exchange_custom_token(custom_token)

    async def is_authenticated(self) -> bool:
        return await self.get_token() is not None

    async def get_current_email(self) -> Optional[str]:
        cached = self.cached
        if cached is not None:
            return cached.email

        stored = self.load_stored()
        if stored is not None:
            return stored.email

        session = await self.provider.get_current_session()
        if session is not None and session.email:
            return session.email
        return None

    async def sign_out(self) -> None:
        try:
            await self.provider.sign_out()
        except Exception:
            logger.warning("Identity provider sign-out failed; continuing", exc_info=True)

        self._set_cached(None)

        try:
            self.token_path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not delete token file %s", self.token_path, exc_info=True)


def login_url(api_base_url: str) -> str:
    return f"{api_base_url.rstrip('/')}/auth/login?redirect=mcp"


def launch_login_flow(api_base_url: str) -> str:
    """Open the OpenAvDB login page in a browser and return its URL."""
    url = login_url(api_base_url)
    logger.info("Opening browser for authentication: %s", url)
    if not webbrowser.open(url):
        logger.warning("Browser did not open; visit %s to sign in", url)
    return url


_store: Optional[CredentialStore] = None


def set_credential_store(store: Optional[CredentialStore]) -> None:
    global _store
    _store = store


def get_credential_store() -> CredentialStore:
    """Return the process-wide store, backed by Firebase, built from configuration on first use."""
    global _store
    if _store is None:
        cfg = get_config() or {}
        firebase = cfg.get("firebase") or {}
        provider = FirebaseIdentityProvider(
            api_key=firebase.get("api_key", ""),
            timeout_ms=int(cfg.get("request_timeout_ms", 30000)),
            project_id=firebase.get("project_id"),
            auth_domain=firebase.get("auth_domain"),
        )
        logger.info("Identity provider: Firebase project %s (auth domain %s)", provider.project_id, provider.auth_domain)
        token_path = cfg.get("token_path") or Path.home() / ".openavdb" / "token.json"
        _store = CredentialStore(provider, token_path)
    return _store
