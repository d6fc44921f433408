"""Exceptions raised by the credential store and the API client.

Every failure the access layer can produce is one of these types, so tool
handlers can catch `OpenAvDBError` and render a single line for the user.
"""

from typing import Any, Dict, Optional


class OpenAvDBError(Exception):
    """Base class for all OpenAvDB client errors."""

    code = "UNKNOWN"


class AuthenticationRequiredError(OpenAvDBError):
    """An auth-gated call was attempted without a valid token. No request was sent."""

    code = "AUTHENTICATION_REQUIRED"

    def __init__(self, message: str = "Authentication required. Please sign in first."):
        super().__init__(message)


class InvalidCredentialsError(OpenAvDBError):
    """The identity provider rejected a sign-in exchange."""

    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password.", reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class ApiClientError(OpenAvDBError):
    """The API answered with a non-2xx status and a JSON error body."""

    def __init__(
        self,
        message: str,
        status: int,
        code: str,
        suggestions: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.code = code
        self.suggestions = suggestions

    @classmethod
    def from_body(cls, body: Dict[str, Any], http_status: int) -> "ApiClientError":
        """Build from a parsed error body `{error, code, status, suggestions}`.

        Missing fields fall back to the HTTP status line so the error stays
        usable even when the server omits part of the envelope.
        """
        status = body.get("status")
        if not isinstance(status, int):
            status = http_status
        return cls(
            message=str(body.get("error") or f"Request failed with status {http_status}"),
            status=status,
            code=str(body.get("code") or f"HTTP_{http_status}"),
            suggestions=body.get("suggestions"),
        )


class ApiTimeoutError(OpenAvDBError):
    """The request did not complete within the configured timeout."""

    code = "TIMEOUT"

    def __init__(self, url: str, timeout_ms: int):
        super().__init__(f"Request to {url} timed out after {timeout_ms} ms")
        self.url = url
        self.timeout_ms = timeout_ms


class MalformedResponseError(OpenAvDBError):
    """The response body could not be parsed as JSON."""

    code = "MALFORMED_RESPONSE"

    def __init__(self, url: str, status: int, detail: str):
        super().__init__(f"Malformed response from {url} (HTTP {status}): {detail}")
        self.url = url
        self.status = status


class UnknownApiError(OpenAvDBError):
    """Any other failure (network, DNS, TLS...), with the underlying message preserved."""

    def __init__(self, message: str):
        super().__init__(message)
