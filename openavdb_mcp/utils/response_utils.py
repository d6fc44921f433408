"""Helpers that turn API results and failures into tool text.

`to_text` renders a JSON payload for the model; `format_error` renders any
exception as the single line a tool reports back with the error flag set.
API suggestions (did-you-mean, valid values, hints) are kept verbatim since
they are what lets the model correct its next call.
"""
from __future__ import annotations

import json
from typing import Any

from openavdb_mcp.core.errors import ApiClientError, OpenAvDBError


def to_text(payload: Any) -> str:
    """Pretty-print a JSON-serializable payload."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def format_error(action: str, exc: BaseException) -> str:
    """Render `exc` as `Error <action>: <message>` plus any API details."""
    message = str(exc) or "Unknown error"
    if not isinstance(exc, OpenAvDBError) and not str(exc):
        message = f"Unknown error ({type(exc).__name__})"
    text = f"Error {action}: {message}"
    if isinstance(exc, ApiClientError):
        text += f" ({exc.code}, HTTP {exc.status})"
        if exc.suggestions:
            text += f". Suggestions: {json.dumps(exc.suggestions, ensure_ascii=False, default=str)}"
    return text
