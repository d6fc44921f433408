"""openavdb-auth: manage the OpenAvDB sign-in used by the MCP server.

Commands:
- login --email you@example.com [--password ...]   (prompts for the password when omitted)
- login --custom-token TOKEN                        (headless / CI sign-in)
- login --browser                                   (open the web login page)
- logout
- status
"""
from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys
from datetime import datetime, timezone
from typing import Any

from openavdb_mcp.core.auth import CredentialStore, get_credential_store, launch_login_flow
from openavdb_mcp.core.config import get_config
from openavdb_mcp.core.errors import InvalidCredentialsError, OpenAvDBError

EXIT_OK = 0
EXIT_AUTH_FAILED = 1
EXIT_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="openavdb-auth", description="Manage OpenAvDB authentication for the MCP server")
    sub = p.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Sign in to OpenAvDB")
    method = login.add_mutually_exclusive_group(required=True)
    method.add_argument("--email", help="Account email address")
    method.add_argument("--custom-token", help="Pre-issued custom token (headless environments)")
    method.add_argument("--browser", action="store_true", help="Open the OpenAvDB login page in a browser")
    login.add_argument("--password", help="Account password (prompted when omitted)")

    sub.add_parser("logout", help="Sign out and delete the stored token")
    sub.add_parser("status", help="Show whether a valid token is available")
    return p.parse_args(argv)


def display(obj: Any) -> None:
    if isinstance(obj, str):
        print(obj)
    else:
        print(json.dumps(obj, indent=2, ensure_ascii=False))


def _expiry(expires_at_ms: int) -> str:
    return datetime.fromtimestamp(expires_at_ms / 1000, tz=timezone.utc).isoformat()


async def cmd_login(args: argparse.Namespace, store: CredentialStore) -> int:
    if args.browser:
        url = launch_login_flow((get_config() or {}).get("api_base_url", ""))
        print("Opening browser for authentication...", file=sys.stderr)
        print(f"If browser doesn't open, visit: {url}", file=sys.stderr)
        return EXIT_OK

    if args.custom_token:
        # get_token() would prefer a still-valid stored token of another account
        session = await store.sign_in_with_token(args.custom_token)
        credential = await store.adopt_session(session)
    else:
        password = args.password or getpass.getpass("Password: ")
        credential = await store.sign_in(args.email, password)

    display({"signed_in": True, "email": credential.email, "expires_at": _expiry(credential.expires_at)})
    return EXIT_OK


async def cmd_logout(store: CredentialStore) -> int:
    await store.sign_out()
    display("Signed out.")
    return EXIT_OK


async def cmd_status(store: CredentialStore) -> int:
    authenticated = await store.is_authenticated()
    status: dict[str, Any] = {"authenticated": authenticated, "token_path": str(store.token_path)}
    if authenticated:
        status["email"] = await store.get_current_email()
        if store.cached is not None:
            status["expires_at"] = _expiry(store.cached.expires_at)
    display(status)
    return EXIT_OK if authenticated else EXIT_AUTH_FAILED


async def run(args: argparse.Namespace, store: CredentialStore | None = None) -> int:
    store = store or get_credential_store()
    try:
        if args.command == "login":
            return await cmd_login(args, store)
        if args.command == "logout":
            return await cmd_logout(store)
        return await cmd_status(store)
    except InvalidCredentialsError as e:
        print(f"Sign-in failed: {e}", file=sys.stderr)
        return EXIT_AUTH_FAILED
    except (OpenAvDBError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
