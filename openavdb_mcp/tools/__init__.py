# MCP tools for the OpenAvDB server.
# Each public module in this package exposes `get_tools() -> dict[str, dict]` mapping a tool
# name to {"func": async callable, "title": str, "description": str}.
# The server imports every module here (names starting with "_" are skipped) and registers them.
__all__ = []
