"""OpenAvDB aviation data exposed as MCP tools, resources and prompts."""

__version__ = "1.0.0"
