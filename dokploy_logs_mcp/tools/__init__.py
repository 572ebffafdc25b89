"""MCP tools for the Dokploy logs MCP server."""

from dokploy_logs_mcp.tools.docker import TOOL_DESCRIPTIONS, call_tool, register_tools

__all__ = ["TOOL_DESCRIPTIONS", "call_tool", "register_tools"]
