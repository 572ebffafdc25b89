"""Data models for the Dokploy logs MCP server."""

from dokploy_logs_mcp.models.command import (
    ExecutionRequest,
    ExecutionResult,
    RemoteCommand,
)
from dokploy_logs_mcp.models.tool import ToolInvocation, ToolName, ToolResult

__all__ = [
    "ExecutionRequest",
    "ExecutionResult",
    "RemoteCommand",
    "ToolInvocation",
    "ToolName",
    "ToolResult",
]
