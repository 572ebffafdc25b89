"""Services for the Dokploy logs MCP server."""

from dokploy_logs_mcp.services.dispatcher import (
    Dispatcher,
    UnknownTool,
    parse_invocation,
)
from dokploy_logs_mcp.services.executor import (
    ExecutionError,
    ExecutionFailure,
    ExecutionTimeout,
    RemoteExecutor,
)

__all__ = [
    "Dispatcher",
    "ExecutionError",
    "ExecutionFailure",
    "ExecutionTimeout",
    "RemoteExecutor",
    "UnknownTool",
    "parse_invocation",
]
