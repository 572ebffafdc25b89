"""Middleware components for the Dokploy logs MCP server."""

from dokploy_logs_mcp.middleware.base import DokployMiddleware
from dokploy_logs_mcp.middleware.errors import ErrorHandlingMiddleware
from dokploy_logs_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "DokployMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]
