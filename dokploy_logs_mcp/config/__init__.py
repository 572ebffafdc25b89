"""Configuration for the Dokploy logs MCP server."""

from dokploy_logs_mcp.config.settings import DEFAULT_SSH_HOST, Settings

__all__ = ["DEFAULT_SSH_HOST", "Settings"]
