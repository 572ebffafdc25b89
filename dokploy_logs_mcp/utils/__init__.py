"""Utility modules for the Dokploy logs MCP server."""

from dokploy_logs_mcp.utils.validation import (
    InvalidArgument,
    sanitize_grep_pattern,
    sanitize_identifier,
    sanitize_timestamp,
    validate_flag,
    validate_tail,
)

__all__ = [
    "InvalidArgument",
    "sanitize_grep_pattern",
    "sanitize_identifier",
    "sanitize_timestamp",
    "validate_flag",
    "validate_tail",
]
