"""Dokploy logs MCP: remote Docker inspection tools over SSH."""

__version__ = "1.0.0"
