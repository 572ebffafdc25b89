"""Dokploy logs FastMCP server.

This is a thin wrapper that wires together the MCP server with tools and
middleware. All business logic lives in the services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from dokploy_logs_mcp import __version__
from dokploy_logs_mcp.config import Settings
from dokploy_logs_mcp.dependencies import Dependencies
from dokploy_logs_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from dokploy_logs_mcp.tools import register_tools
from dokploy_logs_mcp.utils.console import MCPRequestFormatter

SERVER_NAME = "dokploy-logs-mcp"

NOISY_LOGGERS = [
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncssh",
    "httpx",
    "httpcore",
    "fastmcp",
    "mcp",
    "starlette",
    "anyio",
]

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure colorful stderr logging for the package.

    stdout carries the stdio protocol stream, so logs never go there.
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("dokploy_logs_mcp")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Install middleware in order: ErrorHandling -> Logging.

    Args:
        server: The FastMCP server to configure.
        settings: Settings with logging options.
    """
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server(deps: Dependencies | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        deps: Dependencies to use; created from the environment if omitted

    Returns:
        Configured FastMCP server instance
    """
    if deps is None:
        deps = Dependencies.create()
    settings = deps.settings

    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
        logger.info(
            "%s %s ready (default host=%s)",
            SERVER_NAME,
            __version__,
            settings.default_host,
        )
        try:
            yield {"default_host": settings.default_host}
        finally:
            logger.info("%s shutting down", SERVER_NAME)

    server = FastMCP(SERVER_NAME, version=__version__, lifespan=app_lifespan)

    configure_middleware(server, settings)
    register_tools(server, deps.dispatcher)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint for the HTTP transport."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server
