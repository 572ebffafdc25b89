"""Entry point for the Dokploy logs MCP server."""

import logging
import sys

from dokploy_logs_mcp.config import Settings
from dokploy_logs_mcp.dependencies import Dependencies
from dokploy_logs_mcp.server import configure_logging, create_server

logger = logging.getLogger(__name__)


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server with the configured transport."""
    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings)

    mcp = create_server(Dependencies.from_settings(settings))

    if settings.transport == "stdio":
        logger.info("Dokploy Logs MCP server running on stdio")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Dokploy Logs MCP server running on http://%s:%d",
            settings.http_host,
            settings.http_port,
        )
        mcp.run(
            transport="http",
            host=settings.http_host,
            port=settings.http_port,
        )


def main() -> None:
    """Console script entry point; exits with status 1 on startup failure."""
    try:
        run_server()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.critical("Fatal error starting server", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
