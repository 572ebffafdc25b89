"""Error handling middleware for consistent error logging."""

import logging
import traceback
from collections import defaultdict
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import MiddlewareContext

from dokploy_logs_mcp.middleware.base import DokployMiddleware


class ErrorHandlingMiddleware(DokployMiddleware):
    """Logs exceptions escaping request handlers and counts them by type.

    Tool error results surface as ToolError and are logged as warnings;
    anything else is unexpected and logged as an error. The exception is
    always re-raised so the protocol layer can report it.

    Example:
        >>> mcp.add_middleware(ErrorHandlingMiddleware(include_traceback=True))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to log the full traceback of
                unexpected errors.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self._error_counts: dict[str, int] = defaultdict(int)

    def get_error_stats(self) -> dict[str, int]:
        """Get error statistics by exception type.

        Returns:
            Dictionary mapping exception type names to occurrence counts.
        """
        return dict(self._error_counts)

    def reset_stats(self) -> None:
        """Reset error statistics."""
        self._error_counts.clear()

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log errors raised while handling a request, then re-raise."""
        try:
            return await call_next(context)

        except ToolError as e:
            self._error_counts[type(e).__name__] += 1
            self.logger.warning("Tool error in %s: %s", context.method, str(e))
            raise

        except Exception as e:
            error_type = type(e).__name__
            self._error_counts[error_type] += 1

            if self.include_traceback:
                self.logger.error(
                    "Error in %s: %s: %s\n%s",
                    context.method,
                    error_type,
                    str(e),
                    traceback.format_exc(),
                )
            else:
                self.logger.error(
                    "Error in %s: %s: %s",
                    context.method,
                    error_type,
                    str(e),
                )
            raise
