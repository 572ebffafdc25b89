"""Tests for error handling middleware."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastmcp.exceptions import ToolError

from dokploy_logs_mcp.middleware.errors import ErrorHandlingMiddleware


@pytest.fixture
def error_middleware() -> ErrorHandlingMiddleware:
    """Create an error handling middleware instance."""
    return ErrorHandlingMiddleware()


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a mock middleware context."""
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "get-container-logs"
    return context


@pytest.mark.asyncio
async def test_error_middleware_passes_through_success(
    error_middleware: ErrorHandlingMiddleware,
    mock_context: MagicMock,
) -> None:
    """ErrorHandlingMiddleware passes through successful requests."""
    call_next = AsyncMock(return_value="success")

    result = await error_middleware.on_message(mock_context, call_next)

    assert result == "success"
    assert error_middleware.get_error_stats() == {}


@pytest.mark.asyncio
async def test_error_middleware_logs_unexpected_errors(mock_context: MagicMock) -> None:
    """Unexpected errors are logged at error level with traceback."""
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger, include_traceback=True)
    call_next = AsyncMock(side_effect=ValueError("test error"))

    with pytest.raises(ValueError):
        await middleware.on_message(mock_context, call_next)

    mock_logger.error.assert_called_once()
    error_call = str(mock_logger.error.call_args)
    assert "ValueError" in error_call
    assert "Traceback" in error_call


@pytest.mark.asyncio
async def test_error_middleware_logs_tool_errors_as_warnings(mock_context: MagicMock) -> None:
    """Tool error results are logged as warnings and re-raised."""
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger)
    call_next = AsyncMock(side_effect=ToolError("Error: Unknown tool: x"))

    with pytest.raises(ToolError):
        await middleware.on_message(mock_context, call_next)

    mock_logger.warning.assert_called_once()
    mock_logger.error.assert_not_called()


@pytest.mark.asyncio
async def test_error_middleware_tracks_error_stats(
    error_middleware: ErrorHandlingMiddleware,
    mock_context: MagicMock,
) -> None:
    """Errors are counted by type."""
    for exc in (ValueError("a"), ValueError("b"), ToolError("c")):
        with pytest.raises(type(exc)):
            await error_middleware.on_message(mock_context, AsyncMock(side_effect=exc))

    assert error_middleware.get_error_stats() == {"ValueError": 2, "ToolError": 1}


@pytest.mark.asyncio
async def test_error_middleware_reset_stats(
    error_middleware: ErrorHandlingMiddleware,
    mock_context: MagicMock,
) -> None:
    """reset_stats clears the counters."""
    with pytest.raises(RuntimeError):
        await error_middleware.on_message(mock_context, AsyncMock(side_effect=RuntimeError()))

    error_middleware.reset_stats()

    assert error_middleware.get_error_stats() == {}
