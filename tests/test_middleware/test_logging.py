"""Tests for logging middleware."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from dokploy_logs_mcp.middleware.logging import LoggingMiddleware


@pytest.fixture
def mock_tool_context() -> MagicMock:
    """Create a mock middleware context for tool calls."""
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "get-container-logs"
    context.message.arguments = {"container": "web", "tail": 50}
    return context


@pytest.mark.asyncio
async def test_logs_tool_call_and_result(mock_tool_context: MagicMock) -> None:
    """Tool calls log name, arguments and a result summary."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)
    call_next = AsyncMock(return_value="line 1\nline 2")

    result = await middleware.on_call_tool(mock_tool_context, call_next)

    assert result == "line 1\nline 2"
    request_log = str(mock_logger.info.call_args_list[0])
    assert ">>> TOOL" in request_log
    assert "container='web'" in request_log
    level, *args = mock_logger.log.call_args.args
    assert level == logging.INFO
    assert "13 chars, 2 lines" in args


@pytest.mark.asyncio
async def test_logs_slow_calls_as_warning(mock_tool_context: MagicMock) -> None:
    """Calls over the threshold are logged at warning level."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger, slow_threshold_ms=0)

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    level, *args = mock_logger.log.call_args.args
    assert level == logging.WARNING
    assert "SLOW!" in args[-1]


@pytest.mark.asyncio
async def test_logs_and_reraises_errors(mock_tool_context: MagicMock) -> None:
    """Failing tool calls are logged and re-raised."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger)

    with pytest.raises(RuntimeError):
        await middleware.on_call_tool(
            mock_tool_context, AsyncMock(side_effect=RuntimeError("boom"))
        )

    error_call = str(mock_logger.error.call_args)
    assert "RuntimeError" in error_call
    assert "boom" in error_call


@pytest.mark.asyncio
async def test_logs_payloads_when_enabled(mock_tool_context: MagicMock) -> None:
    """Payload logging emits debug lines for args and result."""
    mock_logger = MagicMock()
    middleware = LoggingMiddleware(logger=mock_logger, include_payloads=True)

    await middleware.on_call_tool(mock_tool_context, AsyncMock(return_value="ok"))

    assert mock_logger.debug.call_count == 2


def test_format_args_truncates_long_values() -> None:
    """Long string arguments are shortened."""
    middleware = LoggingMiddleware()
    formatted = middleware._format_args({"filter": "x" * 80})
    assert "..." in formatted
    assert len(formatted) < 80


def test_truncate_payload() -> None:
    """Payloads over the limit are truncated."""
    middleware = LoggingMiddleware(max_payload_length=10)
    assert middleware._truncate("a" * 50).endswith("... [truncated]")


def test_summarize_result_with_content() -> None:
    """MCP results are summarized by content count."""
    middleware = LoggingMiddleware()
    result = MagicMock(content=[1, 2])
    assert middleware._summarize_result(result) == "2 content item(s)"
    assert middleware._summarize_result(None) == "null"
