"""Tool dispatch: arguments in, sanitized command out, shaped text back.

The dispatcher is the error boundary for tool calls. Whatever goes wrong
while validating, executing or shaping, the caller gets a ToolResult.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from dokploy_logs_mcp.config import DEFAULT_SSH_HOST
from dokploy_logs_mcp.models import ToolInvocation, ToolName, ToolResult
from dokploy_logs_mcp.services.commands import (
    DEFAULT_TAIL,
    checked_output,
    compose_logs_command,
    docker_inspect_command,
    docker_logs_command,
    docker_ps_command,
    docker_stats_command,
    log_output,
    summarize_inspect,
)
from dokploy_logs_mcp.utils.validation import (
    InvalidArgument,
    sanitize_identifier,
    validate_flag,
    validate_tail,
)

if TYPE_CHECKING:
    from dokploy_logs_mcp.config import Settings
    from dokploy_logs_mcp.services.executor import RemoteExecutor

logger = logging.getLogger(__name__)

Handler = Callable[[str, Mapping[str, Any]], Awaitable[ToolResult]]


class UnknownTool(LookupError):
    """Tool name is not one of the supported tools."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


def parse_invocation(name: str, arguments: Mapping[str, Any] | None) -> ToolInvocation:
    """Turn a raw tool name and argument map into a ToolInvocation.

    Raises:
        UnknownTool: If name is not a supported tool
        InvalidArgument: If arguments is not a mapping
    """
    try:
        tool = ToolName(name)
    except ValueError:
        raise UnknownTool(name) from None

    if arguments is None:
        arguments = {}
    elif not isinstance(arguments, Mapping):
        raise InvalidArgument(f"Arguments must be an object, got {type(arguments).__name__}")

    return ToolInvocation(tool=tool, arguments=dict(arguments))


def _require(args: Mapping[str, Any], key: str, label: str) -> Any:
    """Get a required argument, rejecting missing or empty values."""
    value = args.get(key)
    if value is None or value == "":
        raise InvalidArgument(f"{label} is required")
    return value


class Dispatcher:
    """Maps tool invocations to remote commands and shapes their results."""

    def __init__(
        self,
        executor: "RemoteExecutor",
        default_host: str = DEFAULT_SSH_HOST,
        command_timeout: float = 30.0,
        logs_timeout: float = 60.0,
    ) -> None:
        """Initialize dispatcher.

        Args:
            executor: Executor used to run remote commands
            default_host: SSH host alias used when a call omits "host"
            command_timeout: Budget in seconds for short commands
            logs_timeout: Budget in seconds for log tailing commands

        Raises:
            RuntimeError: If a tool has no handler
        """
        self.executor = executor
        self.default_host = default_host
        self.command_timeout = command_timeout
        self.logs_timeout = logs_timeout

        self._handlers: dict[ToolName, Handler] = {
            ToolName.TEST_CONNECTION: self._test_connection,
            ToolName.LIST_CONTAINERS: self._list_containers,
            ToolName.GET_CONTAINER_LOGS: self._get_container_logs,
            ToolName.GET_CONTAINER_STATS: self._get_container_stats,
            ToolName.INSPECT_CONTAINER: self._inspect_container,
            ToolName.DOCKER_COMPOSE_LOGS: self._docker_compose_logs,
        }
        missing = set(ToolName) - self._handlers.keys()
        if missing:
            raise RuntimeError(f"No handler for tools: {sorted(t.value for t in missing)}")

    @classmethod
    def from_settings(cls, executor: "RemoteExecutor", settings: "Settings") -> "Dispatcher":
        """Create a dispatcher from application settings."""
        return cls(
            executor,
            default_host=settings.default_host,
            command_timeout=settings.command_timeout,
            logs_timeout=settings.logs_timeout,
        )

    async def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Run a tool by name.

        Args:
            name: Tool name, e.g. "get-container-logs"
            arguments: Tool arguments; "host" defaults to the configured host

        Returns:
            ToolResult; errors are reported with is_error=True, never raised
        """
        try:
            invocation = parse_invocation(name, arguments)
            return await self.invoke(invocation)
        except Exception as e:
            logger.warning("Tool %s failed: %s: %s", name, type(e).__name__, e)
            return ToolResult.error(str(e))

    async def invoke(self, invocation: ToolInvocation) -> ToolResult:
        """Run a parsed invocation. Errors propagate to the caller."""
        args = invocation.arguments
        host = sanitize_identifier(args.get("host") or self.default_host, "host")
        handler = self._handlers[invocation.tool]
        return await handler(host, args)

    async def _test_connection(self, host: str, args: Mapping[str, Any]) -> ToolResult:
        if await self.executor.test_connection(host):
            return ToolResult(f"✓ Successfully connected to {host}")
        return ToolResult(f"✗ Failed to connect to {host}. Check your SSH config.")

    async def _list_containers(self, host: str, args: Mapping[str, Any]) -> ToolResult:
        command = docker_ps_command(
            show_all=validate_flag(args.get("all"), "all", default=False),
            name_filter=args.get("filter"),
        )
        result = await self.executor.execute(command, host, timeout=self.command_timeout)
        return ToolResult(checked_output(result, "Failed to list containers"))

    async def _get_container_logs(self, host: str, args: Mapping[str, Any]) -> ToolResult:
        command = docker_logs_command(
            _require(args, "container", "Container name"),
            tail=validate_tail(args.get("tail"), DEFAULT_TAIL),
            timestamps=validate_flag(args.get("timestamps"), "timestamps", default=True),
            since=args.get("since"),
        )
        result = await self.executor.execute(command, host, timeout=self.logs_timeout)
        return ToolResult(log_output(result, "Failed to get container logs"))

    async def _get_container_stats(self, host: str, args: Mapping[str, Any]) -> ToolResult:
        command = docker_stats_command(args.get("container"))
        result = await self.executor.execute(command, host, timeout=self.command_timeout)
        return ToolResult(checked_output(result, "Failed to get container stats"))

    async def _inspect_container(self, host: str, args: Mapping[str, Any]) -> ToolResult:
        command = docker_inspect_command(_require(args, "container", "Container name"))
        result = await self.executor.execute(command, host, timeout=self.command_timeout)
        output = checked_output(result, "Failed to inspect container")
        return ToolResult(summarize_inspect(output))

    async def _docker_compose_logs(self, host: str, args: Mapping[str, Any]) -> ToolResult:
        command = compose_logs_command(
            _require(args, "project", "Project name"),
            tail=validate_tail(args.get("tail"), DEFAULT_TAIL),
            service=args.get("service"),
        )
        result = await self.executor.execute(command, host, timeout=self.logs_timeout)
        return ToolResult(log_output(result, "Failed to get compose logs"))
