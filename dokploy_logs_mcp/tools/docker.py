"""MCP tools for inspecting Docker containers on a remote host."""

import logging
from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from dokploy_logs_mcp.models import ToolName
from dokploy_logs_mcp.services import Dispatcher

logger = logging.getLogger(__name__)

HostArg = Annotated[
    str | None,
    Field(description="SSH host (from ~/.ssh/config). Defaults to the configured host"),
]
ContainerArg = Annotated[str, Field(description="Container name or ID (required)")]
TailArg = Annotated[
    int | None,
    Field(description="Number of lines to show from the end. Default: 100"),
]

TOOL_DESCRIPTIONS: dict[ToolName, str] = {
    ToolName.TEST_CONNECTION: "Test SSH connection to a server",
    ToolName.LIST_CONTAINERS: "List all Docker containers on the remote server",
    ToolName.GET_CONTAINER_LOGS: "Get logs from a Docker container",
    ToolName.GET_CONTAINER_STATS: "Get resource usage statistics for containers",
    ToolName.INSPECT_CONTAINER: "Get detailed information about a container",
    ToolName.DOCKER_COMPOSE_LOGS: "Get logs from a Docker Compose service",
}


async def call_tool(dispatcher: Dispatcher, tool: ToolName, **arguments: Any) -> str:
    """Dispatch a tool call and translate error results into ToolError.

    Arguments left as None are omitted so the dispatcher applies defaults.

    Raises:
        ToolError: If the dispatcher reported an error result
    """
    provided = {key: value for key, value in arguments.items() if value is not None}
    result = await dispatcher.dispatch(tool.value, provided)
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def register_tools(server: FastMCP, dispatcher: Dispatcher) -> None:
    """Register the Docker inspection tools on a server.

    Args:
        server: FastMCP server to register on
        dispatcher: Dispatcher that executes the tool calls
    """

    def register(tool: ToolName) -> Any:
        return server.tool(
            name=tool.value,
            description=TOOL_DESCRIPTIONS[tool],
            output_schema=None,
        )

    @register(ToolName.TEST_CONNECTION)
    async def test_connection(host: HostArg = None) -> str:
        return await call_tool(dispatcher, ToolName.TEST_CONNECTION, host=host)

    @register(ToolName.LIST_CONTAINERS)
    async def list_containers(
        host: HostArg = None,
        all: Annotated[
            bool | None,
            Field(description="Show all containers (including stopped). Default: false"),
        ] = None,
        filter: Annotated[
            str | None,
            Field(description="Filter containers by name (grep pattern)"),
        ] = None,
    ) -> str:
        return await call_tool(
            dispatcher, ToolName.LIST_CONTAINERS, host=host, all=all, filter=filter
        )

    @register(ToolName.GET_CONTAINER_LOGS)
    async def get_container_logs(
        container: ContainerArg,
        host: HostArg = None,
        tail: TailArg = None,
        since: Annotated[
            str | None,
            Field(description="Show logs since timestamp (e.g., '1h', '30m', '2024-01-01')"),
        ] = None,
        timestamps: Annotated[
            bool | None,
            Field(description="Show timestamps. Default: true"),
        ] = None,
    ) -> str:
        return await call_tool(
            dispatcher,
            ToolName.GET_CONTAINER_LOGS,
            host=host,
            container=container,
            tail=tail,
            since=since,
            timestamps=timestamps,
        )

    @register(ToolName.GET_CONTAINER_STATS)
    async def get_container_stats(
        host: HostArg = None,
        container: Annotated[
            str | None,
            Field(description="Container name or ID (optional, shows all if not specified)"),
        ] = None,
    ) -> str:
        return await call_tool(
            dispatcher, ToolName.GET_CONTAINER_STATS, host=host, container=container
        )

    @register(ToolName.INSPECT_CONTAINER)
    async def inspect_container(container: ContainerArg, host: HostArg = None) -> str:
        return await call_tool(
            dispatcher, ToolName.INSPECT_CONTAINER, host=host, container=container
        )

    @register(ToolName.DOCKER_COMPOSE_LOGS)
    async def docker_compose_logs(
        project: Annotated[str, Field(description="Compose project name (required)")],
        host: HostArg = None,
        service: Annotated[
            str | None,
            Field(description="Service name (optional, shows all services if not specified)"),
        ] = None,
        tail: TailArg = None,
    ) -> str:
        return await call_tool(
            dispatcher,
            ToolName.DOCKER_COMPOSE_LOGS,
            host=host,
            project=project,
            service=service,
            tail=tail,
        )

    logger.debug("Registered %d tools", len(TOOL_DESCRIPTIONS))
