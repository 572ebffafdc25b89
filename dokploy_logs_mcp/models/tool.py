"""Tool invocation data models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ToolName(str, Enum):
    """The fixed set of tools exposed to callers."""

    TEST_CONNECTION = "test-connection"
    LIST_CONTAINERS = "list-containers"
    GET_CONTAINER_LOGS = "get-container-logs"
    GET_CONTAINER_STATS = "get-container-stats"
    INSPECT_CONTAINER = "inspect-container"
    DOCKER_COMPOSE_LOGS = "docker-compose-logs"


@dataclass(frozen=True)
class ToolInvocation:
    """A validated tool name with its caller-supplied arguments."""

    tool: ToolName
    arguments: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Text payload returned to the caller."""

    text: str
    is_error: bool = False

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        """Build an error result with the standard prefix."""
        return cls(text=f"Error: {message}", is_error=True)
