"""Docker command builders and result shaping.

Builders sanitize every caller-supplied value before it becomes an
argument, then return a structured RemoteCommand.
"""

import json
import logging
from typing import Any

from dokploy_logs_mcp.models import ExecutionResult, RemoteCommand
from dokploy_logs_mcp.services.executor import ExecutionFailure
from dokploy_logs_mcp.utils.validation import (
    sanitize_grep_pattern,
    sanitize_identifier,
    sanitize_timestamp,
)

logger = logging.getLogger(__name__)

DEFAULT_TAIL = 100

# Docker expands the literal \t itself
PS_FORMAT = "table {{.Names}}\\t{{.Status}}\\t{{.Image}}"
STATS_FORMAT = "table {{.Name}}\\t{{.CPUPerc}}\\t{{.MemUsage}}\\t{{.NetIO}}"
INSPECT_FORMAT = "{{json .}}"

# Header row of `docker ps` table output, kept visible when filtering
PS_HEADER = "NAMES"


def docker_ps_command(show_all: bool = False, name_filter: str | None = None) -> RemoteCommand:
    """Build `docker ps`, optionally piped through a header-preserving grep.

    Args:
        show_all: Include stopped containers
        name_filter: grep -E pattern; shell metacharacters are stripped

    Returns:
        RemoteCommand listing containers as a table
    """
    argv = ["docker", "ps"]
    if show_all:
        argv.append("-a")
    argv += ["--format", PS_FORMAT]

    pipe = None
    if name_filter:
        safe_filter = sanitize_grep_pattern(name_filter)
        if safe_filter:
            pipe = ("grep", "-E", f"{PS_HEADER}|{safe_filter}")

    return RemoteCommand(tuple(argv), pipe=pipe)


def docker_logs_command(
    container: str,
    tail: int = DEFAULT_TAIL,
    timestamps: bool = True,
    since: str | None = None,
) -> RemoteCommand:
    """Build `docker logs` for one container, stderr merged into stdout.

    Args:
        container: Container name or ID
        tail: Number of lines from the end
        timestamps: Annotate lines with timestamps
        since: Relative ("1h") or absolute ("2024-01-01") lower bound
    """
    safe_container = sanitize_identifier(container, "container name")
    argv = ["docker", "logs", "--tail", str(int(tail))]
    if timestamps:
        argv.append("-t")
    if since:
        argv += ["--since", sanitize_timestamp(since)]
    argv.append(safe_container)
    return RemoteCommand(tuple(argv), merge_stderr=True)


def docker_stats_command(container: str | None = None) -> RemoteCommand:
    """Build a single-shot `docker stats`, optionally for one container."""
    argv = ["docker", "stats", "--no-stream", "--format", STATS_FORMAT]
    if container not in (None, ""):
        argv.append(sanitize_identifier(container, "container name"))
    return RemoteCommand(tuple(argv))


def docker_inspect_command(container: str) -> RemoteCommand:
    """Build `docker inspect` emitting one JSON object."""
    safe_container = sanitize_identifier(container, "container name")
    return RemoteCommand(("docker", "inspect", "--format", INSPECT_FORMAT, safe_container))


def compose_logs_command(
    project: str,
    tail: int = DEFAULT_TAIL,
    service: str | None = None,
) -> RemoteCommand:
    """Build `docker compose logs` for a project, stderr merged into stdout.

    Args:
        project: Compose project name
        tail: Number of lines from the end
        service: Limit output to one service
    """
    safe_project = sanitize_identifier(project, "project name")
    argv = ["docker", "compose", "-p", safe_project, "logs", "--tail", str(int(tail))]
    if service not in (None, ""):
        argv.append(sanitize_identifier(service, "service name"))
    return RemoteCommand(tuple(argv), merge_stderr=True)


def checked_output(result: ExecutionResult, failure_message: str) -> str:
    """Return stdout, treating any non-zero exit as a failure.

    Raises:
        ExecutionFailure: If the command exited non-zero
    """
    if not result.ok:
        raise ExecutionFailure(result.stderr or failure_message)
    return result.stdout


def log_output(result: ExecutionResult, failure_message: str) -> str:
    """Return log text, failing only when a non-zero exit produced no stdout.

    Log commands exit non-zero for reasons that still leave useful
    output, so stdout wins over the exit status.

    Raises:
        ExecutionFailure: If exit status is non-zero and stdout is empty
    """
    if not result.ok and not result.stdout:
        raise ExecutionFailure(result.stderr or failure_message)
    return result.stdout or result.stderr


def _dig(data: dict[str, Any], *keys: str) -> Any:
    """Walk nested dicts, returning None when a level is missing."""
    value: Any = data
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def summarize_inspect(output: str) -> str:
    """Reduce `docker inspect` JSON to the fields callers care about.

    Returns:
        Pretty-printed JSON with name, state, image, created, ports, env
        and mounts, or the raw output unchanged if it is not a JSON object.
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        logger.debug("Inspect output is not JSON (%s), returning raw text", e)
        return output

    if not isinstance(data, dict):
        logger.debug("Inspect output is %s, not an object, returning raw text", type(data).__name__)
        return output

    summary = {
        "name": data.get("Name"),
        "state": data.get("State"),
        "image": _dig(data, "Config", "Image"),
        "created": data.get("Created"),
        "ports": _dig(data, "NetworkSettings", "Ports"),
        "env": _dig(data, "Config", "Env"),
        "mounts": data.get("Mounts"),
    }
    return json.dumps(summary, indent=2, ensure_ascii=False)
