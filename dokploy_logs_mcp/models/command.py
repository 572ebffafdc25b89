"""Remote command execution data models."""

import shlex
from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteCommand:
    """A remote command as discrete arguments.

    Every argument is quoted on render, so only the renderer can introduce
    shell syntax (the pipe and the stderr merge).
    """

    argv: tuple[str, ...]
    pipe: tuple[str, ...] | None = None
    merge_stderr: bool = False

    def render(self) -> str:
        """Render the command line sent to the remote shell."""
        rendered = shlex.join(self.argv)
        if self.merge_stderr:
            rendered += " 2>&1"
        if self.pipe:
            rendered += " | " + shlex.join(self.pipe)
        return rendered

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ExecutionRequest:
    """A single command to run on a host within a time budget."""

    host: str
    command: RemoteCommand | str
    timeout: float


@dataclass(frozen=True)
class ExecutionResult:
    """Result of a remote command execution."""

    stdout: str
    stderr: str
    exit_status: int

    @property
    def ok(self) -> bool:
        """Whether the remote command exited with status 0."""
        return self.exit_status == 0
