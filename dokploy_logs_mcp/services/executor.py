"""Remote command execution over SSH.

Each call opens its own SSH session, runs one command and closes the
session. Host aliases are resolved through the OpenSSH client config, and
authentication is key/agent only, so no call can block on a prompt.
"""

import asyncio
import logging
import os
from typing import TYPE_CHECKING, Any

import asyncssh

from dokploy_logs_mcp.models import ExecutionRequest, ExecutionResult, RemoteCommand

if TYPE_CHECKING:
    from dokploy_logs_mcp.config import Settings

logger = logging.getLogger(__name__)

PROBE_COMMAND = RemoteCommand(("echo", "ok"))
PROBE_EXPECTED_OUTPUT = "ok"


class ExecutionError(Exception):
    """Base class for remote execution errors."""

    def __init__(self, message: str, host: str | None = None) -> None:
        """Initialize execution error.

        Args:
            message: Human-readable error description
            host: SSH host alias the command targeted
        """
        self.host = host
        super().__init__(message)


class ExecutionTimeout(ExecutionError):
    """Remote command did not finish within its time budget."""

    def __init__(self, host: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"SSH command timed out after {timeout:g}s", host=host)


class ExecutionFailure(ExecutionError):
    """Transport could not run the command, or the command failed outright."""

    pass


def _decode(data: str | bytes | None) -> str:
    """Normalize process output to trimmed text."""
    if data is None:
        return ""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return data.strip()


class RemoteExecutor:
    """Runs single commands on remote hosts, one SSH session per call."""

    def __init__(
        self,
        command_timeout: float = 30.0,
        connect_timeout: float = 10.0,
        probe_timeout: float = 10.0,
        ssh_config_path: str | None = None,
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
    ) -> None:
        """Initialize executor.

        Args:
            command_timeout: Default wall-clock budget per command, in seconds
            connect_timeout: Budget for the SSH connect phase, in seconds
            probe_timeout: Budget for the connectivity probe, in seconds
            ssh_config_path: OpenSSH client config file, or None for ~/.ssh/config
            known_hosts: known_hosts file, or None for ~/.ssh/known_hosts
            strict_host_key_checking: Whether unknown host keys are rejected
        """
        self.command_timeout = command_timeout
        self.connect_timeout = connect_timeout
        self.probe_timeout = probe_timeout
        self.ssh_config_path = ssh_config_path
        self.known_hosts = known_hosts
        self.strict_host_key_checking = strict_host_key_checking

        if not strict_host_key_checking:
            logger.warning(
                "SSH host key verification DISABLED - vulnerable to MITM attacks"
            )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RemoteExecutor":
        """Create an executor from application settings."""
        return cls(
            command_timeout=settings.command_timeout,
            connect_timeout=settings.connect_timeout,
            probe_timeout=settings.probe_timeout,
            ssh_config_path=settings.ssh_config_path,
            known_hosts=settings.known_hosts,
            strict_host_key_checking=settings.strict_host_key_checking,
        )

    def _connect_options(self) -> dict[str, Any]:
        """Build keyword arguments for asyncssh.connect."""
        options: dict[str, Any] = {"connect_timeout": self.connect_timeout}
        if self.ssh_config_path:
            options["config"] = [os.path.expanduser(self.ssh_config_path)]
        if not self.strict_host_key_checking:
            options["known_hosts"] = None
        elif self.known_hosts:
            options["known_hosts"] = os.path.expanduser(self.known_hosts)
        return options

    async def execute(
        self,
        command: RemoteCommand | str,
        host: str,
        timeout: float | None = None,
    ) -> ExecutionResult:
        """Run a command on a host.

        Args:
            command: Command to run; must already be built from sanitized input
            host: SSH host alias
            timeout: Wall-clock budget in seconds (default: command_timeout)

        Returns:
            ExecutionResult with trimmed stdout/stderr and the remote exit status.
            A non-zero exit status is returned, not raised.

        Raises:
            ExecutionTimeout: If the command did not finish within timeout
            ExecutionFailure: If the SSH session could not be established
        """
        request = ExecutionRequest(
            host=host,
            command=command,
            timeout=self.command_timeout if timeout is None else timeout,
        )
        return await self.run(request)

    async def run(self, request: ExecutionRequest) -> ExecutionResult:
        """Run an execution request, racing it against its timeout."""
        rendered = str(request.command)
        logger.debug(
            "Running on %s (timeout=%gs): %s",
            request.host,
            request.timeout,
            rendered,
        )

        try:
            result = await asyncio.wait_for(
                self._run_session(request.host, rendered),
                timeout=request.timeout,
            )
        except TimeoutError as e:
            # wait_for cancels the session task, which closes the connection
            logger.warning(
                "Command on %s timed out after %gs: %s",
                request.host,
                request.timeout,
                rendered,
            )
            raise ExecutionTimeout(request.host, request.timeout) from e

        logger.debug(
            "Command on %s exited with status %d (stdout=%d chars, stderr=%d chars)",
            request.host,
            result.exit_status,
            len(result.stdout),
            len(result.stderr),
        )
        return result

    async def _run_session(self, host: str, command: str) -> ExecutionResult:
        """Open one SSH session, run the command and drain its output."""
        try:
            conn = await asyncssh.connect(host, **self._connect_options())
        except TimeoutError as e:
            logger.warning("Connection to %s timed out after %gs", host, self.connect_timeout)
            raise ExecutionFailure(
                f"SSH connection to {host} timed out after {self.connect_timeout:g}s",
                host=host,
            ) from e
        except (OSError, ValueError, asyncssh.Error) as e:
            logger.warning("Connection to %s failed: %s", host, e)
            raise ExecutionFailure(f"SSH execution failed: {e}", host=host) from e

        async with conn:
            try:
                # Raw bytes; _decode replaces invalid UTF-8 instead of dropping output
                completed = await conn.run(command, check=False, encoding=None)
            except (OSError, asyncssh.Error) as e:
                logger.warning("Command on %s failed: %s", host, e)
                raise ExecutionFailure(f"SSH execution failed: {e}", host=host) from e

        # No exit status means the channel closed before the command reported one
        returncode = completed.returncode if completed.returncode is not None else -1

        return ExecutionResult(
            stdout=_decode(completed.stdout),
            stderr=_decode(completed.stderr),
            exit_status=returncode,
        )

    async def test_connection(self, host: str) -> bool:
        """Check that a host accepts SSH sessions and runs commands.

        Returns:
            True only if the probe exits 0 and prints exactly "ok".
            Errors, including timeouts, yield False.
        """
        try:
            result = await self.execute(PROBE_COMMAND, host, timeout=self.probe_timeout)
        except Exception as e:
            logger.warning("Connection test to %s failed: %s", host, e)
            return False

        success = result.exit_status == 0 and result.stdout == PROBE_EXPECTED_OUTPUT
        logger.info("Connection test to %s: %s", host, "succeeded" if success else "failed")
        return success
