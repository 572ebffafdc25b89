"""Dependency container for the Dokploy logs MCP server.

Settings are read once and threaded into the executor and dispatcher,
so nothing downstream reads the process environment.
"""

from dataclasses import dataclass

from dokploy_logs_mcp.config import Settings
from dokploy_logs_mcp.services import Dispatcher, RemoteExecutor


@dataclass
class Dependencies:
    """Container for settings, executor and dispatcher.

    Example:
        deps = Dependencies.create()
        result = await deps.dispatcher.dispatch("list-containers", {})
    """

    settings: Settings
    executor: RemoteExecutor
    dispatcher: Dispatcher

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from environment settings."""
        return cls.from_settings(Settings.from_env())

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dependencies":
        """Create dependencies with custom settings.

        Args:
            settings: Settings instance

        Returns:
            Dependencies wired from settings
        """
        executor = RemoteExecutor.from_settings(settings)
        dispatcher = Dispatcher.from_settings(executor, settings)
        return cls(settings=settings, executor=executor, dispatcher=dispatcher)
