"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_SSH_HOST = "dokploy"


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # SSH
    default_host: str = field(default=DEFAULT_SSH_HOST)
    ssh_config_path: str | None = field(default=None)
    known_hosts: str | None = field(default=None)
    strict_host_key_checking: bool = field(default=True)

    # Timeouts (seconds)
    command_timeout: int = field(default=30)
    logs_timeout: int = field(default=60)
    probe_timeout: int = field(default=10)
    connect_timeout: int = field(default=10)

    # Transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_payloads: bool = field(default=False)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Supports DOKPLOY_LOGS_* variables; the default host also honours
        the plain SSH_HOST variable. DOKPLOY_LOGS_* takes precedence.

        Returns:
            Settings instance with values from environment
        """
        known_hosts = os.getenv("DOKPLOY_LOGS_KNOWN_HOSTS") or None
        strict = cls._get_bool("DOKPLOY_LOGS_STRICT_HOST_KEY_CHECKING", True)
        if known_hosts and known_hosts.lower() == "none":
            logger.critical(
                "SSH HOST KEY VERIFICATION DISABLED via DOKPLOY_LOGS_KNOWN_HOSTS=none. "
                "This is vulnerable to MITM attacks."
            )
            known_hosts = None
            strict = False

        return cls(
            default_host=cls._get_str("DOKPLOY_LOGS_SSH_HOST", "SSH_HOST", DEFAULT_SSH_HOST),
            ssh_config_path=os.getenv("DOKPLOY_LOGS_SSH_CONFIG") or None,
            known_hosts=known_hosts,
            strict_host_key_checking=strict,
            command_timeout=cls._get_int("DOKPLOY_LOGS_COMMAND_TIMEOUT", 30),
            logs_timeout=cls._get_int("DOKPLOY_LOGS_LOGS_TIMEOUT", 60),
            probe_timeout=cls._get_int("DOKPLOY_LOGS_PROBE_TIMEOUT", 10),
            connect_timeout=cls._get_int("DOKPLOY_LOGS_CONNECT_TIMEOUT", 10),
            transport=cls._get_transport(),
            http_host=os.getenv("DOKPLOY_LOGS_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("DOKPLOY_LOGS_HTTP_PORT", 8000),
            log_level=os.getenv("DOKPLOY_LOGS_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("DOKPLOY_LOGS_LOG_COLORS", True),
            log_payloads=cls._get_bool("DOKPLOY_LOGS_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("DOKPLOY_LOGS_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("DOKPLOY_LOGS_INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_str(key: str, legacy_key: str, default: str) -> str:
        """Get string from environment with legacy fallback.

        Args:
            key: Primary environment variable key
            legacy_key: Fallback key (empty string to skip)
            default: Default value if neither is set

        Returns:
            String value from environment or default
        """
        value = os.getenv(key)
        if not value and legacy_key:
            value = os.getenv(legacy_key)
        return value or default

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get positive integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

        if parsed <= 0:
            logger.warning("%s must be > 0, got %d, using default %d", key, parsed, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("stdio" or "http")
        """
        transport = os.getenv("DOKPLOY_LOGS_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
