"""Input sanitization for values interpolated into remote commands.

Identifiers and timestamps are rejected when they contain anything outside
their allowed form. Grep filters are stripped instead, since they carry
partial pattern text.
"""

import re
from typing import Any, Final


class InvalidArgument(ValueError):
    """Caller input is malformed or contains disallowed characters."""

    pass


IDENTIFIER_PATTERN: Final = re.compile(r"[A-Za-z0-9_.:\-]+")

# Relative ("1h", "30m") or ISO date with optional time of day
TIMESTAMP_PATTERN: Final = re.compile(
    r"[0-9]+[smhd]|[0-9]{4}-[0-9]{2}-[0-9]{2}(T[0-9:]+)?"
)

GREP_METACHARACTERS: Final[str] = ";&|`$(){}[]<>\\!\"'"

_GREP_STRIP_TABLE: Final = str.maketrans("", "", GREP_METACHARACTERS)


def sanitize_identifier(value: Any, kind: str = "identifier") -> str:
    """Validate a container, project, service or host name.

    Args:
        value: Caller-supplied value
        kind: Human-readable argument name used in error messages

    Returns:
        The value unchanged

    Raises:
        InvalidArgument: If value is not a non-empty string of
            [A-Za-z0-9_.:-] characters
    """
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid {kind}: expected a string, got {value!r}")
    if not value:
        raise InvalidArgument(f"Invalid {kind}: value cannot be empty")
    if not IDENTIFIER_PATTERN.fullmatch(value):
        raise InvalidArgument(f"Invalid characters in {kind}: {value}")
    return value


def sanitize_grep_pattern(value: Any) -> str:
    """Strip shell metacharacters from a grep filter.

    Everything else, including spaces and regex syntax like ``.*``,
    is kept as-is.

    Raises:
        InvalidArgument: If value is not a string
    """
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid filter: expected a string, got {value!r}")
    return value.translate(_GREP_STRIP_TABLE)


def sanitize_timestamp(value: Any) -> str:
    """Validate a ``--since`` bound such as ``1h``, ``30m`` or ``2024-01-01``.

    Raises:
        InvalidArgument: If value does not match an accepted format
    """
    if not isinstance(value, str) or not TIMESTAMP_PATTERN.fullmatch(value):
        raise InvalidArgument(f"Invalid timestamp format: {value}")
    return value


def validate_tail(value: Any, default: int = 100) -> int:
    """Validate a tail line count.

    Args:
        value: Caller-supplied count, or None for the default
        default: Count used when value is None

    Returns:
        Non-negative line count

    Raises:
        InvalidArgument: If value is not a non-negative integer
    """
    if value is None:
        return default
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"Invalid tail: expected an integer, got {value!r}")
    if value < 0:
        raise InvalidArgument(f"Invalid tail: must be >= 0, got {value}")
    return value


def validate_flag(value: Any, name: str, default: bool) -> bool:
    """Validate an optional boolean flag."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidArgument(f"Invalid {name}: expected a boolean, got {value!r}")
    return value
