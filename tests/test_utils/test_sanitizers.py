"""Tests for command input sanitization."""

import pytest

from dokploy_logs_mcp.utils.validation import (
    GREP_METACHARACTERS,
    InvalidArgument,
    sanitize_grep_pattern,
    sanitize_identifier,
    sanitize_timestamp,
    validate_flag,
    validate_tail,
)


class TestIdentifierSanitization:
    """Identifiers are accepted verbatim or rejected, never altered."""

    @pytest.mark.parametrize(
        "name",
        ["my-container", "app_1", "web.service", "3f2a9c1b7e4d", "registry:5000", "dokploy"],
    )
    def test_allows_valid(self, name: str) -> None:
        """Names made of [A-Za-z0-9_.:-] pass unchanged."""
        assert sanitize_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        [
            "container;id",
            "app`whoami`",
            "test$(ls)",
            "a b",
            "../etc",
            "name\n",
            "web|cat",
            "web&",
            "tab\tname",
            "ünïcode",
        ],
    )
    def test_rejects_disallowed_characters(self, name: str) -> None:
        """Any character outside the allowed class is rejected."""
        with pytest.raises(InvalidArgument, match="Invalid characters"):
            sanitize_identifier(name, "container name")

    def test_rejects_empty(self) -> None:
        """Empty identifiers are rejected."""
        with pytest.raises(InvalidArgument, match="cannot be empty"):
            sanitize_identifier("")

    def test_rejects_non_string(self) -> None:
        """Non-string identifiers are rejected."""
        with pytest.raises(InvalidArgument, match="expected a string"):
            sanitize_identifier(42)

    def test_error_names_the_argument(self) -> None:
        """Error message mentions which argument was invalid."""
        with pytest.raises(InvalidArgument, match="project name"):
            sanitize_identifier("proj|x", "project name")

    def test_invalid_argument_is_value_error(self) -> None:
        """InvalidArgument can be caught as ValueError."""
        assert issubclass(InvalidArgument, ValueError)


class TestGrepPatternSanitization:
    """Grep filters are stripped of shell metacharacters, not rejected."""

    def test_strips_every_metacharacter(self) -> None:
        """All listed metacharacters are removed."""
        assert sanitize_grep_pattern(GREP_METACHARACTERS) == ""

    def test_strips_injection_attempt(self) -> None:
        """Command separators and substitutions are removed."""
        assert sanitize_grep_pattern("web; rm -rf /") == "web rm -rf /"
        assert sanitize_grep_pattern("$(whoami)") == "whoami"
        assert sanitize_grep_pattern("`id`") == "id"
        assert sanitize_grep_pattern("a|b&c") == "abc"

    def test_keeps_spaces_and_regex_syntax(self) -> None:
        """Spaces, dots, stars, anchors and plus signs are untouched."""
        assert sanitize_grep_pattern("^web .*api+") == "^web .*api+"

    def test_plain_pattern_unchanged(self) -> None:
        """Patterns without metacharacters pass through."""
        assert sanitize_grep_pattern("dokploy-traefik") == "dokploy-traefik"

    def test_rejects_non_string(self) -> None:
        """Non-string filters are rejected."""
        with pytest.raises(InvalidArgument):
            sanitize_grep_pattern(["web"])


class TestTimestampValidation:
    """Since-timestamps must be relative durations or ISO dates."""

    @pytest.mark.parametrize(
        "value",
        ["1h", "30m", "45s", "7d", "2024-01-01", "2024-01-01T10:00:00"],
    )
    def test_accepts_valid(self, value: str) -> None:
        """Accepted formats are returned unchanged."""
        assert sanitize_timestamp(value) == value

    @pytest.mark.parametrize(
        "value",
        ["1 hour", "; rm -rf /", "1h;id", "1w", "h", "2024-1-1", "2024-01-01 10:00", "", "1h\n"],
    )
    def test_rejects_invalid(self, value: str) -> None:
        """Anything else is rejected."""
        with pytest.raises(InvalidArgument, match="Invalid timestamp format"):
            sanitize_timestamp(value)

    def test_rejects_non_ascii_digits(self) -> None:
        """Only ASCII digits are accepted."""
        with pytest.raises(InvalidArgument):
            sanitize_timestamp("١h")


class TestTailAndFlags:
    """Numeric and boolean argument validation."""

    def test_tail_defaults(self) -> None:
        """None falls back to the default."""
        assert validate_tail(None) == 100
        assert validate_tail(None, default=20) == 20

    def test_tail_accepts_non_negative(self) -> None:
        """Zero and positive integers are accepted."""
        assert validate_tail(0) == 0
        assert validate_tail(500) == 500

    @pytest.mark.parametrize("value", [-1, "100", 1.5, True, "100; id"])
    def test_tail_rejects_invalid(self, value: object) -> None:
        """Negative numbers, strings, floats and booleans are rejected."""
        with pytest.raises(InvalidArgument, match="Invalid tail"):
            validate_tail(value)

    def test_flag_defaults_and_values(self) -> None:
        """Flags accept booleans and default on None."""
        assert validate_flag(None, "all", default=False) is False
        assert validate_flag(True, "all", default=False) is True
        assert validate_flag(False, "timestamps", default=True) is False

    def test_flag_rejects_non_bool(self) -> None:
        """Truthy strings are not booleans."""
        with pytest.raises(InvalidArgument, match="Invalid all"):
            validate_flag("yes", "all", default=False)
