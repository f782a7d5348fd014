"""
Tests for parser limits.
"""

import pytest

from gvalop import (
    DEFAULT_PARSER_LIMITS,
    LimitExceededError,
    ParserLimits,
    check_expression_length,
    check_group_depth,
    check_node_count,
)


class TestDefaults:
    """Tests for default limits."""

    def test_default_values(self):
        assert DEFAULT_PARSER_LIMITS.max_expression_length == 4096
        assert DEFAULT_PARSER_LIMITS.max_group_depth == 32
        assert DEFAULT_PARSER_LIMITS.max_node_count == 4096

    def test_limits_are_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_PARSER_LIMITS.max_node_count = 1  # type: ignore[misc]


class TestChecks:
    """Tests for limit checks."""

    def test_expression_length_within_limit(self):
        check_expression_length("a" * 4096)

    def test_expression_length_exceeded(self):
        with pytest.raises(LimitExceededError):
            check_expression_length("a" * 4097)

    def test_group_depth_with_custom_limits(self):
        limits = ParserLimits(max_group_depth=3)
        check_group_depth(3, limits)
        with pytest.raises(LimitExceededError) as exc_info:
            check_group_depth(4, limits)
        assert exc_info.value.limit == 3
        assert exc_info.value.actual == 4

    def test_node_count_exceeded(self):
        with pytest.raises(LimitExceededError) as exc_info:
            check_node_count(4097)
        assert exc_info.value.limit_name == "max_node_count"
