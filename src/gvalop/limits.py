"""
Resource limits for parsing group trees.

These limits protect against resource exhaustion and overly complex
expressions. Reduction recurses once per nested group, so the group depth
also bounds the reduction depth.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class ParserLimits:
    """Parser limits configuration."""

    # Maximum input string length in characters
    max_expression_length: int = 4096

    # Maximum group nesting depth (the root group counts as 1)
    max_group_depth: int = 32

    # Maximum number of nodes in a parsed tree
    max_node_count: int = 4096


# Default parser limits.
DEFAULT_PARSER_LIMITS = ParserLimits()


def check_expression_length(
    expression: str, limits: Optional[ParserLimits] = None
) -> None:
    """Validates that the input length is within limits."""
    limits = limits or DEFAULT_PARSER_LIMITS
    if len(expression) > limits.max_expression_length:
        raise LimitExceededError(
            "max_expression_length", limits.max_expression_length, len(expression)
        )


def check_group_depth(depth: int, limits: Optional[ParserLimits] = None) -> None:
    """Validates group nesting depth during parsing."""
    limits = limits or DEFAULT_PARSER_LIMITS
    if depth > limits.max_group_depth:
        raise LimitExceededError("max_group_depth", limits.max_group_depth, depth)


def check_node_count(count: int, limits: Optional[ParserLimits] = None) -> None:
    """Validates tree node count during parsing."""
    limits = limits or DEFAULT_PARSER_LIMITS
    if count > limits.max_node_count:
        raise LimitExceededError("max_node_count", limits.max_node_count, count)
