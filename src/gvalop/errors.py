"""
Error types for the grouped values and operators engine.

All engine errors extend GvalopError for consistent handling.
"""

from typing import Optional


class GvalopError(Exception):
    """
    Base error class for all parsing and reduction errors.

    The position is an optional index into the parsed string indicating
    where the error was raised.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        if message is None:
            message = (
                "An error occurred while parsing. "
                "This is probably due to invalid syntax."
            )
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class ParseError(GvalopError):
    """
    Error thrown while scanning a string into a group tree.
    """

    pass


class ReductionError(GvalopError):
    """
    Error thrown while reducing a group tree into a result.
    """

    def with_position(self, position: int) -> "ReductionError":
        """Returns a copy of this error of the same kind, anchored at position."""
        return type(self)(self.message, position, self.expression)


class MissingOperatorError(ReductionError):
    """
    Error indicating that an operator was expected. This may happen, for
    example, when a value directly follows a group, or when a unary operator
    follows a value.
    """

    pass


class InvalidOperandError(ReductionError):
    """
    Error indicating that an operator was passed an invalid operand. This may
    happen, for example, when a parsed string ends with an operator and is
    thus missing its right operand, or for two consecutive binary operators.
    """

    pass


class LimitExceededError(GvalopError):
    """
    Error thrown when parser limits are exceeded.
    """

    def __init__(self, limit_name: str, limit: int, actual: int):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
