"""
Group tree reduction.

Collapses a group tree into a single result by consuming each contained
node into a result object:

- A group consumes itself by folding its children.
- An operator consumes itself by consuming its operand(s) and applying its
  function to the resulting value(s).
- A value consumes itself by applying its evaluation function to its text.
- A result is already consumed and does not change.

A binary operator folds everything to its right into its right operand, so
a flat run of binary operators combines right to left:
``a op b op c`` is ``a op (b op c)``. Precedence is only ever expressed
through groupings.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from .errors import GvalopError, InvalidOperandError, MissingOperatorError, ReductionError
from .nodes import BinaryOperator, Group, Node, Result, UnaryOperator, Value

logger = logging.getLogger("gvalop.reduction")

# Signature of a value evaluation function.
EvaluationFunction = Callable[[str], Any]


def _consumed_before(items: List[Node], index: int) -> int:
    """Character count accounted for by the results preceding index."""
    return sum(
        item.consumed_length for item in items[:index] if isinstance(item, Result)
    )


def _leading(node: Node) -> int:
    """Whitespace between a node and its predecessor that no value holds."""
    if isinstance(node, (Group, UnaryOperator, BinaryOperator)):
        return node.leading
    return 0


class Reducer:
    """
    Reduces groups in place. Only ever run a reducer on a copy of a tree
    that is meant to be kept.

    Positions passed around as ``start`` are indices in the parsed string
    where the span of a node begins, including any whitespace leading it.
    """

    def __init__(self, func: Optional[EvaluationFunction] = None):
        self._func = func

    def reduce(self, group: Group, start: int = 0) -> Result:
        """
        Folds the children of a group into a single result. The start is the
        index of the group in the parsed string.
        """
        content_start = start + group.leading
        if group.grouping is not None:
            content_start += len(group.grouping.start)

        group.children = self._fold(group.children, content_start)
        result = group.children[0]
        return Result(
            result.value,
            group.leading
            + result.consumed_length
            + group.delimiter_length
            + group.padding,
        )

    def consume(
        self, items: List[Node], index: int, start: int = 0
    ) -> Tuple[List[Node], int]:
        """
        Consumes the node at items[index] and replaces it with a result. This
        may consume neighboring items as well.

        Returns the modified items and the index of the result.
        """
        node = items[index]
        node_type = node.type

        if node_type == "Result":
            return items, index

        if node_type == "Value":
            return self._consume_value(items, index)

        if node_type == "Group":
            items[index] = self.reduce(node, start)
            return items, index

        if node_type == "UnaryOperator":
            return self._consume_unary(items, index, start)

        if node_type == "BinaryOperator":
            return self._consume_binary(items, index, start)

        raise TypeError(f"Cannot consume node: {node!r}")

    def _consume_at(
        self, items: List[Node], index: int, start: int
    ) -> Tuple[List[Node], int]:
        """Consumes items[index], positioning errors that lack a position."""
        node = items[index]
        item_start = start + _consumed_before(items, index)
        try:
            return self.consume(items, index, item_start)
        except ReductionError as error:
            if error.position is not None:
                raise
            raise error.with_position(item_start + _leading(node)) from error

    def _fold(self, items: List[Node], start: int) -> List[Node]:
        """
        Consumes items from the left until a single result remains.

        A binary operator splits the items into its left result and the tail
        to its right. Each tail is folded in turn, then the left results are
        combined with the folded tail starting from the rightmost one.
        """
        if not items:
            raise InvalidOperandError("Cannot reduce an empty group", start)

        pending: List[Tuple[Result, BinaryOperator]] = []
        while True:
            items, _ = self._consume_at(items, 0, start)
            if len(items) == 1:
                break

            if items[1].type != "BinaryOperator":
                leading = _leading(items[1])
                items, index = self._consume_at(items, 1, start)
                position = start + _consumed_before(items, index) + leading
                raise MissingOperatorError(
                    f"An operator is missing at index {position}", position
                )

            left: Result = items[0]
            operator: BinaryOperator = items[1]
            operator_start = start + left.consumed_length + operator.leading
            if len(items) == 2:
                raise InvalidOperandError(
                    f"Operator '{operator.representation}' is missing its right operand",
                    operator_start,
                )

            pending.append((left, operator))
            items = items[2:]
            start = operator_start + operator.length

        result: Result = items[0]
        while pending:
            left, operator = pending.pop()
            result = Result(
                operator.func(left.value, result.value),
                left.consumed_length
                + operator.leading
                + operator.length
                + result.consumed_length,
            )
        return [result]

    def _consume_value(self, items: List[Node], index: int) -> Tuple[List[Node], int]:
        value: Value = items[index]
        func = self._func if self._func is not None else value.func
        items[index] = Result(func(value.text), value.length)
        return items, index

    def _consume_unary(
        self, items: List[Node], index: int, start: int
    ) -> Tuple[List[Node], int]:
        # A run of unary operators applies from the innermost one outwards.
        end = index
        operand_start = start
        while end < len(items) and items[end].type == "UnaryOperator":
            operand_start += items[end].leading + items[end].length
            end += 1

        if end >= len(items):
            raise InvalidOperandError(
                f"Operator '{items[end - 1].representation}' is missing its right operand"
            )

        items, _ = self.consume(items, end, operand_start)
        result: Result = items[end]
        for operator in reversed(items[index:end]):
            result = Result(
                operator.func(result.value),
                operator.leading + operator.length + result.consumed_length,
            )
        items[index:end + 1] = [result]
        return items, index

    def _consume_binary(
        self, items: List[Node], index: int, start: int
    ) -> Tuple[List[Node], int]:
        operator: BinaryOperator = items[index]
        if index == 0:
            raise InvalidOperandError(
                f"Operator '{operator.representation}' is missing its left operand"
            )

        left = items[index - 1]
        if not isinstance(left, Result):
            raise InvalidOperandError(
                f"Left operand of '{operator.representation}' is not a result"
            )

        tail = items[index + 1:]
        if not tail:
            raise InvalidOperandError(
                f"Operator '{operator.representation}' is missing its right operand"
            )

        right: Result = self._fold(tail, start + operator.leading + operator.length)[0]
        items[index - 1:] = [
            Result(
                operator.func(left.value, right.value),
                left.consumed_length
                + operator.leading
                + operator.length
                + right.consumed_length,
            )
        ]
        return items, index - 1


def evaluate(group: Group, func: Optional[EvaluationFunction] = None) -> Result:
    """
    Evaluates a group tree on a copy and returns the result.

    Args:
        group: The group to evaluate, usually a parsed root group
        func: Optional evaluation function replacing the one of every value

    Returns:
        The result holding the final value

    Raises:
        MissingOperatorError: If two operands are not separated by an operator
        InvalidOperandError: If an operator is missing an operand
    """
    copy = group.copy()
    reducer = Reducer(func)

    try:
        result = reducer.reduce(copy)
    except GvalopError as error:
        if error.expression is None:
            error.expression = group.source
        logger.debug(
            "reduction_failed",
            extra={
                "error_type": type(error).__name__,
                "position": error.position,
            },
        )
        raise

    logger.debug(
        "expression_evaluated",
        extra={
            "consumed_length": result.consumed_length,
            "override": func is not None,
        },
    )
    return result
