"""
Parser for grouped values and operators.

Scans a string from left to right into a group tree. At each position the
scanner tries, in order:

1. the start delimiter of any registered grouping (opens a nested group)
2. the end delimiter of the current group (closes it)
3. the end delimiter of any other grouping (an unmatched end, which fails)
4. any registered operator
5. otherwise the character is appended to the pending value

Tokens are matched in registration order, not by longest match: register
the longer of two tokens sharing a prefix first.
"""

import dataclasses
import logging
from typing import List, Optional, Sequence, Type

from .errors import ParseError
from .limits import (
    DEFAULT_PARSER_LIMITS,
    ParserLimits,
    check_expression_length,
    check_group_depth,
    check_node_count,
)
from .nodes import (
    BinaryOperator,
    Group,
    Grouping,
    Node,
    Operator,
    UnaryOperator,
    Value,
    calculate_group_depth,
    count_nodes,
    identity,
)
from .reduction import EvaluationFunction

logger = logging.getLogger("gvalop.parser")


class _Scanner:
    """Single-use scanner state for one parse."""

    def __init__(
        self,
        source: str,
        operators: Sequence[Operator],
        groupings: Sequence[Grouping],
        evaluation_func: EvaluationFunction,
        limits: ParserLimits,
        value_class: Type[Value],
        group_class: Type[Group],
    ):
        self._source = source
        self._operators = operators
        self._groupings = groupings
        self._evaluation_func = evaluation_func
        self._limits = limits
        self._value_class = value_class
        self._group_class = group_class
        self._position = 0
        self._pending_padding = 0
        self._root = group_class(source=source)
        self._group = self._root
        self._depth = 1
        self._node_count = 1
        self._value = self._new_value()

    def scan(self) -> Group:
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            if self._try_group_start():
                continue
            if self._try_group_end():
                continue
            self._check_unmatched_end()
            if self._try_operator():
                continue
            self._consume_character()

        self._push_value()
        self._group.padding += self._take_padding()
        return self._root

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _matches(self, token: str) -> bool:
        return self._source.startswith(token, self._position)

    def _new_value(self) -> Value:
        return self._value_class(func=self._evaluation_func)

    def _add_child(self, node: Node) -> None:
        self._node_count += 1
        check_node_count(self._node_count, self._limits)
        self._group.children.append(node)

    def _push_value(self) -> None:
        """Appends the pending value if it holds more than whitespace."""
        if self._value.text:
            self._add_child(self._value)
        else:
            self._pending_padding += self._value.length
        self._value = self._new_value()

    def _take_padding(self) -> int:
        """Returns and resets the whitespace not yet held by any node."""
        padding = self._pending_padding
        self._pending_padding = 0
        return padding

    def _try_group_start(self) -> bool:
        for grouping in self._groupings:
            if self._matches(grouping.start):
                self._push_value()
                group = self._group_class(
                    parent=self._group,
                    grouping=grouping,
                    leading=self._take_padding(),
                )
                self._add_child(group)
                self._depth += 1
                check_group_depth(self._depth, self._limits)
                self._group = group
                self._position += len(grouping.start)
                return True
        return False

    def _try_group_end(self) -> bool:
        grouping = self._group.grouping
        if grouping is None or not self._matches(grouping.end):
            return False
        self._push_value()
        self._group.padding += self._take_padding()
        self._group.closed = True
        self._group = self._group.parent
        self._depth -= 1
        self._position += len(grouping.end)
        return True

    def _check_unmatched_end(self) -> None:
        for grouping in self._groupings:
            if self._matches(grouping.end):
                raise ParseError(
                    f"Unmatched end delimiter '{grouping.end}' at index {self._position}",
                    self._position,
                    self._source,
                )

    def _try_operator(self) -> bool:
        for operator in self._operators:
            if self._matches(operator.representation):
                self._push_value()
                leading = self._take_padding()
                if leading:
                    operator = dataclasses.replace(operator, leading=leading)
                self._add_child(operator)
                self._position += operator.length
                return True
        return False

    def _consume_character(self) -> None:
        self._value.append(self._source[self._position])
        self._position += 1


class Parser:
    """
    Parses strings into group trees, given a list of operators and a list of
    groupings.

    Subclasses of Value and Group may be given to build trees of those
    types. Their constructors must accept the same arguments as the base
    classes.
    """

    def __init__(
        self,
        operators: Sequence[Operator],
        groupings: Sequence[Grouping],
        evaluation_func: EvaluationFunction = identity,
        limits: ParserLimits = DEFAULT_PARSER_LIMITS,
        value_class: Type[Value] = Value,
        group_class: Type[Group] = Group,
    ):
        for operator in operators:
            if not isinstance(operator, (UnaryOperator, BinaryOperator)):
                raise TypeError(
                    f"Operators must be unary or binary operators, got {operator!r}"
                )
            if not operator.representation:
                raise ValueError("Operator representation must not be empty")
        for grouping in groupings:
            if not grouping.start or not grouping.end:
                raise ValueError(f"Grouping delimiters must not be empty: {grouping}")

        self.operators: List[Operator] = list(operators)
        self.groupings: List[Grouping] = list(groupings)
        self.evaluation_func = evaluation_func
        self.limits = limits
        self.value_class = value_class
        self.group_class = group_class

    def parse(
        self, string: str, evaluation_func: Optional[EvaluationFunction] = None
    ) -> Group:
        """
        Parses a string into a group tree and returns the root group.

        The evaluation function is used as the default for all created values;
        other evaluation functions may be passed when evaluating a group.
        Nothing is evaluated while parsing.

        Raises:
            ParseError: If an end delimiter has no open group to close
            LimitExceededError: If the string or the tree exceeds the limits
        """
        scanner = _Scanner(
            string,
            self.operators,
            self.groupings,
            evaluation_func if evaluation_func is not None else self.evaluation_func,
            self.limits,
            self.value_class,
            self.group_class,
        )
        root = scanner.scan()

        logger.debug(
            "expression_parsed",
            extra={
                "length": len(string),
                "node_count": count_nodes(root),
                "group_depth": calculate_group_depth(root),
            },
        )
        return root


def parse(
    string: str,
    operators: Sequence[Operator],
    groupings: Sequence[Grouping],
    evaluation_func: EvaluationFunction = identity,
    limits: ParserLimits = DEFAULT_PARSER_LIMITS,
) -> Group:
    """
    Parses a string into a group tree.

    Args:
        string: The string to parse
        operators: Operators in matching order
        groupings: Groupings in matching order
        evaluation_func: Default evaluation function for values
        limits: Optional parser limits

    Returns:
        The root group

    Raises:
        ParseError: If an end delimiter has no open group to close
        LimitExceededError: If the string or the tree exceeds the limits
    """
    parser = Parser(operators, groupings, evaluation_func, limits)
    return parser.parse(string)
