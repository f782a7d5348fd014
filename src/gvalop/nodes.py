"""
Node types for group trees.

A group tree is produced by the parser and collapsed by the reducer. Groups
contain values, operators and nested groups; results only appear on working
copies while a tree is being reduced.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Literal, Optional, Union

if TYPE_CHECKING:
    from .reduction import EvaluationFunction


def identity(value: str) -> Any:
    """Default evaluation function: returns the value text unchanged."""
    return value


# ============================================================
# Configuration Types
# ============================================================


@dataclass(frozen=True)
class Grouping:
    """A pair of delimiter strings framing a group, e.g. parentheses."""

    start: str
    end: str

    @property
    def length(self) -> int:
        return len(self.start) + len(self.end)

    def __str__(self) -> str:
        return f"Grouping({self.start},{self.end})"


@dataclass(frozen=True)
class Operator:
    """Base class for operators: a representation string and a combining function."""

    representation: str
    func: Callable[..., Any]

    leading: int = field(default=0, compare=False)
    """Whitespace between the previous node and this occurrence of the operator."""

    @property
    def length(self) -> int:
        return len(self.representation)

    def __str__(self) -> str:
        return f"Op({self.representation})"


@dataclass(frozen=True)
class UnaryOperator(Operator):
    """Operator consuming its right neighbor as its only operand."""

    @property
    def type(self) -> Literal["UnaryOperator"]:
        return "UnaryOperator"


@dataclass(frozen=True)
class BinaryOperator(Operator):
    """Operator consuming its left and right neighbors as operands."""

    @property
    def type(self) -> Literal["BinaryOperator"]:
        return "BinaryOperator"


# ============================================================
# Tree Node Types
# ============================================================


@dataclass
class Value:
    """
    The continuous characters of the parsed string between groups and
    operators, together with the function evaluating them.
    """

    raw: str = ""
    """Accumulated characters, including surrounding whitespace."""

    func: "EvaluationFunction" = identity
    """Evaluation function applied to the trimmed text."""

    @property
    def type(self) -> Literal["Value"]:
        return "Value"

    @property
    def text(self) -> str:
        return self.raw.strip()

    @property
    def length(self) -> int:
        return len(self.raw)

    def append(self, ch: str) -> None:
        self.raw += ch

    def __str__(self) -> str:
        return f"Value({self.text})"


@dataclass
class Result:
    """
    A consumed node: its final value and the number of characters of the
    parsed string it accounts for.
    """

    value: Any
    consumed_length: int

    @property
    def type(self) -> Literal["Result"]:
        return "Result"

    def __str__(self) -> str:
        return f"Result({self.value})"


@dataclass
class Group:
    """
    Nested items consumed together. The root group has neither a parent nor
    a grouping.
    """

    parent: Optional["Group"] = field(default=None, repr=False, compare=False)
    grouping: Optional[Grouping] = None
    children: List["Node"] = field(default_factory=list)

    closed: bool = False
    """Whether the end delimiter was found while parsing."""

    leading: int = 0
    """Whitespace between the previous node and the start delimiter."""

    padding: int = 0
    """Whitespace between the last child and the end of the group."""

    source: Optional[str] = field(default=None, repr=False, compare=False)
    """The parsed string; only set on the root group."""

    @property
    def type(self) -> Literal["Group"]:
        return "Group"

    @property
    def is_root(self) -> bool:
        return self.parent is None and self.grouping is None

    @property
    def delimiter_length(self) -> int:
        """Characters consumed by the grouping syntax of this group."""
        if self.grouping is None:
            return 0
        if self.closed:
            return self.grouping.length
        return len(self.grouping.start)

    def copy(self, parent: Optional["Group"] = None) -> "Group":
        """
        Returns a structural deep copy of this group. Functions and the
        immutable groupings and operators are shared with the copy.
        """
        clone = type(self)(
            parent=parent,
            grouping=self.grouping,
            closed=self.closed,
            leading=self.leading,
            padding=self.padding,
            source=self.source,
        )
        for child in self.children:
            if isinstance(child, Group):
                clone.children.append(child.copy(clone))
            elif isinstance(child, Value):
                clone.children.append(type(child)(child.raw, child.func))
            elif isinstance(child, Result):
                clone.children.append(Result(child.value, child.consumed_length))
            else:
                clone.children.append(child)
        return clone

    def evaluate(self, func: Optional["EvaluationFunction"] = None) -> Result:
        """
        Evaluates this group on a copy, so the group itself can be evaluated
        again. If func is given it replaces the evaluation function of every
        value for this evaluation only.
        """
        # Lazy import to avoid circular dependencies
        from .reduction import evaluate

        return evaluate(self, func)

    def __str__(self) -> str:
        return f"Group({','.join(str(child) for child in self.children)})"


# Union type for all tree nodes
Node = Union[Group, Value, UnaryOperator, BinaryOperator, Result]


# ============================================================
# Tree Utilities
# ============================================================


def count_nodes(node: Node) -> int:
    """Counts the total number of nodes in a tree."""
    if isinstance(node, Group):
        return 1 + sum(count_nodes(child) for child in node.children)
    return 1


def calculate_group_depth(group: Group) -> int:
    """Calculates the maximum group nesting depth of a tree."""
    max_child_depth = 0
    for child in group.children:
        if isinstance(child, Group):
            max_child_depth = max(max_child_depth, calculate_group_depth(child))
    return 1 + max_child_depth


def tree_to_string(node: Node, indent: int = 0) -> str:
    """Returns a human-readable representation of a tree for debugging."""
    prefix = "  " * indent

    if node.type == "Group":
        if node.grouping is None:
            header = f"{prefix}Group"
        else:
            header = f"{prefix}Group: {node.grouping.start} {node.grouping.end}"
        lines = [header]
        lines.extend(tree_to_string(child, indent + 1) for child in node.children)
        return "\n".join(lines)

    if node.type == "Value":
        return f'{prefix}Value: "{node.text}"'

    if node.type == "UnaryOperator":
        return f"{prefix}UnaryOperator: {node.representation}"

    if node.type == "BinaryOperator":
        return f"{prefix}BinaryOperator: {node.representation}"

    if node.type == "Result":
        return f"{prefix}Result: {node.value!r} ({node.consumed_length})"

    return f"{prefix}Unknown: {node}"
