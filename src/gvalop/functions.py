"""
Named combining functions for declaratively configured operators.

All functions are pure. Unary functions take one operand, binary functions
take a left and a right operand.
"""

import operator
from typing import Any, Callable, Dict, Mapping, Optional

# Signature of an operator combining function.
OperatorFunction = Callable[..., Any]

# Function registry for built-in and injected operator functions.
FunctionRegistry = Mapping[str, OperatorFunction]


def _logical_and(left: Any, right: Any) -> bool:
    return bool(left) and bool(right)


def _logical_or(left: Any, right: Any) -> bool:
    return bool(left) or bool(right)


def _logical_xor(left: Any, right: Any) -> bool:
    return bool(left) != bool(right)


def _contains(left: Any, right: Any) -> bool:
    """contains(container, item) - True if item is in container."""
    return right in left


OPERATOR_FUNCTIONS: Dict[str, OperatorFunction] = {
    # Logical
    "and": _logical_and,
    "or": _logical_or,
    "xor": _logical_xor,
    "not": operator.not_,
    # Arithmetic
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "truediv": operator.truediv,
    "floordiv": operator.floordiv,
    "mod": operator.mod,
    "pow": operator.pow,
    "neg": operator.neg,
    "pos": operator.pos,
    # Comparison
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
    # Membership
    "contains": _contains,
}


def get_operator_function(
    name: str, functions: Optional[FunctionRegistry] = None
) -> OperatorFunction:
    """
    Looks up an operator function by name. Injected functions take
    precedence over the built-in ones.

    Raises:
        ValueError: If no function is registered under the name
    """
    if functions is not None and name in functions:
        return functions[name]
    if name in OPERATOR_FUNCTIONS:
        return OPERATOR_FUNCTIONS[name]
    raise ValueError(f"Unknown operator function: {name}")
