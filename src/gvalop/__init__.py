"""
Grouped values and operators.

This package parses strings of values, caller-defined operators and
caller-defined groupings into group trees, which can then be evaluated
any number of times with different evaluation functions.
"""

from .errors import (
    GvalopError,
    InvalidOperandError,
    LimitExceededError,
    MissingOperatorError,
    ParseError,
    ReductionError,
)

# Factory
from .factory import (
    GroupingDefinition,
    OperatorDefinition,
    ParserConfig,
    create_parser,
)

# Functions
from .functions import (
    OPERATOR_FUNCTIONS,
    FunctionRegistry,
    OperatorFunction,
    get_operator_function,
)
from .limits import (
    DEFAULT_PARSER_LIMITS,
    ParserLimits,
    check_expression_length,
    check_group_depth,
    check_node_count,
)

# Core types and utilities
from .nodes import (
    BinaryOperator,
    Group,
    Grouping,
    Node,
    Operator,
    Result,
    UnaryOperator,
    Value,
    calculate_group_depth,
    count_nodes,
    identity,
    tree_to_string,
)

# Parser
from .parser import (
    Parser,
    parse,
)

# Reduction
from .reduction import (
    EvaluationFunction,
    Reducer,
    evaluate,
)

__all__ = [
    # Node types
    "Node",
    "Grouping",
    "Operator",
    "UnaryOperator",
    "BinaryOperator",
    "Value",
    "Group",
    "Result",
    "identity",
    "count_nodes",
    "calculate_group_depth",
    "tree_to_string",
    # Errors
    "GvalopError",
    "ParseError",
    "ReductionError",
    "MissingOperatorError",
    "InvalidOperandError",
    "LimitExceededError",
    # Limits
    "ParserLimits",
    "DEFAULT_PARSER_LIMITS",
    "check_expression_length",
    "check_group_depth",
    "check_node_count",
    # Parser
    "Parser",
    "parse",
    # Reduction
    "EvaluationFunction",
    "Reducer",
    "evaluate",
    # Functions
    "OperatorFunction",
    "FunctionRegistry",
    "OPERATOR_FUNCTIONS",
    "get_operator_function",
    # Factory
    "ParserConfig",
    "OperatorDefinition",
    "GroupingDefinition",
    "create_parser",
]
