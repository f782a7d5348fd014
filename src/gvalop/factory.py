"""
Factory for creating Parser instances from declarative configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .functions import FunctionRegistry, get_operator_function
from .limits import DEFAULT_PARSER_LIMITS, ParserLimits
from .nodes import BinaryOperator, Grouping, Operator, UnaryOperator, identity
from .parser import Parser
from .reduction import EvaluationFunction

logger = logging.getLogger("gvalop.factory")


class OperatorDefinition(BaseModel):
    """Declarative operator: a representation bound to a named function."""

    model_config = ConfigDict(populate_by_name=True)

    representation: str = Field(..., min_length=1, description="Operator token")
    kind: Literal["unary", "binary"] = Field(
        default="binary", description="Number of operands the operator consumes"
    )
    function: str = Field(..., description="Name of the combining function")


class GroupingDefinition(BaseModel):
    """Declarative grouping: a pair of delimiter strings."""

    start: str = Field(..., min_length=1, description="Start delimiter")
    end: str = Field(..., min_length=1, description="End delimiter")


class ParserConfig(BaseModel):
    """Configuration for creating a Parser via the factory."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = "Parser"

    # Operators in matching order
    operators: list[OperatorDefinition] = Field(default_factory=list)

    # Groupings in matching order
    groupings: list[GroupingDefinition] = Field(default_factory=list)

    # Parser limits
    limits: Optional[ParserLimits] = Field(default=None)

    @field_validator("limits", mode="before")
    @classmethod
    def _validate_limits(cls, value: Any) -> Optional[ParserLimits]:
        if value is None or isinstance(value, ParserLimits):
            return value
        if not isinstance(value, dict):
            raise ValueError("Parser limits must be a dict or a ParserLimits")
        return _build_limits(value)


def _normalize_config(config: ParserConfig | dict[str, Any] | None) -> ParserConfig:
    """Normalize configuration for a Parser."""
    if config is None:
        raise ValueError("create_parser requires a configuration")

    if isinstance(config, ParserConfig):
        return config

    if not isinstance(config, dict):
        raise ValueError("Parser configuration must be a dict or a ParserConfig")

    return ParserConfig.model_validate(config)


def _build_limits(limits_data: dict[str, Any]) -> ParserLimits:
    """Builds parser limits, accepting both snake_case and camelCase keys."""
    return ParserLimits(
        max_expression_length=limits_data.get(
            "maxExpressionLength",
            limits_data.get(
                "max_expression_length",
                DEFAULT_PARSER_LIMITS.max_expression_length,
            ),
        ),
        max_group_depth=limits_data.get(
            "maxGroupDepth",
            limits_data.get(
                "max_group_depth",
                DEFAULT_PARSER_LIMITS.max_group_depth,
            ),
        ),
        max_node_count=limits_data.get(
            "maxNodeCount",
            limits_data.get(
                "max_node_count",
                DEFAULT_PARSER_LIMITS.max_node_count,
            ),
        ),
    )


def _build_operator(
    definition: OperatorDefinition, functions: Optional[FunctionRegistry]
) -> Operator:
    func = get_operator_function(definition.function, functions)
    if definition.kind == "unary":
        return UnaryOperator(definition.representation, func)
    return BinaryOperator(definition.representation, func)


def create_parser(
    config: ParserConfig | dict[str, Any] | None,
    functions: Optional[FunctionRegistry] = None,
    evaluation_func: EvaluationFunction = identity,
) -> Parser:
    """
    Create a Parser from the given configuration.

    Args:
        config: Configuration with operators, groupings and optional limits
        functions: Optional functions extending or overriding the built-in ones
        evaluation_func: Default evaluation function for parsed values

    Returns:
        The created parser

    Raises:
        ValueError: If the configuration is missing or names an unknown function
        pydantic.ValidationError: If a dict configuration is malformed
    """
    normalized = _normalize_config(config)

    operators = [_build_operator(d, functions) for d in normalized.operators]
    groupings = [Grouping(d.start, d.end) for d in normalized.groupings]
    limits = normalized.limits if normalized.limits is not None else DEFAULT_PARSER_LIMITS

    logger.debug(
        "parser_created",
        extra={
            "operators": [op.representation for op in operators],
            "grouping_count": len(groupings),
        },
    )

    return Parser(operators, groupings, evaluation_func, limits)
