"""
Tests for creating parsers from declarative configuration.
"""

import operator

import pytest
from pydantic import ValidationError

from gvalop import (
    OPERATOR_FUNCTIONS,
    BinaryOperator,
    Grouping,
    GroupingDefinition,
    LimitExceededError,
    OperatorDefinition,
    ParserConfig,
    ParserLimits,
    UnaryOperator,
    create_parser,
    get_operator_function,
)

LOGIC_CONFIG = {
    "operators": [
        {"representation": "&&", "kind": "binary", "function": "and"},
        {"representation": "||", "kind": "binary", "function": "or"},
        {"representation": "!", "kind": "unary", "function": "not"},
    ],
    "groupings": [{"start": "(", "end": ")"}],
}


class TestCreateParser:
    """Tests for create_parser."""

    def test_creates_parser_from_dict(self):
        parser = create_parser(LOGIC_CONFIG)
        assert [op.representation for op in parser.operators] == ["&&", "||", "!"]
        assert isinstance(parser.operators[0], BinaryOperator)
        assert isinstance(parser.operators[2], UnaryOperator)
        assert parser.groupings == [Grouping("(", ")")]

    def test_creates_parser_from_model(self):
        config = ParserConfig(
            operators=[OperatorDefinition(representation="+", function="add")],
            groupings=[GroupingDefinition(start="[", end="]")],
        )
        parser = create_parser(config, evaluation_func=int)
        assert parser.parse("1 + [2 + 3]").evaluate().value == 6

    def test_parser_evaluates_filter(self):
        parser = create_parser(LOGIC_CONFIG)
        root = parser.parse("marley && (stephen && !(ziggy || damian) || bob)")
        song = "stephen marley - break us apart"
        assert root.evaluate(lambda value: value in song).value is True

    def test_operator_kind_defaults_to_binary(self):
        parser = create_parser({"operators": [{"representation": "-", "function": "sub"}]})
        assert isinstance(parser.operators[0], BinaryOperator)

    def test_injected_functions_take_precedence(self):
        parser = create_parser(
            {"operators": [{"representation": "+", "function": "add"}]},
            functions={"add": lambda left, right: f"{left}{right}"},
        )
        assert parser.parse("1 + 2").evaluate().value == "12"

    def test_injected_functions_extend_builtins(self):
        parser = create_parser(
            {"operators": [{"representation": "max", "function": "max"}]},
            functions={"max": max},
            evaluation_func=int,
        )
        assert parser.parse("3 max 7").evaluate().value == 7


class TestLimitsConfig:
    """Tests for limits configuration."""

    def test_default_limits(self):
        parser = create_parser(LOGIC_CONFIG)
        assert parser.limits == ParserLimits()

    def test_camel_case_limits(self):
        parser = create_parser({**LOGIC_CONFIG, "limits": {"maxGroupDepth": 2}})
        assert parser.limits.max_group_depth == 2
        with pytest.raises(LimitExceededError):
            parser.parse("((a))")

    def test_camel_case_node_count(self):
        parser = create_parser({**LOGIC_CONFIG, "limits": {"maxNodeCount": 3}})
        assert parser.limits.max_node_count == 3
        assert parser.limits.max_group_depth == 32
        with pytest.raises(LimitExceededError):
            parser.parse("a && b")

    def test_limits_dict_on_model(self):
        config = ParserConfig(limits={"maxExpressionLength": 5})
        assert config.limits == ParserLimits(max_expression_length=5)
        assert create_parser(config).limits.max_expression_length == 5

    def test_snake_case_limits(self):
        parser = create_parser({**LOGIC_CONFIG, "limits": {"max_node_count": 10}})
        assert parser.limits.max_node_count == 10
        assert parser.limits.max_expression_length == 4096

    def test_limits_instance(self):
        limits = ParserLimits(max_expression_length=8)
        parser = create_parser(ParserConfig(limits=limits))
        assert parser.limits == limits


class TestInvalidConfig:
    """Tests for invalid configuration."""

    def test_missing_config(self):
        with pytest.raises(ValueError, match="requires a configuration"):
            create_parser(None)

    def test_config_of_wrong_type(self):
        with pytest.raises(ValueError, match="must be a dict"):
            create_parser(["&&"])  # type: ignore[arg-type]

    def test_limits_of_wrong_type(self):
        with pytest.raises(ValueError, match="Parser limits must be"):
            create_parser({**LOGIC_CONFIG, "limits": 10})

    def test_unknown_function(self):
        with pytest.raises(ValueError, match="Unknown operator function: nand"):
            create_parser({"operators": [{"representation": "!&", "function": "nand"}]})

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            create_parser(
                {"operators": [{"representation": "?", "kind": "ternary", "function": "and"}]}
            )

    def test_empty_representation(self):
        with pytest.raises(ValidationError):
            create_parser({"operators": [{"representation": "", "function": "and"}]})


class TestOperatorFunctions:
    """Tests for the built-in function registry."""

    def test_logical_functions(self):
        assert OPERATOR_FUNCTIONS["and"](True, False) is False
        assert OPERATOR_FUNCTIONS["or"](True, False) is True
        assert OPERATOR_FUNCTIONS["xor"](True, True) is False
        assert OPERATOR_FUNCTIONS["not"]("") is True

    def test_contains(self):
        assert OPERATOR_FUNCTIONS["contains"]("bob marley", "bob") is True

    def test_lookup_builtin(self):
        assert get_operator_function("sub") is operator.sub

    def test_lookup_unknown(self):
        with pytest.raises(ValueError):
            get_operator_function("missing")
