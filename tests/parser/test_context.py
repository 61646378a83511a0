"""Tests for operator and function tables."""

import pytest

from ratcalc.core.errors import UnknownOperatorError
from ratcalc.parser.context import (
    Associativity,
    Context,
    FunctionConfig,
    OperatorConfig,
)


class TestOperatorConfig:
    """Test OperatorConfig dataclass."""

    def test_binary_defaults(self):
        """Test a binary operator's arity and key."""
        config = OperatorConfig("+", precedence=0, associativity=Associativity.LEFT)
        assert config.binary is True
        assert config.arity == 2
        assert config.key == "+"

    def test_unary_key(self):
        """Test that unary operators are keyed apart from binary ones."""
        config = OperatorConfig("-", 2, Associativity.RIGHT, binary=False)
        assert config.arity == 1
        assert config.key == "-u"


class TestFunctionConfig:
    """Test FunctionConfig argument counts."""

    def test_fixed_count(self):
        """Test a function taking exactly two arguments."""
        config = FunctionConfig("gcd", min_args=2, max_args=2)
        assert config.accepts(2)
        assert not config.accepts(1)
        assert not config.accepts(3)

    def test_unbounded(self):
        """Test a function with no upper limit."""
        config = FunctionConfig("max")
        assert not config.accepts(0)
        assert config.accepts(1)
        assert config.accepts(50)


class TestDefaultContext:
    """Test the bundled Arithmetic table."""

    def test_base_table(self, context):
        """Test the four basic operators."""
        assert context.name == "Arithmetic"
        for symbol in "+-":
            config = context.resolve(symbol)
            assert (config.associativity, config.precedence) == (Associativity.LEFT, 0)
        for symbol in "*/":
            config = context.resolve(symbol)
            assert (config.associativity, config.precedence) == (Associativity.LEFT, 1)

    def test_power_and_prefix_operators(self, context):
        """Test the right-associative extensions."""
        assert context.resolve("^").associativity is Associativity.RIGHT
        assert context.resolve("-", unary=True).binary is False
        assert context.resolve("+", unary=True).arity == 1

    def test_declared_functions(self, context):
        """Test the bundled function declarations."""
        assert context.is_function("sqrt")
        assert context.functions["gcd"].max_args == 2
        assert context.functions["max"].max_args is None
        assert not context.is_function("fun")

    def test_fresh_copy_each_time(self):
        """Test that edits to one default context do not leak."""
        first = Context.default()
        first.add_operator("%", precedence=1)
        assert "%" not in Context.default().operators


class TestResolve:
    """Test operator lookup."""

    def test_unknown_binary(self, context):
        """Test that a missing symbol raises a typed error."""
        with pytest.raises(UnknownOperatorError) as exc_info:
            context.resolve("<=>")
        assert exc_info.value.symbol == "<=>"
        assert "operator '<=>'" in str(exc_info.value)

    def test_unknown_unary(self, context):
        """Test that binary-only symbols have no prefix form."""
        with pytest.raises(UnknownOperatorError, match="unary"):
            context.resolve("/", unary=True)

    def test_precedence_helpers(self, context):
        """Test the lookup helpers used for rendering."""
        assert context.get_operator_precedence("*") == 1
        assert context.get_operator_precedence("-", is_unary=True) == 2
        assert context.get_operator_precedence("??") == -1
        assert context.get_operator_associativity("^") is Associativity.RIGHT
        assert context.get_operator_associativity("??") is Associativity.LEFT


class TestFromYaml:
    """Test loading tables from YAML files."""

    def test_load_table(self, write_table):
        """Test a complete table with flags and functions."""
        path = write_table({
            "name": "Logic",
            "operators": [
                {"symbol": "||", "precedence": 0},
                {"symbol": "&&", "precedence": 1, "associativity": "left"},
                {"symbol": "!", "precedence": 2, "associativity": "right", "binary": False},
            ],
            "functions": ["xor", {"name": "all", "min_args": 0}],
            "flags": {"strict": True},
        })
        context = Context.from_yaml(path)
        assert context.name == "Logic"
        assert context.resolve("||").associativity is Associativity.LEFT
        assert context.resolve("!", unary=True).precedence == 2
        assert context.functions["xor"] == FunctionConfig("xor")
        assert context.functions["all"].accepts(0)
        assert context.flags == {"strict": True}

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives an empty table."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        context = Context.from_yaml(path)
        assert context.operators == {}
        assert context.functions == {}

    def test_missing_key(self, write_table):
        """Test that an operator without a precedence is rejected."""
        path = write_table({"operators": [{"symbol": "+"}]})
        with pytest.raises(ValueError, match="precedence"):
            Context.from_yaml(path)

    def test_bad_associativity(self, write_table):
        """Test that an unknown associativity is rejected."""
        path = write_table({"operators": [
            {"symbol": "+", "precedence": 0, "associativity": "sideways"},
        ]})
        with pytest.raises(ValueError):
            Context.from_yaml(path)

    def test_not_a_mapping(self, tmp_path):
        """Test that a top-level list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            Context.from_yaml(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file surfaces as OSError."""
        with pytest.raises(OSError):
            Context.from_yaml(tmp_path / "nope.yaml")
