"""Tests for the formula parser: grammar, precedence and error reporting."""

import pytest
import sympy as sp

from tensorcalc.errors import ParseError, TensorCalcError
from tensorcalc.expressions import parse, tokenize

x, y, z, r, theta, M = sp.symbols("x y z r theta M")


# =========================================================================
# 1. Grammar and precedence
# =========================================================================


class TestPrecedence:
    """Operator precedence and associativity."""

    def test_power_binds_tighter_than_negation(self):
        assert parse("-x^2") == -(x**2)

    def test_power_is_right_associative(self):
        assert parse("2^3^2") == 512

    def test_division_is_left_associative(self):
        assert parse("8/4/2") == 1

    def test_subtraction_is_left_associative(self):
        assert parse("x - y - z") == x - y - z

    def test_multiplication_before_addition(self):
        assert parse("1 + 2*x") == 1 + 2 * x

    def test_double_star_power(self):
        assert parse("x**3") == x**3

    def test_negative_exponent(self):
        assert parse("r^-2") == r**-2

    def test_parentheses_override(self):
        assert parse("(1 + x)*y") == (1 + x) * y

    def test_unary_plus(self):
        assert parse("+x") == x


class TestPrimaries:
    """Numbers, symbols, constants and function applications."""

    def test_decimal_is_exact_rational(self):
        assert parse("0.5*x") == x / 2
        assert parse("0.5") == sp.Rational(1, 2)

    def test_scientific_notation(self):
        assert parse("1e-3") == sp.Rational(1, 1000)

    def test_pi_constant(self):
        assert parse("pi") == sp.pi

    def test_supported_functions(self):
        assert parse("sin(theta)^2") == sp.sin(theta) ** 2
        assert parse("sqrt(M)") == sp.sqrt(M)
        assert parse("exp(x)*log(y)") == sp.exp(x) * sp.log(y)

    def test_declared_free_function(self):
        t = sp.Symbol("t")
        assert parse("a(t)^2", functions=["a"]) == sp.Function("a")(t) ** 2

    def test_derivative_of_free_function(self):
        t = sp.Symbol("t")
        a = sp.Function("a")(t)
        assert parse("diff(a(t), t, t)", functions=["a"]) == sp.diff(a, t, 2)

    def test_schwarzschild_component(self):
        assert parse("-(1 - 2*M/r)") == -(1 - 2 * M / r)


# =========================================================================
# 2. Errors
# =========================================================================


class TestParseErrors:
    """Malformed input raises ParseError with a position."""

    def test_unclosed_parenthesis(self):
        with pytest.raises(ParseError, match="unbalanced") as info:
            parse("(x + 1")
        assert info.value.position == 6

    def test_unexpected_closing_parenthesis(self):
        with pytest.raises(ParseError, match="unbalanced") as info:
            parse("x + 1)")
        assert info.value.position == 5

    def test_unknown_character(self):
        with pytest.raises(ParseError, match="unknown token") as info:
            parse("x $ y")
        assert info.value.position == 2

    def test_unsupported_function(self):
        with pytest.raises(ParseError, match="unsupported function"):
            parse("foo(x)")

    def test_undeclared_free_function(self):
        with pytest.raises(ParseError, match="unsupported function"):
            parse("a(t)")

    def test_implicit_multiplication_rejected(self):
        with pytest.raises(ParseError) as info:
            parse("2r")
        assert info.value.position == 1

    def test_empty_input(self):
        with pytest.raises(ParseError, match="empty"):
            parse("   ")

    def test_trailing_operator(self):
        with pytest.raises(ParseError, match="unexpected end"):
            parse("x +")

    def test_function_without_arguments(self):
        with pytest.raises(ParseError, match="requires arguments"):
            parse("sin + 1")

    def test_division_by_literal_zero(self):
        with pytest.raises(ParseError, match="division by zero"):
            parse("1/0")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse("(")
        assert issubclass(ParseError, TensorCalcError)

    def test_error_carries_text(self):
        with pytest.raises(ParseError) as info:
            parse("x $")
        assert info.value.text == "x $"
        assert "position 2" in str(info.value)

    def test_reserved_function_name_rejected(self):
        with pytest.raises(ParseError, match="invalid free function"):
            parse("x", functions=["sin"])


class TestTokenize:
    def test_token_positions(self):
        tokens = tokenize("r^2 + 1")
        assert [t.text for t in tokens] == ["r", "^", "2", "+", "1", ""]
        assert [t.position for t in tokens] == [0, 1, 2, 4, 6, 7]
        assert tokens[-1].kind == "end"
