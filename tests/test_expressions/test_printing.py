"""Tests for the formula printer."""

import pytest
import sympy as sp

from tensorcalc.expressions import differentiate, format_expr, parse, simplify

FORMULAS = [
    "-(1 - 2*M/r)",
    "r^2*sin(theta)^2",
    "1/(1 - 2*M/r)",
    "exp(2*H*t)",
    "sqrt(M^2 - Q^2)",
    "(r^2 + J^2*cos(theta)^2)/(r^2 - 2*M*r + J^2)",
    "diff(a(t), t, t)*a(t)",
    "pi*rho/3",
]


class TestFormatExpr:

    @pytest.mark.parametrize("text", FORMULAS)
    def test_reparses_to_same_expression(self, text):
        expr = parse(text, functions=["a"])
        assert parse(format_expr(expr), functions=["a"]) == expr

    def test_caret_power(self):
        assert format_expr(parse("r^2")) == "r^2"

    def test_zero(self):
        assert format_expr(simplify(parse("x - x"))) == "0"

    def test_free_function_derivative(self):
        expr = differentiate(parse("a(t)", functions=["a"]), "t")
        assert format_expr(expr) == "diff(a(t), t)"

    def test_second_derivative(self):
        t = sp.Symbol("t")
        a = sp.Function("a")(t)
        assert format_expr(sp.diff(a, t, 2)) == "diff(a(t), t, t)"

    def test_euler_number(self):
        assert format_expr(sp.E) == "exp(1)"
        assert parse(format_expr(sp.E)) == sp.E

    def test_imaginary_unit(self):
        expr = parse("sqrt(-1)*x")
        assert format_expr(expr) == "sqrt(-1)*x"
        assert parse(format_expr(expr)) == expr
