"""Canonical string form of expressions.

The output is accepted again by :func:`tensorcalc.expressions.parse`:
powers use ``^``, derivatives of free functions are written
``diff(a(t), t)``, Euler's number as ``exp(1)`` and the imaginary unit as
``sqrt(-1)``.
"""
from __future__ import annotations

import sympy as sp
from sympy.printing.str import StrPrinter


class FormulaPrinter(StrPrinter):
    """``StrPrinter`` speaking the parser's grammar."""

    def _print_Pow(self, expr, rational=False):
        return super()._print_Pow(expr, rational).replace("**", "^")

    def _print_Derivative(self, expr):
        variables = []
        for var, count in expr.variable_count:
            variables.extend([self._print(var)] * int(count))
        return f"diff({self._print(expr.expr)}, {', '.join(variables)})"

    def _print_Exp1(self, expr):
        return "exp(1)"

    def _print_ImaginaryUnit(self, expr):
        return "sqrt(-1)"


_PRINTER = FormulaPrinter()


def format_expr(expr: sp.Expr) -> str:
    """Render *expr* as a formula string."""
    return _PRINTER.doprint(sp.sympify(expr))
