"""Symbolic differentiation with respect to a named coordinate."""
from __future__ import annotations

import sympy as sp


def differentiate(expr: sp.Expr, symbol: str | sp.Symbol) -> sp.Expr:
    """Partial derivative of *expr* with respect to *symbol*.

    Sum, product, quotient, power and chain rules are applied structurally
    for the supported function set; derivatives of free functions such as
    ``a(t)`` stay unevaluated (printed as ``diff(a(t), t)``).  A symbol that
    does not occur in *expr* yields the literal zero expression.

    The result is not simplified; callers feed it to
    :func:`~tensorcalc.expressions.simplify` together with the other terms
    it is combined with.
    """
    if isinstance(symbol, str):
        symbol = sp.Symbol(symbol)
    return sp.diff(sp.sympify(expr), symbol)
