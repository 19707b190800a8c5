"""Canonical simplification of expressions.

SymPy's automatic evaluation already folds numeric constants, eliminates
identities (``x + 0``, ``x*1``, ``x*0``, ``x^1``, ``x^0``), flattens nested
same-operator chains and collects identical terms.  :func:`simplify` adds a
fixed-point rewrite on top of that:

1. ``tan(u)`` is rewritten as ``sin(u)/cos(u)``.
2. ``sin(u)`` / ``cos(u)`` are replaced by polynomial generators.
3. The expression is brought over a common denominator.
4. Numerator and denominator are reduced modulo ``sin(u)^2 + cos(u)^2 - 1``
   so that only the first power of ``cos(u)`` survives.
5. The result is cancelled again, its denominator is factored and the trig
   functions are restored.  Factored denominators let a later sum of
   canonical terms be brought over its least common denominator directly.

The pass repeats until the expression no longer changes, which makes
``simplify`` idempotent.

Sub-expressions are interned by SymPy, so repeated structure is shared as
a DAG.  :class:`ExpressionArena` adds a per-invocation memo on top of that
for the simplify/differentiate calls issued by the curvature pipeline.
"""
from __future__ import annotations

import logging

import sympy as sp

logger = logging.getLogger(__name__)

MAX_PASSES = 8


def _reduce_modulo(poly: sp.Expr, identity: sp.Expr, generator: sp.Symbol) -> sp.Expr:
    """Remainder of *poly* by *identity* as polynomials in *generator*."""
    if not poly.has(generator) or not poly.is_polynomial(generator):
        return poly
    return sp.expand(sp.rem(sp.expand(poly), identity, generator))


def _factored(denominator: sp.Expr) -> sp.Expr:
    # factor() rewrites radicands, so radical denominators are left expanded.
    if denominator.is_Number:
        return denominator
    if any(not p.exp.is_Integer for p in denominator.atoms(sp.Pow)):
        return denominator
    return sp.factor(denominator)


def _rewrite(expr: sp.Expr) -> sp.Expr:
    """One rewrite pass (see module docstring)."""
    if expr.is_Atom:
        return expr

    expr = expr.replace(sp.tan, lambda u: sp.sin(u) / sp.cos(u))

    arguments = sorted(
        {f.args[0] for f in expr.atoms(sp.sin, sp.cos)},
        key=sp.default_sort_key,
    )
    # Parsed identifiers start with a letter, so these names cannot clash.
    forward: dict[sp.Expr, sp.Symbol] = {}
    backward: dict[sp.Symbol, sp.Expr] = {}
    pairs: list[tuple[sp.Symbol, sp.Symbol]] = []
    for k, u in enumerate(arguments):
        s, c = sp.Symbol(f"_s{k}"), sp.Symbol(f"_c{k}")
        forward[sp.sin(u)] = s
        forward[sp.cos(u)] = c
        backward[s] = sp.sin(u)
        backward[c] = sp.cos(u)
        pairs.append((s, c))
    expr = expr.xreplace(forward)

    numerator, denominator = sp.fraction(sp.together(expr))
    for s, c in pairs:
        identity = c**2 + s**2 - 1
        numerator = _reduce_modulo(numerator, identity, c)
        denominator = _reduce_modulo(denominator, identity, c)

    numerator, denominator = sp.fraction(sp.cancel(numerator / denominator))
    return (numerator / _factored(denominator)).xreplace(backward)


def simplify(expr: sp.Expr) -> sp.Expr:
    """Return the canonical form of *expr*.

    Parameters
    ----------
    expr : sp.Expr
        Any expression (ints and floats are sympified).

    Returns
    -------
    sp.Expr
        The fixed point of the rewrite pass.  A literal ``0`` result means
        the expression is identically zero.
    """
    expr = sp.sympify(expr)
    for _ in range(MAX_PASSES):
        rewritten = _rewrite(expr)
        if rewritten == expr:
            return expr
        expr = rewritten
    logger.warning(
        "simplify: no fixed point after %d passes, result may not be canonical",
        MAX_PASSES,
    )
    return expr


class ExpressionArena:
    """Memo of simplify / differentiate results for one computation.

    Keys are interned SymPy expressions, so syntactically identical
    sub-expressions produced at different places of the pipeline are
    simplified or differentiated once.  An arena lives only as long as the
    invocation that created it; nothing is shared between invocations.
    """

    def __init__(self) -> None:
        self._simplified: dict[sp.Expr, sp.Expr] = {}
        self._derivatives: dict[tuple[sp.Expr, sp.Symbol], sp.Expr] = {}

    def simplify(self, expr: sp.Expr) -> sp.Expr:
        expr = sp.sympify(expr)
        result = self._simplified.get(expr)
        if result is None:
            result = simplify(expr)
            self._simplified[expr] = result
            self._simplified[result] = result
        return result

    def differentiate(self, expr: sp.Expr, symbol: sp.Symbol) -> sp.Expr:
        key = (expr, symbol)
        result = self._derivatives.get(key)
        if result is None:
            result = sp.diff(expr, symbol)
            self._derivatives[key] = result
        return result

    def __len__(self) -> int:
        return len(self._simplified) + len(self._derivatives)
