"""Symbolic curvature invariants.

Gauge-invariant curvature scalars, useful for telling physical singularities
from coordinate singularities:
    - Kretschmann scalar: K = R_{abcd} R^{abcd}
    - Ricci-squared: R_{ab} R^{ab}

Index conventions (matching geometry.py):
    - Riemann: R^a_{bcd} as rank 4 'uddd'
    - Ricci: R_{ab} as rank 2 'dd'
"""
from __future__ import annotations

import sympy as sp

from ..expressions import ExpressionArena
from ..tensors import Metric, SymbolicTensor, lower_index, raise_index


def _full_contraction(
    lower: SymbolicTensor, upper: SymbolicTensor, arena: ExpressionArena
) -> sp.Expr:
    total = sp.S.Zero
    for idx, value in lower.nonzero():
        total += arena.simplify(value * upper[idx])
    return arena.simplify(total)


def kretschmann_scalar(
    riemann: SymbolicTensor,
    metric: Metric,
    arena: ExpressionArena | None = None,
) -> sp.Expr:
    """Kretschmann scalar K = R_{abcd} R^{abcd}.

    Parameters
    ----------
    riemann : SymbolicTensor
        Riemann tensor R^a_{bcd} (upper first index).
    metric : Metric
        Metric the tensor was computed from.
    arena : ExpressionArena or None
        Per-invocation simplification memo.

    Returns
    -------
    sp.Expr
        Simplified scalar; ``48*M**2/r**6`` for Schwarzschild.
    """
    arena = arena if arena is not None else ExpressionArena()
    # Lower first index: R_{abcd} = g_{ae} R^e_{bcd}
    r_down = lower_index(riemann, 0, metric, arena)
    # Raise the three lower indices: R^{abcd} = g^{bf} g^{cg} g^{dh} R^a_{fgh}
    r_up = riemann
    for position in (1, 2, 3):
        r_up = raise_index(r_up, position, metric, arena)
    return _full_contraction(r_down, r_up, arena)


def ricci_squared(
    ricci: SymbolicTensor,
    metric: Metric,
    arena: ExpressionArena | None = None,
) -> sp.Expr:
    """Ricci-squared R_{ab} R^{ab}."""
    arena = arena if arena is not None else ExpressionArena()
    # Raise both indices: R^{ab} = g^{ac} g^{bd} R_{cd}
    r_up = raise_index(raise_index(ricci, 0, metric, arena), 1, metric, arena)
    return _full_contraction(ricci, r_up, arena)
