"""Stress-energy sources for the right-hand side of the field equations.

All sources are covariant rank-2 tensors ``T_{ab}`` (index positions
``'dd'``) with simplified components.  Units are geometric (G = c = 1), so
the field equations read ``G_{ab} + Lambda g_{ab} = 8 pi T_{ab}``.
"""
from __future__ import annotations

from typing import Iterable, Sequence

import sympy as sp

from ..errors import DimensionMismatch
from ..expressions import ExpressionArena, parse
from ..tensors import (
    Metric,
    SymbolicTensor,
    coordinate_symbols,
    parse_matrix,
    raise_index,
    symmetric_rows,
)


def as_expression(value, functions: Iterable[str] = ()) -> sp.Expr:
    if isinstance(value, str):
        return parse(value, tuple(functions))
    return sp.sympify(value)


def build_source(
    matrix: Sequence[Sequence[str]],
    coords: Sequence[str],
    functions: Iterable[str] = (),
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Stress-energy tensor from a matrix of formula strings.

    Raises
    ------
    NonSquareMetric
        If the matrix does not match ``len(coords)``.
    AsymmetricMetric
        If ``T[a][b] - T[b][a]`` is detectably non-zero.
    ParseError
        If a component fails to parse.
    """
    arena = arena if arena is not None else ExpressionArena()
    coordinate_symbols(coords)
    rows = parse_matrix(matrix, coords, functions, label="stress-energy")
    values = [[arena.simplify(v) for v in row] for row in rows]
    values = symmetric_rows(values, "stress-energy tensor", arena=arena)
    return SymbolicTensor(sp.ImmutableDenseNDimArray(values), "dd")


def perfect_fluid(
    metric: Metric,
    density,
    pressure,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Perfect fluid at rest in the coordinates.

    T_{ab} = (rho + p) u_a u_b + p g_{ab}, with the comoving observer
    u^a = (1/sqrt(-g_00), 0, ..., 0), so u_a = g_{a0} / sqrt(-g_00).

    Parameters
    ----------
    metric : Metric
        Metric whose first coordinate is timelike.
    density, pressure : str or sp.Expr
        Energy density rho and isotropic pressure p; strings may use the
        metric's free functions.
    """
    arena = arena if arena is not None else ExpressionArena()
    rho = as_expression(density, metric.functions)
    p = as_expression(pressure, metric.functions)
    lapse = sp.sqrt(arena.simplify(-metric.g[0, 0]))
    u = [arena.simplify(metric.g[a, 0] / lapse) for a in range(metric.dimension)]
    return SymbolicTensor.from_function(
        2,
        metric.dimension,
        lambda idx: arena.simplify(
            (rho + p) * u[idx[0]] * u[idx[1]] + p * metric.g[idx]
        ),
        "dd",
    )


def electromagnetic(
    metric: Metric,
    field_strength: SymbolicTensor,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Maxwell stress-energy of an electromagnetic field (Gaussian units).

    T_{ab} = 1/(4 pi) (F_{ac} F_{bd} g^{cd} - 1/4 g_{ab} F_{cd} F^{cd})

    Parameters
    ----------
    metric : Metric
        Background metric.
    field_strength : SymbolicTensor
        Antisymmetric covariant field strength ``F_{ab}``.

    Raises
    ------
    DimensionMismatch
        If ``F`` is not rank 2 over the metric's dimension.
    ValueError
        If ``F`` is not antisymmetric.
    """
    arena = arena if arena is not None else ExpressionArena()
    n = metric.dimension
    F = field_strength
    if F.rank != 2 or F.dimension != n:
        raise DimensionMismatch(
            f"field strength must be rank 2 over {n} dimensions, got rank "
            f"{F.rank} over {F.dimension}"
        )
    for a in range(n):
        for b in range(a, n):
            if arena.simplify(F[a, b] + F[b, a]) != 0:
                raise ValueError(f"field strength is not antisymmetric at [{a}][{b}]")

    F_up = raise_index(raise_index(F, 0, metric, arena), 1, metric, arena)
    invariant = sp.S.Zero
    for idx, value in F.nonzero():
        invariant += arena.simplify(value * F_up[idx])
    invariant = arena.simplify(invariant)

    def component(idx):
        a, b = idx
        total = sp.S.Zero
        for c in range(n):
            for d in range(n):
                if F[a, c] == 0 or F[b, d] == 0 or metric.inverse[c, d] == 0:
                    continue
                total += arena.simplify(F[a, c] * F[b, d] * metric.inverse[c, d])
        total -= metric.g[idx] * invariant / 4
        return arena.simplify(total / (4 * sp.pi))

    return SymbolicTensor.from_function(2, n, component, "dd")
