"""Symbolic curvature computation chain.

Computes the full chain: metric -> Christoffel -> Riemann -> Ricci -> Ricci
scalar -> Einstein, exactly, with every component in canonical simplified
form.  Independent components of one rank may be evaluated on a process pool
(see :mod:`tensorcalc.geometry.parallel`); a rank is finished before the next
one starts.

Index conventions:
    - Christoffel: Gamma^a_{bc} as rank 3 'udd', symmetric in b, c
    - Riemann: R^r_{s m n} as rank 4 'uddd', antisymmetric in m, n
    - Ricci: R_{s n} = R^m_{s m n} as rank 2 'dd'
    - Einstein: G_{m n} = R_{m n} - 1/2 R g_{m n} as rank 2 'dd'
"""
from __future__ import annotations

import logging
import time
from typing import NamedTuple, Sequence

import sympy as sp

from ..expressions import ExpressionArena, simplify
from ..tensors import Metric, SymbolicTensor, coordinate_symbols, index_tuples, trace
from .parallel import evaluate_components

logger = logging.getLogger(__name__)


class CurvatureResult(NamedTuple):
    """All tensors of the curvature chain for one metric."""
    metric: SymbolicTensor
    metric_inv: SymbolicTensor
    christoffel: SymbolicTensor
    riemann: SymbolicTensor
    ricci: SymbolicTensor
    ricci_scalar: sp.Expr
    einstein: SymbolicTensor


def _simplifier(arena: ExpressionArena | None):
    return arena.simplify if arena is not None else simplify


def _summed(terms, canonical) -> sp.Expr:
    # Each term is canonical before the sum, so denominators arrive factored.
    total = sp.S.Zero
    for term in terms:
        if term != 0:
            total += canonical(term)
    return canonical(total)


# ---------------------------------------------------------------------------
# Component functions (module level so worker processes can unpickle them)
# ---------------------------------------------------------------------------


def _christoffel_component(idx, *, arena, g_inv, dg):
    # dg[a, b, c] = d g_{ab} / d x^c  (derivative index LAST)
    a, b, c = idx
    canonical = _simplifier(arena)
    terms = []
    for d in range(g_inv.dimension):
        if g_inv[a, d] == 0:
            continue
        bracket = dg[d, c, b] + dg[d, b, c] - dg[b, c, d]
        terms.append(g_inv[a, d] * bracket / 2)
    return _summed(terms, canonical)


def _riemann_component(idx, *, arena, gamma, dgamma):
    # dgamma[r, s, n, m] = d Gamma^r_{sn} / d x^m  (derivative index LAST)
    r, s, m, n = idx
    canonical = _simplifier(arena)
    terms = [dgamma[r, s, n, m], -dgamma[r, s, m, n]]
    for k in range(gamma.dimension):
        terms.append(gamma[r, k, m] * gamma[k, s, n])
        terms.append(-gamma[r, k, n] * gamma[k, s, m])
    return _summed(terms, canonical)


def _ricci_component(idx, *, arena, gamma, dgamma):
    # R_{sn} = d_m Gamma^m_{sn} - d_n Gamma^m_{sm}
    #          + Gamma^m_{km} Gamma^k_{sn} - Gamma^m_{kn} Gamma^k_{sm}
    s, n = idx
    canonical = _simplifier(arena)
    dim = gamma.dimension
    terms = []
    for m in range(dim):
        terms.append(dgamma[m, s, n, m])
        terms.append(-dgamma[m, s, m, n])
        for k in range(dim):
            terms.append(gamma[m, k, m] * gamma[k, s, n])
            terms.append(-gamma[m, k, n] * gamma[k, s, m])
    return _summed(terms, canonical)


def _derivative_table(
    tensor: SymbolicTensor, coords: Sequence[sp.Symbol], arena: ExpressionArena
) -> SymbolicTensor:
    """Simplified partial derivatives, derivative index appended last."""
    n = tensor.dimension
    if len(coords) != n:
        raise ValueError(f"{len(coords)} coordinates for a {n}-dimensional tensor")

    def component(idx):
        return arena.simplify(arena.differentiate(tensor[idx[:-1]], coords[idx[-1]]))

    return SymbolicTensor.from_function(
        tensor.rank + 1, n, component, tensor.index_positions + "d"
    )


# ---------------------------------------------------------------------------
# Curvature chain
# ---------------------------------------------------------------------------


def christoffel(
    metric: Metric,
    workers: int | None = None,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Christoffel symbols of the second kind.

    Gamma^a_{bc} = 1/2 g^{ad} (d_c g_{db} + d_b g_{dc} - d_d g_{bc})

    Only components with ``b <= c`` are computed; the rest are mirrored, so
    the result is exactly symmetric in its lower indices.

    Parameters
    ----------
    metric : Metric
        Validated metric with its inverse.
    workers : int or None
        Process count for component-parallel evaluation.
    arena : ExpressionArena or None
        Per-invocation simplification memo.

    Returns
    -------
    SymbolicTensor
        Rank 3, index positions ``'udd'``.
    """
    arena = arena if arena is not None else ExpressionArena()
    start = time.perf_counter()
    n = metric.dimension
    dg = _derivative_table(metric.g, metric.coords, arena)

    independent = [idx for idx in index_tuples(3, n) if idx[1] <= idx[2]]
    values = evaluate_components(
        _christoffel_component, independent, workers, arena,
        g_inv=metric.inverse, dg=dg,
    )
    table = dict(zip(independent, values))

    def component(idx):
        a, b, c = idx
        return table[(a, b, c)] if b <= c else table[(a, c, b)]

    gamma = SymbolicTensor.from_function(3, n, component, "udd")
    logger.debug(
        "Christoffel symbols: %d non-zero components in %.2fs",
        len(gamma.nonzero()), time.perf_counter() - start,
    )
    return gamma


def riemann(
    gamma: SymbolicTensor,
    coords: Sequence[str | sp.Symbol],
    workers: int | None = None,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Riemann curvature tensor.

    R^r_{smn} = d_m Gamma^r_{sn} - d_n Gamma^r_{sm}
                + Gamma^r_{km} Gamma^k_{sn} - Gamma^r_{kn} Gamma^k_{sm}

    Only components with ``m < n`` are computed; ``m == n`` is zero and
    ``m > n`` is the negated mirror.

    Parameters
    ----------
    gamma : SymbolicTensor
        Christoffel symbols (rank 3, ``'udd'``).
    coords : sequence of str or sp.Symbol
        Coordinates, in the order used for *gamma*.
    workers : int or None
        Process count for component-parallel evaluation.
    arena : ExpressionArena or None
        Per-invocation simplification memo.

    Returns
    -------
    SymbolicTensor
        Rank 4, index positions ``'uddd'``.
    """
    if gamma.rank != 3:
        raise ValueError(f"Christoffel symbols have rank 3, got rank {gamma.rank}")
    arena = arena if arena is not None else ExpressionArena()
    start = time.perf_counter()
    coords = coordinate_symbols(coords)
    n = gamma.dimension
    dgamma = _derivative_table(gamma, coords, arena)

    independent = [idx for idx in index_tuples(4, n) if idx[2] < idx[3]]
    values = evaluate_components(
        _riemann_component, independent, workers, arena,
        gamma=gamma, dgamma=dgamma,
    )
    table = dict(zip(independent, values))

    def component(idx):
        r, s, m, k = idx
        if m == k:
            return sp.S.Zero
        if m < k:
            return table[idx]
        return arena.simplify(-table[(r, s, k, m)])

    tensor = SymbolicTensor.from_function(4, n, component, "uddd")
    logger.debug(
        "Riemann tensor: %d non-zero components in %.2fs",
        len(tensor.nonzero()), time.perf_counter() - start,
    )
    return tensor


def ricci_tensor(
    riemann_tensor: SymbolicTensor, arena: ExpressionArena | None = None
) -> SymbolicTensor:
    """Ricci tensor R_{sn} = R^m_{smn} (trace on first and third indices)."""
    if riemann_tensor.rank != 4:
        raise ValueError(f"Riemann tensor has rank 4, got rank {riemann_tensor.rank}")
    return trace(riemann_tensor, 0, 2, arena)


def ricci_from_christoffel(
    gamma: SymbolicTensor,
    coords: Sequence[str | sp.Symbol],
    workers: int | None = None,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Ricci tensor directly from the Christoffel symbols.

    Equal to ``ricci_tensor(riemann(gamma, coords))`` but skips the n^4
    Riemann components.  Only ``s <= n`` is computed and mirrored, which
    relies on the Levi-Civita connection's Ricci tensor being symmetric.
    """
    arena = arena if arena is not None else ExpressionArena()
    start = time.perf_counter()
    coords = coordinate_symbols(coords)
    n = gamma.dimension
    dgamma = _derivative_table(gamma, coords, arena)

    independent = [idx for idx in index_tuples(2, n) if idx[0] <= idx[1]]
    values = evaluate_components(
        _ricci_component, independent, workers, arena,
        gamma=gamma, dgamma=dgamma,
    )
    table = dict(zip(independent, values))
    ricci = SymbolicTensor.from_function(
        2, n, lambda idx: table[tuple(sorted(idx))], "dd"
    )
    logger.debug(
        "Ricci tensor (contracted): %d non-zero components in %.2fs",
        len(ricci.nonzero()), time.perf_counter() - start,
    )
    return ricci


def ricci_scalar(
    ricci: SymbolicTensor,
    metric: Metric,
    arena: ExpressionArena | None = None,
) -> sp.Expr:
    """Ricci scalar R = g^{mn} R_{mn}."""
    arena = arena if arena is not None else ExpressionArena()
    total = sp.S.Zero
    for idx, inv in metric.inverse.items():
        if inv == 0 or ricci[idx] == 0:
            continue
        total += arena.simplify(inv * ricci[idx])
    return arena.simplify(total)


def einstein_tensor(
    ricci: SymbolicTensor,
    scalar: sp.Expr,
    metric: Metric,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Einstein tensor G_{mn} = R_{mn} - 1/2 R g_{mn}."""
    arena = arena if arena is not None else ExpressionArena()
    return SymbolicTensor.from_function(
        2,
        ricci.dimension,
        lambda idx: arena.simplify(ricci[idx] - scalar * metric.g[idx] / 2),
        "dd",
    )


def compute_curvature_chain(
    metric: Metric,
    workers: int | None = None,
    arena: ExpressionArena | None = None,
) -> CurvatureResult:
    """Compute the full curvature chain for one metric.

    Evaluates: Christoffel -> Riemann -> Ricci -> Ricci scalar -> Einstein,
    sharing one simplification memo across all stages.

    Returns
    -------
    CurvatureResult
        NamedTuple with the metric, its inverse and every derived tensor.
    """
    arena = arena if arena is not None else ExpressionArena()
    gamma = christoffel(metric, workers, arena)
    riem = riemann(gamma, metric.coords, workers, arena)
    ric = ricci_tensor(riem, arena)
    scalar = ricci_scalar(ric, metric, arena)
    einstein = einstein_tensor(ric, scalar, metric, arena)

    return CurvatureResult(
        metric=metric.g,
        metric_inv=metric.inverse,
        christoffel=gamma,
        riemann=riem,
        ricci=ric,
        ricci_scalar=scalar,
        einstein=einstein,
    )
