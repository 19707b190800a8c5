"""Index algebra: Einstein summation, traces, raising and lowering.

Summation is done by explicit accumulation over the dimension range.  Each
product term is simplified before it is added and the sum is simplified
again afterwards, which keeps intermediate expressions small.
"""

from __future__ import annotations

from typing import Union

import sympy as sp

from ..expressions import ExpressionArena
from .metric import Metric
from .types import SymbolicTensor

TensorOrScalar = Union[SymbolicTensor, sp.Expr]


def _summed(terms, arena: ExpressionArena) -> sp.Expr:
    total = sp.S.Zero
    for term in terms:
        total += arena.simplify(term)
    return arena.simplify(total)


def kronecker_delta(dimension: int, index_positions: str = "ud") -> SymbolicTensor:
    """Identity tensor delta^a_b."""
    return SymbolicTensor.from_function(
        2,
        dimension,
        lambda idx: sp.S.One if idx[0] == idx[1] else sp.S.Zero,
        index_positions,
    )


def contract(
    a: SymbolicTensor,
    b: SymbolicTensor,
    index_pair: tuple[int, int],
    arena: ExpressionArena | None = None,
) -> TensorOrScalar:
    """Contract index ``i`` of *a* with index ``j`` of *b*.

    Parameters
    ----------
    a, b : SymbolicTensor
        Tensors of equal dimension.
    index_pair : tuple[int, int]
        ``(i, j)``: the summed index of *a* and of *b*.
    arena : ExpressionArena or None
        Per-invocation simplification memo.

    Returns
    -------
    SymbolicTensor or sp.Expr
        Remaining indices of *a* followed by the remaining indices of *b*;
        a plain expression when nothing remains.
    """
    if a.dimension != b.dimension:
        raise ValueError(f"dimension mismatch: {a.dimension} vs {b.dimension}")
    i, j = index_pair
    if not (0 <= i < a.rank and 0 <= j < b.rank):
        raise ValueError(f"index pair {index_pair} out of range for ranks {a.rank}, {b.rank}")
    arena = arena if arena is not None else ExpressionArena()
    n = a.dimension

    rest_a = a.rank - 1
    positions = (
        a.index_positions[:i] + a.index_positions[i + 1 :]
        + b.index_positions[:j] + b.index_positions[j + 1 :]
    )

    def component(idx: tuple[int, ...]) -> sp.Expr:
        left, right = idx[:rest_a], idx[rest_a:]
        return _summed(
            (
                a[left[:i] + (k,) + left[i:]] * b[right[:j] + (k,) + right[j:]]
                for k in range(n)
            ),
            arena,
        )

    rank = a.rank + b.rank - 2
    if rank == 0:
        return component(())
    return SymbolicTensor.from_function(rank, n, component, positions)


def trace(
    tensor: SymbolicTensor,
    i: int,
    j: int,
    arena: ExpressionArena | None = None,
) -> TensorOrScalar:
    """Contract indices *i* < *j* of a single tensor (e.g. Riemann -> Ricci)."""
    if not 0 <= i < j < tensor.rank:
        raise ValueError(f"trace indices must satisfy 0 <= i < j < rank, got ({i}, {j})")
    arena = arena if arena is not None else ExpressionArena()
    n = tensor.dimension
    positions = (
        tensor.index_positions[:i]
        + tensor.index_positions[i + 1 : j]
        + tensor.index_positions[j + 1 :]
    )

    def component(idx: tuple[int, ...]) -> sp.Expr:
        def full(k: int) -> tuple[int, ...]:
            head = idx[:i] + (k,) + idx[i : j - 1]
            return head + (k,) + idx[j - 1 :]

        return _summed((tensor[full(k)] for k in range(n)), arena)

    rank = tensor.rank - 2
    if rank == 0:
        return component(())
    return SymbolicTensor.from_function(rank, n, component, positions)


def _move_first_index(tensor: SymbolicTensor, position: int) -> SymbolicTensor:
    """Move index 0 of *tensor* to *position*, keeping the others in order."""
    positions = list(tensor.index_positions)
    moved = positions.pop(0)
    positions.insert(position, moved)

    def component(idx: tuple[int, ...]) -> sp.Expr:
        source = (idx[position],) + idx[:position] + idx[position + 1 :]
        return tensor[source]

    return SymbolicTensor.from_function(
        tensor.rank, tensor.dimension, component, "".join(positions)
    )


def raise_index(
    tensor: SymbolicTensor,
    position: int,
    metric: Metric,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Raise index *position* with the inverse metric: T^a = g^{ab} T_b."""
    if tensor.index_positions[position] != "d":
        raise ValueError(f"index {position} of {tensor.index_positions!r} is not lower")
    contracted = contract(metric.inverse, tensor, (1, position), arena)
    if not isinstance(contracted, SymbolicTensor):
        raise ValueError("raising an index requires a tensor of rank >= 1")
    return _move_first_index(contracted, position)


def lower_index(
    tensor: SymbolicTensor,
    position: int,
    metric: Metric,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Lower index *position* with the metric: T_a = g_{ab} T^b."""
    if tensor.index_positions[position] != "u":
        raise ValueError(f"index {position} of {tensor.index_positions!r} is not upper")
    contracted = contract(metric.g, tensor, (1, position), arena)
    if not isinstance(contracted, SymbolicTensor):
        raise ValueError("lowering an index requires a tensor of rank >= 1")
    return _move_first_index(contracted, position)
