"""Symbolic tensor container.

Layout convention: components are a SymPy immutable N-dim array of shape
``(dimension,) * rank``; index ``k`` of the array is tensor index ``k``.
Index positions are recorded as a string of ``'u'`` (upper /
contravariant) and ``'d'`` (lower / covariant), e.g. ``'dd'`` for
*g_{ab}*, ``'udd'`` for Gamma^a_{bc}.

Tensors are frozen after construction, so they can be shared freely between
the worker processes of the component-parallel pipeline.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

import sympy as sp

# ---------------------------------------------------------------------------
# SymbolicTensor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SymbolicTensor:
    """A rank-*n* tensor of symbolic components over a fixed dimension.

    Parameters
    ----------
    components : sp.ImmutableDenseNDimArray
        Array of shape ``(dimension,) * rank``.  Nested lists are accepted
        and converted.
    index_positions : str
        String of ``'u'`` and ``'d'`` describing each index.  Defaults to
        all-lower (``'d' * rank``).

    Raises
    ------
    ValueError
        If the array is not cubic, has rank 0, or *index_positions* does
        not match the rank.
    """

    components: sp.ImmutableDenseNDimArray
    index_positions: str = ""

    def __post_init__(self) -> None:
        """Normalize *components* and default *index_positions*."""
        if not isinstance(self.components, sp.ImmutableDenseNDimArray):
            # Frozen dataclass; use object.__setattr__ for normalization.
            object.__setattr__(
                self, "components", sp.ImmutableDenseNDimArray(self.components)
            )
        shape = self.components.shape
        if len(shape) == 0:
            raise ValueError("rank-0 tensors are plain expressions")
        if len(set(shape)) != 1:
            raise ValueError(f"tensor components must be cubic, got shape {shape}")
        if not self.index_positions:
            object.__setattr__(self, "index_positions", "d" * len(shape))
        if len(self.index_positions) != len(shape):
            raise ValueError(
                f"index_positions length {len(self.index_positions)} != rank {len(shape)}"
            )
        if set(self.index_positions) - {"u", "d"}:
            raise ValueError(
                f"index_positions must contain only 'u'/'d', got {self.index_positions!r}"
            )

    # constructors --------------------------------------------------------

    @classmethod
    def from_components(
        cls,
        values: Sequence[sp.Expr],
        rank: int,
        dimension: int,
        index_positions: str = "",
    ) -> SymbolicTensor:
        """Build from a flat row-major sequence of ``dimension**rank`` values."""
        shape = (dimension,) * rank
        return cls(sp.ImmutableDenseNDimArray(list(values), shape), index_positions)

    @classmethod
    def from_function(
        cls,
        rank: int,
        dimension: int,
        component: Callable[[tuple[int, ...]], sp.Expr],
        index_positions: str = "",
    ) -> SymbolicTensor:
        """Build by calling ``component(indices)`` for every index tuple."""
        values = [component(idx) for idx in index_tuples(rank, dimension)]
        return cls.from_components(values, rank, dimension, index_positions)

    @classmethod
    def zeros(cls, rank: int, dimension: int, index_positions: str = "") -> SymbolicTensor:
        return cls.from_components(
            [sp.S.Zero] * dimension**rank, rank, dimension, index_positions
        )

    # derived properties --------------------------------------------------

    @property
    def rank(self) -> int:
        return self.components.rank()

    @property
    def dimension(self) -> int:
        return self.components.shape[0]

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self.components.shape)

    # access --------------------------------------------------------------

    def __getitem__(self, indices) -> sp.Expr:
        return self.components[indices]

    def indices(self) -> Iterator[tuple[int, ...]]:
        """All index tuples in row-major order."""
        return index_tuples(self.rank, self.dimension)

    def items(self) -> Iterator[tuple[tuple[int, ...], sp.Expr]]:
        for idx in self.indices():
            yield idx, self.components[idx]

    def nonzero(self) -> list[tuple[tuple[int, ...], sp.Expr]]:
        """Components that are not the literal zero expression."""
        return [(idx, value) for idx, value in self.items() if value != 0]

    def map(self, fn: Callable[[sp.Expr], sp.Expr]) -> SymbolicTensor:
        """New tensor with *fn* applied to every component."""
        return SymbolicTensor.from_components(
            [fn(value) for _, value in self.items()],
            self.rank,
            self.dimension,
            self.index_positions,
        )

    def is_symmetric(self, i: int = 0, j: int = 1) -> bool:
        """Syntactic symmetry under exchange of indices *i* and *j*."""
        for idx, value in self.items():
            swapped = list(idx)
            swapped[i], swapped[j] = swapped[j], swapped[i]
            if value != self.components[tuple(swapped)]:
                return False
        return True

    def tolist(self) -> list:
        return self.components.tolist()


def index_tuples(rank: int, dimension: int) -> Iterator[tuple[int, ...]]:
    """Row-major iteration over all index tuples of a cubic tensor."""
    return itertools.product(range(dimension), repeat=rank)
