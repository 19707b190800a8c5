"""Explicit field-equation systems.

Turns a metric ansatz (possibly containing free functions such as ``a(t)``)
into the list of independent equations ``Delta_{ab} = 0`` that it must
satisfy, together with the unknown functions and free parameters.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import sympy as sp
from sympy.core.function import AppliedUndef

from ..expressions import ExpressionArena
from ..tensors import Metric, SymbolicTensor
from .verifier import field_equation_residuals


class FieldEquation(NamedTuple):
    """``lhs == 0`` for the component at *indices*."""
    indices: tuple[int, int]
    lhs: sp.Expr

    @property
    def numerator(self) -> sp.Expr:
        """Numerator of *lhs*; zero wherever the equation holds."""
        return sp.fraction(self.lhs)[0]


@dataclass(frozen=True)
class EquationSystem:
    """Independent field equations of one metric.

    Attributes
    ----------
    equations : tuple[FieldEquation, ...]
        Upper-triangle components ``a <= b`` that do not simplify to zero.
    unknowns : tuple[str, ...]
        Free functions appearing in the equations.
    parameters : tuple[str, ...]
        Free symbols other than coordinates.
    """

    equations: tuple[FieldEquation, ...]
    unknowns: tuple[str, ...]
    parameters: tuple[str, ...]

    @property
    def is_trivial(self) -> bool:
        """True when every component simplified to zero."""
        return len(self.equations) == 0


def construct_field_equations(
    metric: Metric,
    source: SymbolicTensor | None = None,
    cosmological_constant=None,
    workers: int | None = None,
) -> EquationSystem:
    """Field equations ``G + Lambda g - 8 pi T = 0`` of *metric*.

    Parameters
    ----------
    metric : Metric
        Metric or ansatz with free functions.
    source : SymbolicTensor or None
        Covariant stress-energy tensor; vacuum when omitted.
    cosmological_constant : str, sp.Expr or None
        Lambda; zero when omitted.
    workers : int or None
        Process count for component-parallel evaluation.

    Returns
    -------
    EquationSystem
        Only the canonical form is used to drop components, so an
        equation listed here may still vanish identically.
    """
    arena = ExpressionArena()
    residuals = field_equation_residuals(
        metric, source, cosmological_constant, workers, arena
    )
    n = metric.dimension
    equations = tuple(
        FieldEquation((a, b), residuals[a, b])
        for a in range(n)
        for b in range(a, n)
        if residuals[a, b] != 0
    )

    applied = set()
    free = set()
    for eq in equations:
        applied |= eq.lhs.atoms(AppliedUndef)
        free |= eq.lhs.free_symbols
    coords = set(metric.coords)
    return EquationSystem(
        equations=equations,
        unknowns=tuple(sorted({f.func.__name__ for f in applied})),
        parameters=tuple(sorted(s.name for s in free - coords)),
    )
