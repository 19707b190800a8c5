"""Symmetry-driven solution search.

The solver does not integrate the field equations.  It instantiates the
closed-form templates registered for a symmetry class in the caller's
coordinates and accepts a template only when the verifier *proves* it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Sequence

from ..errors import DimensionMismatch
from ..expressions import DEFAULT_SETTINGS, ZeroTestSettings
from ..field_equations import Verdict, verify
from ..tensors import Metric, coordinate_symbols
from .registry import SolutionRegistry, SymmetryAnsatz, create_default_registry
from .template import SolutionTemplate, Symmetry

logger = logging.getLogger(__name__)


class Solution(NamedTuple):
    """A catalogue metric instantiated in the caller's coordinates."""
    symmetry: Symmetry
    name: str
    solution_type: str
    metric: Metric
    parameters: dict[str, str]
    domain: str
    verdict: Verdict

    @property
    def constraints_satisfied(self) -> bool:
        """True only when the field equations were proved."""
        return self.verdict is Verdict.SATISFIED


@dataclass(frozen=True)
class SolverNoMatch:
    """No vacuum template of the ansatz was proved to satisfy the equations.

    Attributes
    ----------
    symmetry : Symmetry
        The requested symmetry class.
    attempts : tuple of (str, Verdict)
        Every template tried, with its verification verdict.
    """

    symmetry: Symmetry
    attempts: tuple[tuple[str, Verdict], ...]

    constraints_satisfied = False

    @property
    def reason(self) -> str:
        if not self.attempts:
            return f"no vacuum template registered for {self.symmetry.value!r}"
        tried = ", ".join(f"{name}: {verdict.value}" for name, verdict in self.attempts)
        return f"no {self.symmetry.value} template was proved to be a vacuum solution ({tried})"


def _ansatz_for(
    coords: Sequence[str],
    symmetry: str | Symmetry,
    registry: SolutionRegistry | None,
) -> SymmetryAnsatz:
    registry = registry if registry is not None else create_default_registry()
    ansatz = registry.get(symmetry)
    if len(coords) != ansatz.dimension:
        raise DimensionMismatch(
            f"{ansatz.symmetry.value} symmetry requires {ansatz.dimension} "
            f"coordinates, got {len(coords)}: {list(coords)}"
        )
    coordinate_symbols(coords)
    return ansatz


def _attempt(
    template: SolutionTemplate,
    symmetry: Symmetry,
    coords: Sequence[str],
    settings: ZeroTestSettings,
    workers: int | None,
) -> Solution:
    metric = template.instantiate(coords, settings)
    result = verify(
        metric,
        template.build_source(metric),
        template.cosmological_constant,
        settings=settings,
        workers=workers,
    )
    logger.info("%s (%s): %s", template.name, symmetry.value, result.verdict.value)
    return Solution(
        symmetry=symmetry,
        name=template.name,
        solution_type=template.solution_type,
        metric=metric,
        parameters=dict(template.parameters),
        domain=template.domain_constraint(coords),
        verdict=result.verdict,
    )


def solve_vacuum(
    coords: Sequence[str],
    symmetry: str | Symmetry,
    registry: SolutionRegistry | None = None,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    workers: int | None = None,
) -> Solution | SolverNoMatch:
    """Find a vacuum solution of the requested symmetry.

    Parameters
    ----------
    coords : sequence of str
        Coordinate names, in ``(t, r, theta, phi)`` roles.
    symmetry : str or Symmetry
        ``"spherical"``, ``"axisymmetric"`` or ``"cosmological"``.
    registry : SolutionRegistry or None
        Template source; the exact-solution catalogue when omitted.
    settings : ZeroTestSettings
        Zero-test configuration.
    workers : int or None
        Process count for component-parallel evaluation.

    Returns
    -------
    Solution or SolverNoMatch
        The first vacuum template whose verdict is ``SATISFIED``, or a
        ``SolverNoMatch`` listing every attempt.

    Raises
    ------
    UnsupportedSymmetry
        Unknown symmetry tag.
    DimensionMismatch
        ``len(coords)`` differs from the ansatz dimension.
    CoordinateError
        A coordinate name is invalid or collides with a template parameter.
    """
    ansatz = _ansatz_for(coords, symmetry, registry)
    attempts = []
    for template in ansatz.vacuum_templates():
        solution = _attempt(template, ansatz.symmetry, coords, settings, workers)
        if solution.constraints_satisfied:
            return solution
        attempts.append((template.name, solution.verdict))
    no_match = SolverNoMatch(ansatz.symmetry, tuple(attempts))
    logger.warning(no_match.reason)
    return no_match


def solve_catalogue(
    coords: Sequence[str],
    symmetry: str | Symmetry,
    registry: SolutionRegistry | None = None,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    workers: int | None = None,
) -> list[Solution]:
    """Every template of the ansatz, each verified against its own source."""
    ansatz = _ansatz_for(coords, symmetry, registry)
    return [
        _attempt(template, ansatz.symmetry, coords, settings, workers)
        for template in ansatz.templates
    ]
