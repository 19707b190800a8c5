"""String-in, plain-data-out operations for the I/O layer.

Each operation takes formula strings and coordinate names, runs the core
once with a fresh simplification memo, and returns nested lists / dicts of
canonical formula strings.  Errors propagate as
:class:`tensorcalc.errors.TensorCalcError` subclasses.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from . import geometry
from .expressions import DEFAULT_SETTINGS, ExpressionArena, ZeroTestSettings, format_expr
from .field_equations import build_source, construct_field_equations, verify
from .serialization import (
    equations_record,
    formula_strings,
    no_match_record,
    solution_record,
    verification_record,
)
from .solutions import SolverNoMatch
from .solutions import solve_catalogue as _solve_catalogue
from .solutions import solve_vacuum as _solve_vacuum
from .tensors import Metric, build_metric

Matrix = Sequence[Sequence[str]]


def _metric(
    metric: Matrix,
    coords: Sequence[str],
    functions: Iterable[str],
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
) -> Metric:
    return build_metric(metric, coords, functions, settings)


def christoffel(
    metric: Matrix,
    coords: Sequence[str],
    functions: Iterable[str] = (),
    workers: int | None = None,
) -> list:
    """Rank-3 nested list of Gamma^a_{bc} formula strings."""
    g = _metric(metric, coords, functions)
    return formula_strings(geometry.christoffel(g, workers))


def riemann(
    metric: Matrix,
    coords: Sequence[str],
    functions: Iterable[str] = (),
    workers: int | None = None,
) -> list:
    """Rank-4 nested list of R^a_{bcd} formula strings."""
    g = _metric(metric, coords, functions)
    arena = ExpressionArena()
    gamma = geometry.christoffel(g, workers, arena)
    return formula_strings(geometry.riemann(gamma, g.coords, workers, arena))


def ricci(
    metric: Matrix,
    coords: Sequence[str],
    functions: Iterable[str] = (),
    workers: int | None = None,
) -> list:
    """Rank-2 nested list of R_{ab} formula strings."""
    chain = geometry.compute_curvature_chain(_metric(metric, coords, functions), workers)
    return formula_strings(chain.ricci)


def ricci_scalar(
    metric: Matrix,
    coords: Sequence[str],
    functions: Iterable[str] = (),
    workers: int | None = None,
) -> str:
    """Ricci scalar R as a formula string."""
    chain = geometry.compute_curvature_chain(_metric(metric, coords, functions), workers)
    return format_expr(chain.ricci_scalar)


def einstein(
    metric: Matrix,
    coords: Sequence[str],
    functions: Iterable[str] = (),
    workers: int | None = None,
) -> list:
    """Rank-2 nested list of G_{ab} formula strings."""
    chain = geometry.compute_curvature_chain(_metric(metric, coords, functions), workers)
    return formula_strings(chain.einstein)


def verify_solution(
    metric: Matrix,
    coords: Sequence[str],
    stress_energy: Matrix | None = None,
    cosmological_constant: str | None = None,
    functions: Iterable[str] = (),
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    workers: int | None = None,
) -> dict[str, Any]:
    """``{constraints_satisfied, verdict, residuals, failing_components}``.

    ``constraints_satisfied`` is ``True``, ``False`` or ``"indeterminate"``.
    """
    functions = tuple(functions)
    g = _metric(metric, coords, functions, settings)
    source = (
        build_source(stress_energy, coords, functions)
        if stress_energy is not None
        else None
    )
    result = verify(g, source, cosmological_constant, settings=settings, workers=workers)
    return verification_record(result)


def solve_vacuum(
    coords: Sequence[str],
    symmetry: str,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    workers: int | None = None,
) -> dict[str, Any]:
    """Solution record of the first proved vacuum template, or a
    ``{"status": "no solution found", ...}`` record."""
    result = _solve_vacuum(coords, symmetry, settings=settings, workers=workers)
    if isinstance(result, SolverNoMatch):
        return no_match_record(result)
    return solution_record(result)


def solve_catalogue(
    coords: Sequence[str],
    symmetry: str,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    workers: int | None = None,
) -> list[dict[str, Any]]:
    """Solution records of every template of the symmetry class."""
    return [
        solution_record(s)
        for s in _solve_catalogue(coords, symmetry, settings=settings, workers=workers)
    ]


def construct_equations(
    metric: Matrix,
    coords: Sequence[str],
    stress_energy: Matrix | None = None,
    cosmological_constant: str | None = None,
    functions: Iterable[str] = (),
    workers: int | None = None,
) -> dict[str, Any]:
    """``{field_equations, unknowns, known_parameters}`` of a metric ansatz."""
    functions = tuple(functions)
    g = _metric(metric, coords, functions)
    source = (
        build_source(stress_energy, coords, functions)
        if stress_energy is not None
        else None
    )
    system = construct_field_equations(g, source, cosmological_constant, workers)
    return equations_record(system)
