"""Verification of the Einstein field equations.

For a metric, an optional source ``T_{ab}`` and an optional cosmological
constant, the residual

    Delta_{ab} = G_{ab} + Lambda g_{ab} - 8 pi T_{ab}

is formed and every component is zero-tested.  The verdict is three-valued:
a component that cannot be decided keeps the verdict ``INDETERMINATE``; it
is never reported as satisfied.
"""
from __future__ import annotations

import logging
import time
from enum import Enum
from typing import NamedTuple

import sympy as sp

from ..errors import DimensionMismatch
from ..expressions import (
    DEFAULT_SETTINGS,
    ExpressionArena,
    ZeroTest,
    ZeroTestSettings,
    is_zero,
)
from ..geometry import christoffel, einstein_tensor, ricci_from_christoffel, ricci_scalar
from ..tensors import Metric, SymbolicTensor
from .sources import as_expression

logger = logging.getLogger(__name__)


class Verdict(Enum):
    SATISFIED = "satisfied"
    VIOLATED = "violated"
    INDETERMINATE = "indeterminate"

    def as_json(self) -> bool | str:
        """``true`` / ``false`` / ``"indeterminate"`` in JSON output."""
        if self is Verdict.SATISFIED:
            return True
        if self is Verdict.VIOLATED:
            return False
        return self.value

    @classmethod
    def from_tests(cls, outcomes) -> Verdict:
        outcomes = list(outcomes)
        if any(o is ZeroTest.NONZERO for o in outcomes):
            return cls.VIOLATED
        if all(o is ZeroTest.ZERO for o in outcomes):
            return cls.SATISFIED
        return cls.INDETERMINATE


class VerificationResult(NamedTuple):
    """Outcome of :func:`verify`.

    Attributes
    ----------
    verdict : Verdict
        Aggregate over all components.
    residuals : SymbolicTensor
        Simplified ``Delta_{ab}``.
    component_tests : dict
        ``(a, b) -> ZeroTest`` for every component.
    """
    verdict: Verdict
    residuals: SymbolicTensor
    component_tests: dict

    @property
    def constraints_satisfied(self) -> bool:
        return self.verdict is Verdict.SATISFIED

    def failing_components(self) -> list[tuple[int, int]]:
        """Components that are not proved zero."""
        return [idx for idx, o in self.component_tests.items() if o is not ZeroTest.ZERO]


def _check_source(source: SymbolicTensor | None, metric: Metric) -> None:
    if source is None:
        return
    if source.rank != 2 or source.dimension != metric.dimension:
        raise DimensionMismatch(
            f"stress-energy tensor must be rank 2 over {metric.dimension} "
            f"dimensions, got rank {source.rank} over {source.dimension}"
        )


def field_equation_residuals(
    metric: Metric,
    source: SymbolicTensor | None = None,
    cosmological_constant=None,
    workers: int | None = None,
    arena: ExpressionArena | None = None,
) -> SymbolicTensor:
    """Simplified ``G_{ab} + Lambda g_{ab} - 8 pi T_{ab}``.

    Parameters
    ----------
    metric : Metric
        Metric to test.
    source : SymbolicTensor or None
        Covariant stress-energy tensor; vacuum when omitted.
    cosmological_constant : str, sp.Expr or None
        Lambda; zero when omitted.
    workers : int or None
        Process count for component-parallel evaluation.
    arena : ExpressionArena or None
        Per-invocation simplification memo.
    """
    _check_source(source, metric)
    arena = arena if arena is not None else ExpressionArena()
    lam = (
        sp.S.Zero
        if cosmological_constant is None
        else as_expression(cosmological_constant, metric.functions)
    )

    gamma = christoffel(metric, workers, arena)
    ricci = ricci_from_christoffel(gamma, metric.coords, workers, arena)
    scalar = ricci_scalar(ricci, metric, arena)
    einstein = einstein_tensor(ricci, scalar, metric, arena)

    def component(idx):
        residual = einstein[idx] + lam * metric.g[idx]
        if source is not None:
            residual -= 8 * sp.pi * source[idx]
        return arena.simplify(residual)

    return SymbolicTensor.from_function(2, metric.dimension, component, "dd")


def verify(
    metric: Metric,
    source: SymbolicTensor | None = None,
    cosmological_constant=None,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    workers: int | None = None,
) -> VerificationResult:
    """Check whether *metric* satisfies the Einstein field equations.

    Parameters
    ----------
    metric : Metric
        Metric to test.
    source : SymbolicTensor or None
        Covariant stress-energy tensor; vacuum when omitted.
    cosmological_constant : str, sp.Expr or None
        Lambda; zero when omitted.
    settings : ZeroTestSettings
        Zero-test configuration.
    workers : int or None
        Process count for component-parallel evaluation.

    Returns
    -------
    VerificationResult
        ``SATISFIED`` iff every residual component is proved zero,
        ``VIOLATED`` iff some component is detectably non-zero, and
        ``INDETERMINATE`` otherwise.
    """
    arena = ExpressionArena()
    start = time.perf_counter()
    residuals = field_equation_residuals(
        metric, source, cosmological_constant, workers, arena
    )

    tests: dict[tuple[int, ...], ZeroTest] = {}
    by_expression: dict[sp.Expr, ZeroTest] = {}
    for idx, value in residuals.items():
        outcome = by_expression.get(value)
        if outcome is None:
            outcome = is_zero(value, settings, arena)
            by_expression[value] = outcome
        tests[idx] = outcome

    verdict = Verdict.from_tests(tests.values())
    logger.info(
        "Field equations %s for %s (%d/%d components proved zero, %.2fs)",
        verdict.value,
        metric.coordinate_names,
        sum(o is ZeroTest.ZERO for o in tests.values()),
        len(tests),
        time.perf_counter() - start,
    )
    if verdict is Verdict.INDETERMINATE:
        logger.warning(
            "Could not decide residual components %s",
            [idx for idx, o in tests.items() if o is ZeroTest.INDETERMINATE],
        )
    return VerificationResult(verdict, residuals, tests)
