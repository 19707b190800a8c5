"""Best-effort, three-valued zero testing.

Exact equality-to-zero of symbolic expressions is undecidable in general,
so :func:`is_zero` combines two kinds of evidence:

1. Normalization: the canonical form from :func:`simplify`.  A literal ``0``
   is a proof, giving ``ZeroTest.ZERO``.
2. Sampling: the expression is evaluated at pseudo-random exact rational
   assignments of its free symbols (free functions are replaced by random
   smooth test functions) with arbitrary-precision arithmetic.  A single
   sample beyond tolerance is a proof of ``ZeroTest.NONZERO``.

If every sample vanishes the expression is *probably* zero but unproven.
One heavier SymPy simplification is attempted (optional); if that does not
reach a literal zero the answer is ``ZeroTest.INDETERMINATE``, which callers
must handle explicitly rather than treating as satisfied.

Domain constraints such as ``r > 2M`` are not taken into account; samples
that land on a singularity are skipped.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import NamedTuple

import numpy as np
import sympy as sp
from sympy.core.function import AppliedUndef

from .simplify import ExpressionArena, simplify

logger = logging.getLogger(__name__)

# Denominator of the rational sample values (prime, to avoid accidental
# cancellations between independently drawn values).
SAMPLE_DENOMINATOR = 1009


class ZeroTest(Enum):
    ZERO = "zero"
    NONZERO = "nonzero"
    INDETERMINATE = "indeterminate"


class ZeroTestSettings(NamedTuple):
    """Knobs of the numeric sampling stage.

    Parameters
    ----------
    samples : int
        Number of random assignments to evaluate.
    tolerance : float
        Absolute magnitude above which a sample counts as non-zero.
    seed : int
        Seed of the ``numpy`` generator; equal seeds give equal samples.
    low, high : float
        Range the sample values (coordinates, parameters) are drawn from.
    precision : int
        Decimal digits used by ``evalf``.
    deep_simplify : bool
        Try ``sympy.simplify`` before answering ``INDETERMINATE``.
    """

    samples: int = 6
    tolerance: float = 1e-12
    seed: int = 1729
    low: float = 0.3
    high: float = 2.7
    precision: int = 30
    deep_simplify: bool = True


DEFAULT_SETTINGS = ZeroTestSettings()


# ---------------------------------------------------------------------------
# Sampling helpers
# ---------------------------------------------------------------------------


def _draw(rng: np.random.Generator, settings: ZeroTestSettings) -> sp.Rational:
    lo = math.ceil(settings.low * SAMPLE_DENOMINATOR)
    hi = math.floor(settings.high * SAMPLE_DENOMINATOR)
    return sp.Rational(int(rng.integers(lo, hi + 1)), SAMPLE_DENOMINATOR)


def _test_function(
    arity: int, rng: np.random.Generator, settings: ZeroTestSettings
) -> sp.Lambda:
    """Random smooth function standing in for a free function."""
    args = sp.symbols(f"_x0:{arity}")
    body = _draw(rng, settings)
    for x in args:
        body += _draw(rng, settings) * x + _draw(rng, settings) * x**2
        body += sp.exp(_draw(rng, settings) * x / 3)
    return sp.Lambda(args, body)


def _replace_free_functions(
    expr: sp.Expr, rng: np.random.Generator, settings: ZeroTestSettings
) -> sp.Expr:
    applied = sorted(expr.atoms(AppliedUndef), key=sp.default_sort_key)
    if not applied:
        return expr
    functions = {}
    for application in applied:
        if application.func not in functions:
            functions[application.func] = _test_function(
                len(application.args), rng, settings
            )
    for func, replacement in functions.items():
        expr = expr.replace(func, replacement)
    return expr.doit()


def sample_magnitude(
    expr: sp.Expr,
    rng: np.random.Generator,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
) -> float | None:
    """|expr| at one random assignment, or ``None`` at a singular point."""
    concrete = _replace_free_functions(expr, rng, settings)
    symbols = sorted(concrete.free_symbols, key=sp.default_sort_key)
    assignment = {s: _draw(rng, settings) for s in symbols}
    value = concrete.xreplace(assignment)
    if value.has(sp.zoo, sp.nan, sp.oo, -sp.oo):
        return None
    numeric = value.evalf(settings.precision)
    if not numeric.is_number or numeric.has(sp.zoo, sp.nan):
        return None
    try:
        return abs(complex(numeric))
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_zero(
    expr: sp.Expr,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    arena: ExpressionArena | None = None,
) -> ZeroTest:
    """Three-valued test of whether *expr* is identically zero.

    Parameters
    ----------
    expr : sp.Expr
        Expression to test.
    settings : ZeroTestSettings
        Sampling configuration.
    arena : ExpressionArena or None
        Optional per-invocation memo used for the simplification step.

    Returns
    -------
    ZeroTest
        ``ZERO`` (proved), ``NONZERO`` (a sample is detectably non-zero) or
        ``INDETERMINATE`` (all samples vanished but no proof was found).
    """
    canonical = arena.simplify(expr) if arena is not None else simplify(expr)
    if canonical == 0:
        return ZeroTest.ZERO

    rng = np.random.default_rng(settings.seed)
    evaluated = 0
    for _ in range(settings.samples):
        magnitude = sample_magnitude(canonical, rng, settings)
        if magnitude is None:
            continue
        evaluated += 1
        if magnitude > settings.tolerance:
            return ZeroTest.NONZERO

    logger.debug(
        "All %d/%d samples vanished for non-canonical-zero expression",
        evaluated, settings.samples,
    )
    if settings.deep_simplify and sp.simplify(canonical) == 0:
        return ZeroTest.ZERO
    return ZeroTest.INDETERMINATE
