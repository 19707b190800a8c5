"""Exception hierarchy for the tensor calculus engine.

Every failure is a deterministic function of the input, so nothing here is
retried: errors carry enough context (offending text, position, component
indices) to diagnose the input without re-running the computation.

``SolverNoMatch`` and the ``INDETERMINATE`` verification verdict are
*results*, not errors; see :mod:`tensorcalc.solutions.solver` and
:mod:`tensorcalc.field_equations.verifier`.
"""
from __future__ import annotations


class TensorCalcError(ValueError):
    """Base class for all input and computation errors."""


class ParseError(TensorCalcError):
    """Malformed formula string.

    Parameters
    ----------
    text : str
        The full formula that failed to parse.
    position : int
        Zero-based character offset of the offending token.
    reason : str
        Human-readable description of the problem.
    """

    def __init__(self, text: str, position: int, reason: str) -> None:
        self.text = text
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at position {position} in {text!r}")


class CoordinateError(TensorCalcError):
    """Empty, duplicate, reserved or otherwise invalid coordinate names."""


class NonSquareMetric(TensorCalcError):
    """Metric (or source) matrix shape does not match the coordinate count."""


class AsymmetricMetric(TensorCalcError):
    """A component pair ``[a][b]`` / ``[b][a]`` differs after simplification.

    Parameters
    ----------
    indices : tuple[int, int]
        The first offending ``(a, b)`` pair.
    """

    def __init__(self, message: str, indices: tuple[int, int]) -> None:
        self.indices = indices
        super().__init__(message)


class SingularMetric(TensorCalcError):
    """Metric determinant is identically zero or the inverse check failed."""


class DimensionMismatch(TensorCalcError):
    """Coordinate count differs from what a symmetry ansatz expects."""


class UnsupportedSymmetry(TensorCalcError):
    """Symmetry tag outside the registered set."""
