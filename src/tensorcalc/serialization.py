"""Conversion of result structures to plain JSON-ready data.

Tensors are emitted either dense (nested lists of formula strings) or
sparse (``{indices, expression}`` entries for the components that are not
``"0"``).  Every formula string is the canonical printed form accepted by
:func:`tensorcalc.expressions.parse`.
"""
from __future__ import annotations

import json
from typing import Any, Sequence

from .expressions import format_expr
from .field_equations import EquationSystem, VerificationResult
from .solutions import Solution, SolverNoMatch
from .tensors import SymbolicTensor

NO_SOLUTION = "no solution found"


# ---------------------------------------------------------------------------
# Tensors
# ---------------------------------------------------------------------------


def formula_strings(tensor: SymbolicTensor) -> list:
    """Dense nested list of canonical formula strings."""

    def convert(node):
        if isinstance(node, list):
            return [convert(child) for child in node]
        return format_expr(node)

    return convert(tensor.tolist())


def _walk(nested, prefix=()):
    if isinstance(nested, list):
        for k, child in enumerate(nested):
            yield from _walk(child, prefix + (k,))
    else:
        yield prefix, nested


def _rank(nested) -> int:
    rank = 0
    while isinstance(nested, list):
        rank += 1
        nested = nested[0] if nested else None
    return rank


def sparse_components(nested: list) -> dict[str, Any]:
    """Sparse form of a dense nested list of formula strings.

    Returns
    -------
    dict
        ``{"dimension", "rank", "components": [{"indices", "expression"}]}``
        listing only the entries that are not ``"0"``.
    """
    return {
        "dimension": len(nested),
        "rank": _rank(nested),
        "components": [
            {"indices": list(idx), "expression": expression}
            for idx, expression in _walk(nested)
            if expression != "0"
        ],
    }


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------


def verification_record(result: VerificationResult) -> dict[str, Any]:
    return {
        "constraints_satisfied": result.verdict.as_json(),
        "verdict": result.verdict.value,
        "residuals": formula_strings(result.residuals),
        "failing_components": [list(idx) for idx in result.failing_components()],
    }


def solution_record(solution: Solution) -> dict[str, Any]:
    return {
        "name": solution.name,
        "symmetry": solution.symmetry.value,
        "solution_type": solution.solution_type,
        "metric_tensor": formula_strings(solution.metric.g),
        "physical_parameters": dict(solution.parameters),
        "solution_domain": solution.domain,
        "constraints_satisfied": solution.verdict.as_json(),
    }


def no_match_record(no_match: SolverNoMatch) -> dict[str, Any]:
    return {
        "status": NO_SOLUTION,
        "symmetry": no_match.symmetry.value,
        "reason": no_match.reason,
        "attempts": [
            {"name": name, "constraints_satisfied": verdict.as_json()}
            for name, verdict in no_match.attempts
        ],
        "constraints_satisfied": False,
    }


def equations_record(system: EquationSystem) -> dict[str, Any]:
    return {
        "field_equations": [
            {"indices": list(eq.indices), "expression": format_expr(eq.lhs)}
            for eq in system.equations
        ],
        "unknowns": list(system.unknowns),
        "known_parameters": list(system.parameters),
    }


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


def envelope(
    result_type: str,
    data: Any,
    coordinates: Sequence[str] = (),
    error: str | None = None,
) -> dict[str, Any]:
    """``{result_type, data, coordinates, success, error}`` wrapper."""
    return {
        "result_type": result_type,
        "data": data,
        "coordinates": list(coordinates),
        "success": error is None,
        "error": error,
    }


def error_envelope(message: str, coordinates: Sequence[str] = ()) -> dict[str, Any]:
    return envelope("error", None, coordinates, error=message)


def to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2)
