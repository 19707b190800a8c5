"""Einstein field equations: sources, residuals and verification.

"""

from .equations import EquationSystem, FieldEquation, construct_field_equations
from .sources import as_expression, build_source, electromagnetic, perfect_fluid
from .verifier import (
    Verdict,
    VerificationResult,
    field_equation_residuals,
    verify,
)

__all__ = [
    "EquationSystem",
    "FieldEquation",
    "Verdict",
    "VerificationResult",
    "as_expression",
    "build_source",
    "construct_field_equations",
    "electromagnetic",
    "field_equation_residuals",
    "perfect_fluid",
    "verify",
]
