"""Exact curvature of symbolic metrics.

"""

from .bridge import evaluate_tensor, metric_to_jax, numeric_christoffel, tensor_to_jax
from .geometry import (
    CurvatureResult,
    christoffel,
    compute_curvature_chain,
    einstein_tensor,
    ricci_from_christoffel,
    ricci_scalar,
    ricci_tensor,
    riemann,
)
from .invariants import kretschmann_scalar, ricci_squared
from .parallel import map_components

__all__ = [
    "CurvatureResult",
    "christoffel",
    "compute_curvature_chain",
    "einstein_tensor",
    "evaluate_tensor",
    "kretschmann_scalar",
    "map_components",
    "metric_to_jax",
    "numeric_christoffel",
    "ricci_from_christoffel",
    "ricci_scalar",
    "ricci_squared",
    "ricci_tensor",
    "riemann",
    "tensor_to_jax",
]
