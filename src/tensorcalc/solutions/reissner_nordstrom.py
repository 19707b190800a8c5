"""Reissner-Nordstrom charged black hole.

    ds^2 = -f dt^2 + dr^2 / f + r^2 dOmega^2,   f = 1 - 2M/r + Q^2/r^2

Not a vacuum solution: the source is the Coulomb field F_{tr} = Q / r^2
with the Maxwell stress-energy tensor.

Ground truth:
- Ricci scalar: R = 0 (traceless electromagnetic source)
- Kretschmann scalar: K = (48 M^2 r^2 - 96 M Q^2 r + 56 Q^4) / r^8
"""

from __future__ import annotations

import sympy as sp

from ..field_equations import electromagnetic
from ..tensors import Metric, SymbolicTensor
from .template import SolutionTemplate


def coulomb_source(metric: Metric) -> SymbolicTensor:
    """Maxwell stress-energy of a point charge ``Q`` at ``r = 0``."""
    r = metric.coords[1]
    Q = sp.Symbol("Q")
    radial = Q / r**2

    def component(idx):
        if idx == (0, 1):
            return radial
        if idx == (1, 0):
            return -radial
        return sp.S.Zero

    field = SymbolicTensor.from_function(2, metric.dimension, component, "dd")
    return electromagnetic(metric, field)


REISSNER_NORDSTROM = SolutionTemplate(
    name="Reissner-Nordstrom",
    components=(
        ("-(1 - 2*M/r + Q^2/r^2)", "0", "0", "0"),
        ("0", "1/(1 - 2*M/r + Q^2/r^2)", "0", "0"),
        ("0", "0", "r^2", "0"),
        ("0", "0", "0", "r^2 * sin(theta)^2"),
    ),
    parameters={"M": "mass parameter", "Q": "electric charge"},
    domain="{r} > M + sqrt(M^2 - Q^2)",
    source=coulomb_source,
    ground_truth={
        "ricci_scalar": "0",
        "kretschmann": "(48*M^2*r^2 - 96*M*Q^2*r + 56*Q^4)/r^8",
    },
)
