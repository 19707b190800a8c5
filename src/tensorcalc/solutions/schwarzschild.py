"""Schwarzschild black hole in Schwarzschild coordinates.

    ds^2 = -(1 - 2M/r) dt^2 + dr^2 / (1 - 2M/r) + r^2 (dtheta^2 + sin^2(theta) dphi^2)

Ground truth:
- Vacuum solution: G_{mu nu} = 0, T_{mu nu} = 0
- Ricci scalar: R = 0
- Kretschmann scalar: K = 48 M^2 / r^6
"""

from __future__ import annotations

from .template import SolutionTemplate

SCHWARZSCHILD = SolutionTemplate(
    name="Schwarzschild",
    components=(
        ("-(1 - 2*M/r)", "0", "0", "0"),
        ("0", "1/(1 - 2*M/r)", "0", "0"),
        ("0", "0", "r^2", "0"),
        ("0", "0", "0", "r^2 * sin(theta)^2"),
    ),
    parameters={"M": "mass parameter"},
    domain="{r} > 2M",
    ground_truth={
        "ricci_scalar": "0",
        "kretschmann": "48*M^2/r^6",
    },
)
