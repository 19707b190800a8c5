"""Kerr rotating black hole in Boyer-Lindquist coordinates.

    Sigma = r^2 + a^2 cos^2(theta),  Delta = r^2 - 2Mr + a^2

    g_tt = -(1 - 2Mr/Sigma)          g_rr = Sigma/Delta
    g_thth = Sigma                   g_tph = -2Mra sin^2(theta)/Sigma
    g_phph = sin^2(theta) (r^2 + a^2 + 2Mra^2 sin^2(theta)/Sigma)

Ground truth:
- Vacuum solution: G_{mu nu} = 0
- Reduces to Schwarzschild for a = 0
"""

from __future__ import annotations

from .template import SolutionTemplate

_SIGMA = "(r^2 + a^2*cos(theta)^2)"
_FRAME_DRAGGING = f"-2*M*r*a*sin(theta)^2/{_SIGMA}"

KERR = SolutionTemplate(
    name="Kerr",
    components=(
        (f"-(1 - 2*M*r/{_SIGMA})", "0", "0", _FRAME_DRAGGING),
        ("0", f"{_SIGMA}/(r^2 - 2*M*r + a^2)", "0", "0"),
        ("0", "0", _SIGMA, "0"),
        (
            _FRAME_DRAGGING,
            "0",
            "0",
            f"sin(theta)^2 * (r^2 + a^2 + 2*M*r*a^2*sin(theta)^2/{_SIGMA})",
        ),
    ),
    parameters={"M": "mass parameter", "a": "angular momentum per unit mass (J/M)"},
    domain="{r} > M + sqrt(M^2 - a^2)",
    ground_truth={"ricci_scalar": "0"},
)
