"""Spatially flat Friedmann-Lemaitre-Robertson-Walker cosmology.

    ds^2 = -dt^2 + a(t)^2 (dr^2 + r^2 dtheta^2 + r^2 sin^2(theta) dphi^2)

The scale factor ``a(t)`` is left free.  The source is the comoving perfect
fluid fixed by the Friedmann equations:

    rho = 3 (a'/a)^2 / (8 pi)
    p   = -(2 a''/a + (a'/a)^2) / (8 pi)
"""

from __future__ import annotations

import sympy as sp

from ..field_equations import perfect_fluid
from ..tensors import Metric, SymbolicTensor
from .template import SolutionTemplate


def friedmann_fluid(metric: Metric) -> SymbolicTensor:
    """Perfect fluid with the Friedmann density and pressure."""
    t = metric.coords[0]
    a = sp.Function("a")(t)
    hubble = sp.diff(a, t) / a
    density = 3 * hubble**2 / (8 * sp.pi)
    pressure = -(2 * sp.diff(a, t, 2) / a + hubble**2) / (8 * sp.pi)
    return perfect_fluid(metric, density, pressure)


FLRW = SolutionTemplate(
    name="FLRW",
    components=(
        ("-1", "0", "0", "0"),
        ("0", "a(t)^2", "0", "0"),
        ("0", "0", "a(t)^2 * r^2", "0"),
        ("0", "0", "0", "a(t)^2 * r^2 * sin(theta)^2"),
    ),
    parameters={
        "a(t)": "scale factor",
        "H": "Hubble parameter a'/a",
        "Omega_m": "matter density parameter",
        "Omega_Lambda": "dark energy density parameter",
    },
    domain="{t} > 0, spatial homogeneity",
    functions=("a",),
    source=friedmann_fluid,
    ground_truth={"ricci_scalar": "6*(diff(a(t), t, t)*a(t) + diff(a(t), t)^2)/a(t)^2"},
)
