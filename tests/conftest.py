"""Shared test fixtures for the tensorcalc test suite.

Float64 enforcement is verified at import time: the numeric bridge tests
compare JAX values with exact symbolic ones.
"""

import jax.numpy as jnp
import pytest

import tensorcalc  # noqa: F401  (enables jax_enable_x64)
from tensorcalc.tensors import build_metric

# ---------------------------------------------------------------------------
# Float64 enforcement check fails LOUD if x64 is not enabled
# ---------------------------------------------------------------------------
_x64_check = jnp.array(1.0)
assert _x64_check.dtype == jnp.float64, (
    f"JAX float64 not enabled!  Got dtype={_x64_check.dtype}.  "
    "tensorcalc must enable jax_enable_x64 at import."
)


# ---------------------------------------------------------------------------
# Coordinate fixtures
# ---------------------------------------------------------------------------

SPHERICAL_COORDS = ["t", "r", "theta", "phi"]

SCHWARZSCHILD_MATRIX = [
    ["-(1 - 2*M/r)", "0", "0", "0"],
    ["0", "1/(1 - 2*M/r)", "0", "0"],
    ["0", "0", "r^2", "0"],
    ["0", "0", "0", "r^2*sin(theta)^2"],
]


@pytest.fixture
def spherical_coords() -> list[str]:
    """Canonical (t, r, theta, phi) coordinate names."""
    return list(SPHERICAL_COORDS)


@pytest.fixture
def schwarzschild_matrix() -> list[list[str]]:
    return [list(row) for row in SCHWARZSCHILD_MATRIX]


# ---------------------------------------------------------------------------
# Metric fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def schwarzschild_metric(schwarzschild_matrix, spherical_coords):
    return build_metric(schwarzschild_matrix, spherical_coords)


@pytest.fixture
def polar_plane_metric():
    """Flat plane in polar coordinates: diag(1, r^2) in (r, theta)."""
    return build_metric([["1", "0"], ["0", "r^2"]], ["r", "theta"])


@pytest.fixture
def unit_sphere_metric():
    """Unit 2-sphere: diag(1, sin(theta)^2) in (theta, phi)."""
    return build_metric([["1", "0"], ["0", "sin(theta)^2"]], ["theta", "phi"])


@pytest.fixture
def minkowski_metric():
    return build_metric(
        [["-1", "0", "0", "0"], ["0", "1", "0", "0"], ["0", "0", "1", "0"], ["0", "0", "0", "1"]],
        ["t", "x", "y", "z"],
    )


@pytest.fixture
def flrw_metric(spherical_coords):
    """Flat FLRW with a free scale factor a(t)."""
    return build_metric(
        [
            ["-1", "0", "0", "0"],
            ["0", "a(t)^2", "0", "0"],
            ["0", "0", "a(t)^2*r^2", "0"],
            ["0", "0", "0", "a(t)^2*r^2*sin(theta)^2"],
        ],
        spherical_coords,
        functions=["a"],
    )
