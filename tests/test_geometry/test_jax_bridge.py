"""Tests for the SymPy-JAX bridge.

The exact Christoffel symbols are cross-validated pointwise against JAX
forward-mode autodiff of the lambdified metric.
"""

import jax.numpy as jnp
import numpy.testing as npt
import pytest

from tensorcalc.geometry import (
    christoffel,
    evaluate_tensor,
    metric_to_jax,
    numeric_christoffel,
    tensor_to_jax,
)

POINT = [0.5, 3.0, 1.1, 0.4]
PARAMS = {"M": 1.0}


class TestMetricToJax:

    def test_schwarzschild_values(self, schwarzschild_metric):
        g_fn = metric_to_jax(schwarzschild_metric, PARAMS)
        g = g_fn(jnp.array(POINT))
        assert g.shape == (4, 4)
        assert g.dtype == jnp.float64
        npt.assert_allclose(g[0, 0], -1.0 / 3.0, rtol=1e-14)
        npt.assert_allclose(g[1, 1], 3.0, rtol=1e-14)
        npt.assert_allclose(g[3, 3], 9.0 * jnp.sin(1.1) ** 2, rtol=1e-14)
        npt.assert_allclose(g[0, 1], 0.0, atol=0.0)

    def test_unbound_parameter(self, schwarzschild_metric):
        with pytest.raises(ValueError, match="M"):
            metric_to_jax(schwarzschild_metric)

    def test_free_functions_rejected(self, flrw_metric):
        with pytest.raises(ValueError, match="free functions"):
            metric_to_jax(flrw_metric)

    def test_tensor_to_jax_missing_symbol(self, polar_plane_metric):
        with pytest.raises(ValueError, match="r"):
            tensor_to_jax(polar_plane_metric.g, ["theta"])


class TestNumericChristoffel:

    def test_matches_symbolic_schwarzschild(self, schwarzschild_metric):
        point = jnp.array(POINT)
        numeric = numeric_christoffel(metric_to_jax(schwarzschild_metric, PARAMS), point)
        exact = evaluate_tensor(
            christoffel(schwarzschild_metric), schwarzschild_metric.coords, POINT, PARAMS
        )
        assert numeric.shape == (4, 4, 4)
        npt.assert_allclose(numeric, exact, atol=1e-12)

    def test_matches_symbolic_polar_plane(self, polar_plane_metric):
        point = jnp.array([2.0, 0.3])
        numeric = numeric_christoffel(metric_to_jax(polar_plane_metric), point)
        npt.assert_allclose(numeric[0, 1, 1], -2.0, rtol=1e-14)
        npt.assert_allclose(numeric[1, 0, 1], 0.5, rtol=1e-14)
        npt.assert_allclose(numeric[1, 1, 0], 0.5, rtol=1e-14)

    def test_evaluate_tensor_dtype(self, polar_plane_metric):
        values = evaluate_tensor(polar_plane_metric.inverse, ["r", "theta"], [2.0, 0.3])
        assert values.dtype == jnp.float64
        npt.assert_allclose(values[1, 1], 0.25, rtol=1e-14)
