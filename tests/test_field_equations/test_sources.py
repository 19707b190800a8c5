"""Tests for stress-energy sources: perfect fluid, Maxwell field, user input."""

import pytest
import sympy as sp

from tensorcalc.errors import AsymmetricMetric, DimensionMismatch, NonSquareMetric
from tensorcalc.expressions import simplify
from tensorcalc.field_equations import (
    Verdict,
    build_source,
    electromagnetic,
    perfect_fluid,
    verify,
)
from tensorcalc.solutions import REISSNER_NORDSTROM, coulomb_source, friedmann_fluid
from tensorcalc.tensors import SymbolicTensor


class TestPerfectFluid:

    def test_minkowski_rest_frame(self, minkowski_metric):
        rho, p = sp.symbols("rho p")
        T = perfect_fluid(minkowski_metric, "rho", "p")
        assert T.index_positions == "dd"
        assert T[0, 0] == rho
        assert T[1, 1] == T[2, 2] == T[3, 3] == p
        assert T[0, 1] == 0

    def test_flrw_friedmann_fluid(self, flrw_metric):
        assert verify(flrw_metric, friedmann_fluid(flrw_metric)).verdict is Verdict.SATISFIED

    def test_flrw_dust_violated(self, flrw_metric):
        dust = perfect_fluid(flrw_metric, "rho", "0")
        assert verify(flrw_metric, dust).verdict is Verdict.VIOLATED


class TestElectromagnetic:

    def test_coulomb_field_is_traceless(self, spherical_coords):
        metric = REISSNER_NORDSTROM.instantiate(spherical_coords)
        T = coulomb_source(metric)
        trace = sum(metric.inverse[a, a] * T[a, a] for a in range(4))
        assert simplify(trace) == 0
        assert T.is_symmetric()

    def test_energy_density(self, minkowski_metric):
        E = sp.Symbol("E")
        field = SymbolicTensor.from_function(
            2, 4, lambda idx: {(0, 1): E, (1, 0): -E}.get(idx, sp.S.Zero), "dd"
        )
        T = electromagnetic(minkowski_metric, field)
        # Uniform field along x: T_tt = E^2 / (8 pi), T_xx = -E^2 / (8 pi)
        assert simplify(T[0, 0] - E**2 / (8 * sp.pi)) == 0
        assert simplify(T[1, 1] + E**2 / (8 * sp.pi)) == 0
        assert simplify(T[2, 2] - E**2 / (8 * sp.pi)) == 0

    def test_reissner_nordstrom_satisfied(self, spherical_coords):
        metric = REISSNER_NORDSTROM.instantiate(spherical_coords)
        assert verify(metric, coulomb_source(metric)).verdict is Verdict.SATISFIED

    def test_reissner_nordstrom_is_not_vacuum(self, spherical_coords):
        metric = REISSNER_NORDSTROM.instantiate(spherical_coords)
        assert verify(metric).verdict is Verdict.VIOLATED

    def test_symmetric_field_rejected(self, minkowski_metric):
        field = SymbolicTensor.from_function(2, 4, lambda idx: sp.S.One, "dd")
        with pytest.raises(ValueError, match="antisymmetric"):
            electromagnetic(minkowski_metric, field)

    def test_wrong_dimension(self, minkowski_metric):
        with pytest.raises(DimensionMismatch):
            electromagnetic(minkowski_metric, SymbolicTensor.zeros(2, 2, "dd"))


class TestBuildSource:

    def test_parses_formulas(self):
        T = build_source([["rho", "0"], ["0", "p"]], ["t", "x"])
        assert T[0, 0] == sp.Symbol("rho")
        assert T.index_positions == "dd"

    def test_asymmetric_rejected(self):
        with pytest.raises(AsymmetricMetric, match="stress-energy") as info:
            build_source([["rho", "q"], ["0", "p"]], ["t", "x"])
        assert info.value.indices == (0, 1)

    def test_symmetric_with_distinct_canonical_forms(self):
        T = build_source(
            [["rho", "sin(x)^2/(1 + cos(x))"], ["1 - cos(x)", "p"]], ["t", "x"]
        )
        assert T[0, 1] == T[1, 0]
        assert T.is_symmetric()

    def test_shape_mismatch(self):
        with pytest.raises(NonSquareMetric):
            build_source([["rho"]], ["t", "x"])

    def test_free_functions(self):
        T = build_source([["rho(t)", "0"], ["0", "0"]], ["t", "x"], functions=["rho"])
        assert T[0, 0] == sp.Function("rho")(sp.Symbol("t"))
