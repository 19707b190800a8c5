"""Tests for the symmetry registry and solution templates."""

import pytest
import sympy as sp

from tensorcalc.errors import CoordinateError, DimensionMismatch, UnsupportedSymmetry
from tensorcalc.solutions import (
    DE_SITTER,
    FLRW,
    KERR,
    REISSNER_NORDSTROM,
    SCHWARZSCHILD,
    SolutionRegistry,
    Symmetry,
    SymmetryAnsatz,
    create_default_registry,
    diagonal,
)


# =========================================================================
# 1. Registry
# =========================================================================


class TestDefaultRegistry:

    def test_symmetries(self):
        registry = create_default_registry()
        assert len(registry) == 3
        assert registry.list_symmetries() == ["axisymmetric", "cosmological", "spherical"]

    def test_spherical_templates(self):
        ansatz = create_default_registry().get("spherical")
        assert ansatz.templates == (SCHWARZSCHILD, REISSNER_NORDSTROM)
        assert ansatz.vacuum_templates() == [SCHWARZSCHILD]
        assert ansatz.dimension == 4

    def test_axisymmetric_allows_frame_dragging(self):
        ansatz = create_default_registry().get(Symmetry.AXISYMMETRIC)
        assert (0, 3) in ansatz.sparsity
        assert ansatz.templates == (KERR,)

    def test_cosmological_templates(self):
        ansatz = create_default_registry().get("cosmological")
        assert [t.name for t in ansatz.templates] == ["FLRW", "de Sitter"]
        assert ansatz.vacuum_templates() == [DE_SITTER]

    def test_unknown_symmetry(self):
        with pytest.raises(UnsupportedSymmetry, match="toroidal"):
            create_default_registry().get("toroidal")

    def test_contains(self):
        registry = create_default_registry()
        assert "spherical" in registry
        assert "toroidal" not in registry

    def test_unregistered_symmetry(self):
        registry = SolutionRegistry()
        with pytest.raises(UnsupportedSymmetry, match="no ansatz"):
            registry.get("spherical")

    def test_template_lookup(self):
        ansatz = create_default_registry().get("spherical")
        assert ansatz.template("Schwarzschild") is SCHWARZSCHILD
        with pytest.raises(KeyError, match="Kerr"):
            ansatz.template("Kerr")


class TestAnsatzValidation:

    def test_sparsity_violation(self):
        with pytest.raises(ValueError, match="sparsity"):
            SymmetryAnsatz(Symmetry.AXISYMMETRIC, diagonal(), (KERR,))

    def test_dimension_violation(self):
        with pytest.raises(ValueError, match="dimension"):
            SymmetryAnsatz(Symmetry.SPHERICAL, diagonal(3), (SCHWARZSCHILD,), dimension=3)

    def test_symmetry_tags(self):
        assert Symmetry.from_tag("spherical") is Symmetry.SPHERICAL
        assert Symmetry.from_tag(Symmetry.COSMOLOGICAL) is Symmetry.COSMOLOGICAL
        with pytest.raises(UnsupportedSymmetry):
            Symmetry.from_tag("Spherical")


# =========================================================================
# 2. Templates
# =========================================================================


class TestTemplates:

    def test_vacuum_flags(self):
        assert SCHWARZSCHILD.vacuum
        assert DE_SITTER.vacuum
        assert not REISSNER_NORDSTROM.vacuum
        assert not FLRW.vacuum

    def test_instantiate_renames_coordinates(self):
        metric = SCHWARZSCHILD.instantiate(["T", "R", "Th", "Ph"])
        R, M, Th = sp.symbols("R M Th")
        assert metric.coordinate_names == ["T", "R", "Th", "Ph"]
        assert metric.g[2, 2] == R**2
        assert metric.g[3, 3] == R**2 * sp.sin(Th) ** 2
        assert metric.parameters == [M]

    def test_domain_uses_coordinate_names(self):
        assert SCHWARZSCHILD.domain_constraint(["t", "rho", "theta", "phi"]) == "rho > 2M"
        assert FLRW.domain_constraint(["tau", "r", "theta", "phi"]).startswith("tau > 0")

    def test_parameter_clash(self):
        with pytest.raises(CoordinateError, match="collide"):
            SCHWARZSCHILD.instantiate(["t", "M", "theta", "phi"])

    def test_function_clash(self):
        with pytest.raises(CoordinateError):
            FLRW.instantiate(["a", "r", "theta", "phi"])

    def test_wrong_dimension(self):
        with pytest.raises(DimensionMismatch):
            SCHWARZSCHILD.instantiate(["t", "r", "theta"])

    def test_source_builders(self, spherical_coords):
        metric = REISSNER_NORDSTROM.instantiate(spherical_coords)
        assert REISSNER_NORDSTROM.build_source(metric).index_positions == "dd"
        assert SCHWARZSCHILD.build_source(metric) is None
