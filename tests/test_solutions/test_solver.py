"""Tests for the symmetry-driven vacuum solver."""

import pytest

from tensorcalc.errors import CoordinateError, DimensionMismatch, UnsupportedSymmetry
from tensorcalc.field_equations import Verdict
from tensorcalc.solutions import (
    REISSNER_NORDSTROM,
    SolutionRegistry,
    SolutionTemplate,
    SolverNoMatch,
    Symmetry,
    SymmetryAnsatz,
    diagonal,
    solve_catalogue,
    solve_vacuum,
)

WRONG_LAPSE = SolutionTemplate(
    name="Wrong lapse",
    components=(
        ("-(1 + 2*M/r)", "0", "0", "0"),
        ("0", "1/(1 - 2*M/r)", "0", "0"),
        ("0", "0", "r^2", "0"),
        ("0", "0", "0", "r^2*sin(theta)^2"),
    ),
    parameters={"M": "mass parameter"},
)

# Minkowski space seen from a frame rotating with angular velocity w about
# the polar axis: flat, with a non-zero g_{t phi}.
ROTATING_FRAME = SolutionTemplate(
    name="Rotating frame",
    components=(
        ("-(1 - w^2*r^2*sin(theta)^2)", "0", "0", "-w*r^2*sin(theta)^2"),
        ("0", "1", "0", "0"),
        ("0", "0", "r^2", "0"),
        ("-w*r^2*sin(theta)^2", "0", "0", "r^2*sin(theta)^2"),
    ),
    parameters={"w": "angular velocity of the frame"},
)

AXISYMMETRIC_SPARSITY = diagonal() | {(0, 3), (3, 0)}


def _registry(*templates, symmetry=Symmetry.SPHERICAL, sparsity=None):
    registry = SolutionRegistry()
    sparsity = sparsity if sparsity is not None else diagonal()
    registry.register(SymmetryAnsatz(symmetry, sparsity, templates))
    return registry


# =========================================================================
# 1. Matches
# =========================================================================


class TestSolveVacuum:

    def test_spherical_is_schwarzschild(self, spherical_coords):
        solution = solve_vacuum(spherical_coords, "spherical")
        assert solution.name == "Schwarzschild"
        assert solution.symmetry is Symmetry.SPHERICAL
        assert solution.solution_type == "exact"
        assert solution.constraints_satisfied
        assert solution.verdict is Verdict.SATISFIED
        assert "M" in solution.parameters
        assert solution.domain == "r > 2M"

    def test_renamed_coordinates(self):
        solution = solve_vacuum(["t", "R", "theta", "phi"], "spherical")
        assert solution.domain == "R > 2M"
        assert solution.metric.coordinate_names == ["t", "R", "theta", "phi"]

    def test_cosmological_is_de_sitter(self, spherical_coords):
        solution = solve_vacuum(spherical_coords, Symmetry.COSMOLOGICAL)
        assert solution.name == "de Sitter"
        assert solution.constraints_satisfied

    @pytest.mark.slow
    def test_axisymmetric_is_kerr(self, spherical_coords):
        solution = solve_vacuum(spherical_coords, "axisymmetric")
        assert solution.name == "Kerr"
        assert solution.constraints_satisfied
        assert solution.domain == "r > M + sqrt(M^2 - a^2)"

    def test_axisymmetric_with_frame_dragging_term(self, spherical_coords):
        registry = _registry(
            WRONG_LAPSE, ROTATING_FRAME,
            symmetry=Symmetry.AXISYMMETRIC, sparsity=AXISYMMETRIC_SPARSITY,
        )
        solution = solve_vacuum(spherical_coords, "axisymmetric", registry=registry)
        assert solution.name == "Rotating frame"
        assert solution.symmetry is Symmetry.AXISYMMETRIC
        assert solution.constraints_satisfied
        assert solution.metric.g[0, 3] != 0


# =========================================================================
# 2. No match and errors
# =========================================================================


class TestNoMatch:

    def test_violated_template(self, spherical_coords):
        result = solve_vacuum(spherical_coords, "spherical", registry=_registry(WRONG_LAPSE))
        assert isinstance(result, SolverNoMatch)
        assert result.constraints_satisfied is False
        assert result.attempts == (("Wrong lapse", Verdict.VIOLATED),)
        assert "Wrong lapse: violated" in result.reason

    def test_no_vacuum_templates(self, spherical_coords):
        result = solve_vacuum(
            spherical_coords, "spherical", registry=_registry(REISSNER_NORDSTROM)
        )
        assert isinstance(result, SolverNoMatch)
        assert result.attempts == ()
        assert "no vacuum template" in result.reason


class TestErrors:

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch, match="4 coordinates"):
            solve_vacuum(["t", "r", "theta"], "spherical")

    def test_empty_coordinates_are_a_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch, match="got 0"):
            solve_vacuum([], "spherical")

    def test_unsupported_symmetry(self, spherical_coords):
        with pytest.raises(UnsupportedSymmetry):
            solve_vacuum(spherical_coords, "toroidal")

    def test_coordinate_clash(self):
        with pytest.raises(CoordinateError):
            solve_vacuum(["t", "M", "theta", "phi"], "spherical")

    def test_duplicate_coordinates(self):
        with pytest.raises(CoordinateError):
            solve_vacuum(["t", "r", "r", "phi"], "spherical")


class TestSolveCatalogue:

    def test_spherical_catalogue(self, spherical_coords):
        solutions = solve_catalogue(spherical_coords, "spherical")
        assert [s.name for s in solutions] == ["Schwarzschild", "Reissner-Nordstrom"]
        assert all(s.constraints_satisfied for s in solutions)

    def test_cosmological_catalogue(self, spherical_coords):
        solutions = solve_catalogue(spherical_coords, "cosmological")
        assert [s.verdict for s in solutions] == [Verdict.SATISFIED, Verdict.SATISFIED]
        assert solutions[0].domain == "t > 0, spatial homogeneity"
