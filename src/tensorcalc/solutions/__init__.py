"""Exact solutions of the field equations, organised by symmetry class."""

from .de_sitter import DE_SITTER
from .flrw import FLRW, friedmann_fluid
from .kerr import KERR
from .registry import SolutionRegistry, SymmetryAnsatz, create_default_registry, diagonal
from .reissner_nordstrom import REISSNER_NORDSTROM, coulomb_source
from .schwarzschild import SCHWARZSCHILD
from .solver import Solution, SolverNoMatch, solve_catalogue, solve_vacuum
from .template import CANONICAL_COORDINATES, SolutionTemplate, Symmetry
