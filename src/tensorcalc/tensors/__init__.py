"""Symbolic tensor containers, metrics and index algebra.

"""

from .algebra import contract, kronecker_delta, lower_index, raise_index, trace
from .metric import (
    Metric,
    build_metric,
    coordinate_symbols,
    determinant,
    invert,
    parse_matrix,
    symmetric_rows,
)
from .types import SymbolicTensor, index_tuples

__all__ = [
    "Metric",
    "SymbolicTensor",
    "build_metric",
    "contract",
    "coordinate_symbols",
    "determinant",
    "index_tuples",
    "invert",
    "kronecker_delta",
    "lower_index",
    "parse_matrix",
    "raise_index",
    "symmetric_rows",
    "trace",
]
