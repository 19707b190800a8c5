"""Tests for contraction, traces and index raising/lowering."""

import pytest
import sympy as sp

from tensorcalc.tensors import (
    SymbolicTensor,
    contract,
    kronecker_delta,
    lower_index,
    raise_index,
    trace,
)


class TestContraction:

    def test_metric_times_inverse_is_delta(self, schwarzschild_metric):
        product = contract(schwarzschild_metric.inverse, schwarzschild_metric.g, (1, 0))
        delta = kronecker_delta(4)
        assert product.index_positions == "ud"
        assert product.tolist() == delta.tolist()

    def test_full_contraction_is_scalar(self, polar_plane_metric):
        r = sp.Symbol("r")
        v = SymbolicTensor([1, r], "u")
        norm = contract(lower_index(v, 0, polar_plane_metric), v, (0, 0))
        assert norm == 1 + r**4

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError, match="dimension"):
            contract(kronecker_delta(2), kronecker_delta(3), (1, 0))

    def test_index_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            contract(kronecker_delta(2), kronecker_delta(2), (2, 0))


class TestTrace:

    def test_trace_of_delta(self):
        assert trace(kronecker_delta(4), 0, 1) == 4

    def test_invalid_indices(self):
        with pytest.raises(ValueError):
            trace(kronecker_delta(2), 1, 0)


class TestRaiseLower:

    def test_round_trip(self, schwarzschild_metric):
        r, M = sp.symbols("r M")
        v = SymbolicTensor([1 / r, M, 0, r], "u")
        lowered = lower_index(v, 0, schwarzschild_metric)
        assert lowered.index_positions == "d"
        raised = raise_index(lowered, 0, schwarzschild_metric)
        assert raised.index_positions == "u"
        assert raised.tolist() == v.tolist()

    def test_raising_second_index_of_metric(self, polar_plane_metric):
        mixed = raise_index(polar_plane_metric.g, 1, polar_plane_metric)
        assert mixed.index_positions == "du"
        assert mixed.tolist() == [[1, 0], [0, 1]]

    def test_raise_upper_index_rejected(self, polar_plane_metric):
        with pytest.raises(ValueError, match="not lower"):
            raise_index(polar_plane_metric.inverse, 0, polar_plane_metric)

    def test_lower_lower_index_rejected(self, polar_plane_metric):
        with pytest.raises(ValueError, match="not upper"):
            lower_index(polar_plane_metric.g, 0, polar_plane_metric)
