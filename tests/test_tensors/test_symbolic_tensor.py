"""Tests for the SymbolicTensor container."""

import pytest
import sympy as sp

from tensorcalc.tensors import SymbolicTensor, index_tuples

x, y = sp.symbols("x y")


class TestConstruction:

    def test_nested_list_is_converted(self):
        t = SymbolicTensor([[x, 0], [0, y]], "dd")
        assert isinstance(t.components, sp.ImmutableDenseNDimArray)
        assert t.rank == 2
        assert t.dimension == 2
        assert t.shape == (2, 2)

    def test_default_index_positions_are_lower(self):
        t = SymbolicTensor([[x, 0], [0, y]])
        assert t.index_positions == "dd"

    def test_from_function_row_major(self):
        t = SymbolicTensor.from_function(3, 2, lambda idx: idx[0] * 4 + idx[1] * 2 + idx[2], "udd")
        assert t[1, 0, 1] == 5
        assert t.index_positions == "udd"

    def test_from_components(self):
        t = SymbolicTensor.from_components([1, 2, 3, 4], 2, 2)
        assert t[1, 0] == 3

    def test_zeros(self):
        t = SymbolicTensor.zeros(4, 3, "uddd")
        assert t.nonzero() == []
        assert t.shape == (3, 3, 3, 3)

    def test_non_cubic_rejected(self):
        with pytest.raises(ValueError, match="cubic"):
            SymbolicTensor([[x, y, 0], [0, x, y]])

    def test_bad_index_positions_rejected(self):
        with pytest.raises(ValueError, match="index_positions"):
            SymbolicTensor([[x, 0], [0, y]], "udd")
        with pytest.raises(ValueError, match="only"):
            SymbolicTensor([[x, 0], [0, y]], "ux")

    def test_frozen(self):
        t = SymbolicTensor([[x, 0], [0, y]])
        with pytest.raises(AttributeError):
            t.index_positions = "uu"


class TestAccess:

    def test_nonzero(self):
        t = SymbolicTensor([[x, 0], [0, y]])
        assert t.nonzero() == [((0, 0), x), ((1, 1), y)]

    def test_map(self):
        t = SymbolicTensor([[x, 0], [0, y]], "uu").map(lambda v: 2 * v)
        assert t[1, 1] == 2 * y
        assert t.index_positions == "uu"

    def test_symmetry(self):
        assert SymbolicTensor([[x, y], [y, x]]).is_symmetric()
        assert not SymbolicTensor([[x, y], [x, y]]).is_symmetric()

    def test_tolist(self):
        assert SymbolicTensor([[x, 0], [0, y]]).tolist() == [[x, 0], [0, y]]

    def test_index_tuples(self):
        assert list(index_tuples(2, 2)) == [(0, 0), (0, 1), (1, 0), (1, 1)]
