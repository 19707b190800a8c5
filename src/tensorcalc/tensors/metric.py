"""Metric construction, validation and symbolic inversion.

A :class:`Metric` couples an ordered coordinate list with a symmetric rank-2
covariant tensor *g_{ab}* and its inverse *g^{ab}*.  All structural
invariants are enforced at construction time, before any curvature
computation runs:

- the component matrix is ``n x n`` for ``n`` coordinates,
- ``g[a][b] - g[b][a]`` is not detectably non-zero (upper triangle kept),
- the determinant is not identically zero,
- ``g^{ac} g_{cb}`` simplifies to the Kronecker delta.

The inverse is computed by cofactor expansion (adjugate / determinant).
Gaussian elimination is avoided on purpose: its pivots are expressions whose
vanishing cannot be decided reliably, while the adjugate needs no pivoting.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import sympy as sp
from sympy.core.function import AppliedUndef

from ..errors import (
    AsymmetricMetric,
    CoordinateError,
    NonSquareMetric,
    ParseError,
    SingularMetric,
)
from ..expressions import (
    DEFAULT_SETTINGS,
    ExpressionArena,
    ZeroTest,
    ZeroTestSettings,
    is_zero,
    parse,
)
from ..expressions.parser import IDENTIFIER, RESERVED_NAMES
from .types import SymbolicTensor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


def coordinate_symbols(coords: Sequence[str | sp.Symbol]) -> tuple[sp.Symbol, ...]:
    """Validate coordinate names and return them as SymPy symbols.

    Raises
    ------
    CoordinateError
        If *coords* is empty, contains duplicates, reserved names (``pi``,
        ``sin``, ...) or strings that are not identifiers.
    """
    if len(coords) == 0:
        raise CoordinateError("at least one coordinate is required")
    names = [c.name if isinstance(c, sp.Symbol) else c for c in coords]
    for name in names:
        if not isinstance(name, str) or not IDENTIFIER.fullmatch(name):
            raise CoordinateError(f"invalid coordinate name {name!r}")
        if name in RESERVED_NAMES:
            raise CoordinateError(f"coordinate name {name!r} is reserved")
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise CoordinateError(f"duplicate coordinate names: {duplicates}")
    return tuple(sp.Symbol(n) for n in names)


# ---------------------------------------------------------------------------
# Symmetry
# ---------------------------------------------------------------------------


def symmetric_rows(
    values: Sequence[Sequence[sp.Expr]],
    label: str = "metric",
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
    arena: ExpressionArena | None = None,
) -> list[list[sp.Expr]]:
    """Check that a square component matrix is symmetric.

    Canonical forms of equal rational trig expressions can differ, so pairs
    that are not syntactically equal go through :func:`is_zero`.  The upper
    triangle is mirrored into the returned rows, which are exactly symmetric.

    Raises
    ------
    AsymmetricMetric
        If some ``values[a][b] - values[b][a]`` is detectably non-zero.
    """
    arena = arena if arena is not None else ExpressionArena()
    rows = [list(row) for row in values]
    n = len(rows)
    for a in range(n):
        for b in range(a + 1, n):
            upper, lower = rows[a][b], rows[b][a]
            if upper == lower:
                continue
            outcome = is_zero(upper - lower, settings, arena)
            if outcome is ZeroTest.NONZERO:
                raise AsymmetricMetric(
                    f"{label} is not symmetric: [{a}][{b}] = {upper} but "
                    f"[{b}][{a}] = {lower}",
                    (a, b),
                )
            if outcome is ZeroTest.INDETERMINATE:
                logger.warning(
                    "Could not prove %s[%d][%d] == %s[%d][%d]", label, a, b, label, b, a
                )
            rows[b][a] = upper
    return rows


# ---------------------------------------------------------------------------
# Inversion
# ---------------------------------------------------------------------------


def _as_matrix(g: SymbolicTensor) -> sp.Matrix:
    n = g.dimension
    return sp.Matrix(n, n, lambda i, j: g[i, j])


def determinant(g: SymbolicTensor, arena: ExpressionArena | None = None) -> sp.Expr:
    """Simplified determinant of a rank-2 tensor (division-free Berkowitz)."""
    arena = arena if arena is not None else ExpressionArena()
    return arena.simplify(_as_matrix(g).det(method="berkowitz"))


def invert(
    g: SymbolicTensor,
    arena: ExpressionArena | None = None,
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
) -> SymbolicTensor:
    """Inverse of a rank-2 ``dd`` tensor by cofactor expansion.

    Parameters
    ----------
    g : SymbolicTensor
        Square covariant rank-2 tensor.
    arena : ExpressionArena or None
        Per-invocation simplification memo.
    settings : ZeroTestSettings
        Used to decide whether the determinant vanishes.

    Returns
    -------
    SymbolicTensor
        Contravariant (``'uu'``) inverse with simplified components.

    Raises
    ------
    SingularMetric
        If the determinant is identically zero.
    """
    if g.rank != 2:
        raise ValueError(f"only rank-2 tensors can be inverted, got rank {g.rank}")
    arena = arena if arena is not None else ExpressionArena()
    matrix = _as_matrix(g)
    det = determinant(g, arena)
    if det == 0 or is_zero(det, settings, arena) is ZeroTest.ZERO:
        raise SingularMetric("metric determinant is identically zero")

    n = g.dimension
    # adj[i][j] = cofactor(j, i)
    cofactors = {
        (i, j): matrix.cofactor(i, j, method="berkowitz")
        for i in range(n)
        for j in range(n)
    }
    return SymbolicTensor.from_function(
        2, n, lambda idx: arena.simplify(cofactors[idx[1], idx[0]] / det), "uu"
    )


# ---------------------------------------------------------------------------
# Metric
# ---------------------------------------------------------------------------


class Metric:
    """Symmetric metric tensor with its symbolically computed inverse.

    Parameters
    ----------
    coords : sequence of str or sp.Symbol
        Ordered coordinate names, e.g. ``["t", "r", "theta", "phi"]``.
    components : sp.Matrix, nested list or SymbolicTensor
        ``n x n`` metric components.
    settings : ZeroTestSettings
        Configuration for the construction-time zero tests.
    arena : ExpressionArena or None
        Per-invocation simplification memo.

    Raises
    ------
    CoordinateError, NonSquareMetric, AsymmetricMetric, SingularMetric
        When the corresponding invariant is violated.
    """

    def __init__(
        self,
        coords: Sequence[str | sp.Symbol],
        components,
        settings: ZeroTestSettings = DEFAULT_SETTINGS,
        arena: ExpressionArena | None = None,
    ) -> None:
        self.coords = coordinate_symbols(coords)
        n = len(self.coords)
        arena = arena if arena is not None else ExpressionArena()

        rows = _rows(components)
        if len(rows) != n or any(len(row) != n for row in rows):
            raise NonSquareMetric(
                f"metric must be {n}x{n} for {n} coordinates, got "
                f"{len(rows)} rows of lengths {[len(row) for row in rows]}"
            )

        values = [[arena.simplify(sp.sympify(v)) for v in row] for row in rows]
        values = symmetric_rows(values, "metric", settings, arena)

        self.g = SymbolicTensor(sp.ImmutableDenseNDimArray(values), "dd")
        self.inverse = invert(self.g, arena, settings)
        self._check_inverse(arena, settings)

    def _check_inverse(self, arena: ExpressionArena, settings: ZeroTestSettings) -> None:
        n = self.dimension
        for a in range(n):
            for b in range(n):
                product = sum(
                    (self.inverse[a, c] * self.g[c, b] for c in range(n)), sp.S.Zero
                )
                delta = sp.S.One if a == b else sp.S.Zero
                outcome = is_zero(arena.simplify(product - delta), settings, arena)
                if outcome is ZeroTest.NONZERO:
                    raise SingularMetric(
                        f"inverse check failed: (g^-1 g)[{a}][{b}] != {delta}"
                    )
                if outcome is ZeroTest.INDETERMINATE:
                    logger.warning(
                        "Could not prove (g^-1 g)[%d][%d] == %s", a, b, delta
                    )

    # derived properties --------------------------------------------------

    @property
    def dimension(self) -> int:
        return len(self.coords)

    @property
    def coordinate_names(self) -> list[str]:
        return [c.name for c in self.coords]

    @property
    def matrix(self) -> sp.Matrix:
        return _as_matrix(self.g)

    @property
    def inverse_matrix(self) -> sp.Matrix:
        return _as_matrix(self.inverse)

    @property
    def parameters(self) -> list[sp.Symbol]:
        """Free symbols of the components that are not coordinates."""
        free = set().union(*(v.free_symbols for _, v in self.g.items()))
        return sorted(free - set(self.coords), key=sp.default_sort_key)

    @property
    def functions(self) -> list[str]:
        """Names of free functions (e.g. ``a`` for ``a(t)``) in the components."""
        applied = set().union(*(v.atoms(AppliedUndef) for _, v in self.g.items()))
        return sorted({f.func.__name__ for f in applied})

    def __repr__(self) -> str:
        return f"Metric(coords={self.coordinate_names}, g={self.matrix.tolist()})"


def _rows(components) -> list[list]:
    if isinstance(components, SymbolicTensor):
        if components.rank != 2:
            raise NonSquareMetric(f"metric must have rank 2, got rank {components.rank}")
        return components.tolist()
    if isinstance(components, sp.MatrixBase):
        return components.tolist()
    return [list(row) for row in components]


# ---------------------------------------------------------------------------
# Construction from formula strings
# ---------------------------------------------------------------------------


def parse_matrix(
    matrix: Sequence[Sequence[str]],
    coords: Sequence[str],
    functions: Iterable[str] = (),
    label: str = "metric",
) -> list[list[sp.Expr]]:
    """Parse an ``n x n`` matrix of formula strings.

    Raises
    ------
    NonSquareMetric
        If the matrix shape does not match ``len(coords)``.
    ParseError
        If a component fails to parse; the reason names the component.
    """
    n = len(coords)
    if len(matrix) != n or any(len(row) != n for row in matrix):
        raise NonSquareMetric(
            f"{label} must be {n}x{n} for coordinates {list(coords)}, got "
            f"{len(matrix)} rows of lengths {[len(row) for row in matrix]}"
        )
    functions = tuple(functions)
    rows = []
    for a, row in enumerate(matrix):
        parsed = []
        for b, text in enumerate(row):
            try:
                parsed.append(parse(str(text), functions))
            except ParseError as err:
                raise ParseError(
                    err.text, err.position, f"{label} component [{a}][{b}]: {err.reason}"
                ) from err
        rows.append(parsed)
    return rows


def build_metric(
    matrix: Sequence[Sequence[str]],
    coords: Sequence[str],
    functions: Iterable[str] = (),
    settings: ZeroTestSettings = DEFAULT_SETTINGS,
) -> Metric:
    """Parse, validate and invert a metric given as formula strings.

    Parameters
    ----------
    matrix : sequence of sequence of str
        Row-major metric components, e.g. ``[["-1", "0"], ["0", "r^2"]]``.
    coords : sequence of str
        Coordinate names, one per row.
    functions : iterable of str
        Free function names allowed in the formulas (e.g. ``("a",)``).
    settings : ZeroTestSettings
        Zero-test configuration for the construction-time checks.

    Returns
    -------
    Metric
        Validated metric with its inverse.
    """
    coordinate_symbols(coords)
    rows = parse_matrix(matrix, coords, functions)
    return Metric(coords, rows, settings=settings)
