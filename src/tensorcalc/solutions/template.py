"""Symmetry classes and closed-form solution templates.

A ``SolutionTemplate`` is written in the canonical coordinates
``(t, r, theta, phi)`` and renamed to the caller's coordinate names on
instantiation.  Template metadata is plain Python; nothing is computed
until :meth:`SolutionTemplate.instantiate` is called.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

import sympy as sp

from ..errors import CoordinateError, DimensionMismatch, UnsupportedSymmetry
from ..expressions import DEFAULT_SETTINGS, ZeroTestSettings
from ..tensors import Metric, SymbolicTensor, coordinate_symbols, parse_matrix

CANONICAL_COORDINATES = ("t", "r", "theta", "phi")

SourceBuilder = Callable[[Metric], SymbolicTensor]


class Symmetry(Enum):
    SPHERICAL = "spherical"
    AXISYMMETRIC = "axisymmetric"
    COSMOLOGICAL = "cosmological"

    @classmethod
    def from_tag(cls, tag: str | Symmetry) -> Symmetry:
        """Look up a symmetry by its tag.

        Raises
        ------
        UnsupportedSymmetry
            If *tag* is not one of the known symmetry classes.
        """
        if isinstance(tag, Symmetry):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnsupportedSymmetry(
                f"unsupported symmetry {tag!r}; expected one of "
                f"{[s.value for s in cls]}"
            ) from None


# ---------------------------------------------------------------------------
# SolutionTemplate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SolutionTemplate:
    """A closed-form metric in canonical coordinates.

    Parameters
    ----------
    name : str
        Human-readable name, e.g. ``"Schwarzschild"``.
    components : tuple of tuple of str
        Row-major metric formulas in ``t, r, theta, phi``.
    parameters : dict[str, str]
        Parameter name -> description.
    domain : str
        Domain of validity with ``{t}``/``{r}``/``{theta}``/``{phi}``
        placeholders for the coordinate names.
    functions : tuple[str, ...]
        Free function names used in *components*, e.g. ``("a",)``.
    cosmological_constant : str or None
        Lambda formula, e.g. ``"3*H^2"``.
    source : callable or None
        Builds the stress-energy tensor for an instantiated metric;
        ``None`` for vacuum (with or without Lambda).
    solution_type : str
        ``"exact"`` for every catalogue entry.
    ground_truth : dict[str, Any]
        Known analytical properties (e.g. Kretschmann scalar formula).
    """

    name: str
    components: tuple[tuple[str, ...], ...]
    parameters: dict[str, str] = field(default_factory=dict)
    domain: str = ""
    functions: tuple[str, ...] = ()
    cosmological_constant: str | None = None
    source: SourceBuilder | None = None
    solution_type: str = "exact"
    ground_truth: dict[str, Any] = field(default_factory=dict)

    @property
    def dimension(self) -> int:
        return len(self.components)

    @property
    def vacuum(self) -> bool:
        """True when there is no matter source (Lambda is allowed)."""
        return self.source is None

    def _renaming(self, coords: Sequence[str]) -> dict[sp.Symbol, sp.Symbol]:
        if len(coords) != self.dimension:
            raise DimensionMismatch(
                f"{self.name} needs {self.dimension} coordinates, got {len(coords)}"
            )
        taken = set(self.parameters) | set(self.functions)
        clashes = sorted(set(coords) & taken)
        if clashes:
            raise CoordinateError(
                f"coordinate names {clashes} collide with parameters or "
                f"functions of {self.name}"
            )
        canonical = CANONICAL_COORDINATES[: self.dimension]
        return {sp.Symbol(c): sp.Symbol(n) for c, n in zip(canonical, coords)}

    def metric_components(self, coords: Sequence[str]) -> list[list[sp.Expr]]:
        """Parsed components in the caller's coordinate names."""
        coords = [c.name for c in coordinate_symbols(coords)]
        renaming = self._renaming(coords)
        canonical = CANONICAL_COORDINATES[: self.dimension]
        rows = parse_matrix(self.components, canonical, self.functions, label=self.name)
        return [[v.xreplace(renaming) for v in row] for row in rows]

    def instantiate(
        self,
        coords: Sequence[str],
        settings: ZeroTestSettings = DEFAULT_SETTINGS,
    ) -> Metric:
        """Build the validated :class:`Metric` in *coords*.

        Raises
        ------
        DimensionMismatch
            If ``len(coords)`` differs from the template's dimension.
        CoordinateError
            If a coordinate name collides with a parameter or function.
        """
        return Metric(coords, self.metric_components(coords), settings=settings)

    def domain_constraint(self, coords: Sequence[str]) -> str:
        names = dict(zip(CANONICAL_COORDINATES, coords))
        return self.domain.format(**names)

    def build_source(self, metric: Metric) -> SymbolicTensor | None:
        return self.source(metric) if self.source is not None else None


