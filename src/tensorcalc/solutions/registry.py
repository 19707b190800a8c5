"""Symmetry ansatz registry.

Provides a ``SolutionRegistry`` mapping each symmetry class to a
``SymmetryAnsatz``: the expected dimension, the sparsity pattern of allowed
non-zero metric components, and an ordered list of closed-form
``SolutionTemplate`` entries.  The registry is plain Python metadata; nothing
in it is computed until a template is instantiated.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import UnsupportedSymmetry
from ..expressions import parse
from .de_sitter import DE_SITTER
from .flrw import FLRW
from .kerr import KERR
from .reissner_nordstrom import REISSNER_NORDSTROM
from .schwarzschild import SCHWARZSCHILD
from .template import SolutionTemplate, Symmetry


# ---------------------------------------------------------------------------
# SymmetryAnsatz
# ---------------------------------------------------------------------------


def diagonal(dimension: int = 4) -> frozenset[tuple[int, int]]:
    return frozenset((a, a) for a in range(dimension))


@dataclass(frozen=True)
class SymmetryAnsatz:
    """Templates sharing one symmetry class.

    Parameters
    ----------
    symmetry : Symmetry
        Symmetry class served by this ansatz.
    sparsity : frozenset of (int, int)
        Metric components allowed to be non-zero.
    templates : tuple[SolutionTemplate, ...]
        Tried in order by the solver.
    dimension : int
        Expected coordinate count.
    description : str
        Line element of the general ansatz.

    Raises
    ------
    ValueError
        If a template has the wrong dimension or a non-zero component
        outside *sparsity*.
    """

    symmetry: Symmetry
    sparsity: frozenset[tuple[int, int]]
    templates: tuple[SolutionTemplate, ...]
    dimension: int = 4
    description: str = ""

    def __post_init__(self) -> None:
        for template in self.templates:
            if template.dimension != self.dimension:
                raise ValueError(
                    f"template {template.name} has dimension {template.dimension}, "
                    f"ansatz {self.symmetry.value} expects {self.dimension}"
                )
            for a, row in enumerate(template.components):
                for b, text in enumerate(row):
                    if (a, b) in self.sparsity:
                        continue
                    if parse(text, template.functions) != 0:
                        raise ValueError(
                            f"template {template.name} has component [{a}][{b}] "
                            f"outside the {self.symmetry.value} sparsity pattern"
                        )

    def vacuum_templates(self) -> list[SolutionTemplate]:
        return [t for t in self.templates if t.vacuum]

    def template(self, name: str) -> SolutionTemplate:
        for t in self.templates:
            if t.name == name:
                return t
        raise KeyError(
            f"Template '{name}' not in {self.symmetry.value} ansatz.  "
            f"Available: {[t.name for t in self.templates]}"
        )


# ---------------------------------------------------------------------------
# SolutionRegistry
# ---------------------------------------------------------------------------


class SolutionRegistry:
    """Registry of symmetry ansätze.

    Usage::

        registry = create_default_registry()
        ansatz = registry.get("spherical")
        print([t.name for t in ansatz.templates])
    """

    def __init__(self) -> None:
        self._entries: dict[Symmetry, SymmetryAnsatz] = {}

    def register(self, ansatz: SymmetryAnsatz) -> None:
        """Register (or replace) the ansatz for its symmetry class."""
        self._entries[ansatz.symmetry] = ansatz

    def get(self, symmetry: str | Symmetry) -> SymmetryAnsatz:
        """Retrieve the ansatz for *symmetry*.

        Raises
        ------
        UnsupportedSymmetry
            If the tag is unknown or has no registered ansatz.
        """
        key = Symmetry.from_tag(symmetry)
        if key not in self._entries:
            raise UnsupportedSymmetry(
                f"no ansatz registered for {key.value!r}.  "
                f"Available: {self.list_symmetries()}"
            )
        return self._entries[key]

    def list_symmetries(self) -> list[str]:
        """Return sorted list of registered symmetry tags."""
        return sorted(s.value for s in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symmetry: str | Symmetry) -> bool:
        try:
            return Symmetry.from_tag(symmetry) in self._entries
        except UnsupportedSymmetry:
            return False


# ---------------------------------------------------------------------------
# Default registry with the exact-solution catalogue
# ---------------------------------------------------------------------------


def create_default_registry() -> SolutionRegistry:
    """Create a registry pre-loaded with the exact-solution catalogue."""
    registry = SolutionRegistry()
    registry.register(SymmetryAnsatz(
        Symmetry.SPHERICAL,
        diagonal(),
        (SCHWARZSCHILD, REISSNER_NORDSTROM),
        description="ds^2 = -f(r) dt^2 + h(r) dr^2 + r^2 dOmega^2",
    ))
    registry.register(SymmetryAnsatz(
        Symmetry.AXISYMMETRIC,
        diagonal() | {(0, 3), (3, 0)},
        (KERR,),
        description="stationary axisymmetric, g_{t phi} allowed",
    ))
    registry.register(SymmetryAnsatz(
        Symmetry.COSMOLOGICAL,
        diagonal(),
        (FLRW, DE_SITTER),
        description="ds^2 = -dt^2 + a(t)^2 (dr^2 + r^2 dOmega^2)",
    ))
    return registry
