"""Component-parallel evaluation.

Components of one rank of the curvature chain are independent pure
computations over immutable inputs, so they can be mapped over a process
pool.  ``Pool.map`` returns only after every component is done, which is
the barrier between consecutive ranks (Riemann differentiates the finished
Christoffel symbols).
"""

from __future__ import annotations

import logging
import multiprocessing
from functools import partial
from typing import Callable, Iterable, TypeVar

from ..expressions import ExpressionArena

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def map_components(
    func: Callable[[T], R],
    items: Iterable[T],
    workers: int | None = None,
) -> list[R]:
    """Apply *func* to every item, serially or on *workers* processes.

    Parameters
    ----------
    func : callable
        Picklable (module-level or ``functools.partial``) function.
    items : iterable
        Component indices.
    workers : int or None
        ``None`` or ``1`` evaluates in-process; larger values use a
        ``multiprocessing.Pool`` of that size.

    Returns
    -------
    list
        Results in the order of *items*.
    """
    items = list(items)
    if workers is None or workers <= 1 or len(items) < 2:
        return list(map(func, items))
    processes = min(workers, len(items))
    logger.debug("Mapping %d components over %d processes", len(items), processes)
    with multiprocessing.Pool(processes=processes) as pool:
        return pool.map(func, items)


def evaluate_components(
    func: Callable,
    items: Iterable[T],
    workers: int | None,
    arena: ExpressionArena,
    **inputs,
) -> list:
    """Map ``func(index, arena=..., **inputs)`` over *items*.

    In-process evaluation shares *arena* across components; worker
    processes each simplify without a memo (``arena=None``).
    """
    if workers is not None and workers > 1:
        return map_components(partial(func, arena=None, **inputs), items, workers)
    return map_components(partial(func, arena=arena, **inputs), items)
