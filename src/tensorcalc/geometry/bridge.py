"""SymPy-JAX bridge for numeric cross-validation.

Symbolic components are lambdified to ``jax.numpy`` callables so that the
exact chain can be checked pointwise against forward-mode autodiff
(``jax.jacfwd``), which has no finite-difference error.
"""
from __future__ import annotations

from typing import Callable, Mapping, Sequence

import jax
import jax.numpy as jnp
import sympy as sp
from beartype import beartype
from jaxtyping import Array, Float, jaxtyped
from sympy import lambdify

from ..tensors import Metric, SymbolicTensor, coordinate_symbols


def tensor_to_jax(
    tensor: SymbolicTensor,
    symbols: Sequence[str | sp.Symbol],
) -> Callable[[Float[Array, "n"]], Float[Array, "..."]]:
    """Convert a symbolic tensor to a JAX function of *symbols*.

    Uses ``sympy.lambdify`` with ``modules='jax'``.  Every free symbol of
    the components must appear in *symbols*.

    Parameters
    ----------
    tensor : SymbolicTensor
        Tensor without free functions.
    symbols : sequence of str or sp.Symbol
        Argument order of the returned function.

    Returns
    -------
    Callable[[Float[Array, "n"]], Float[Array, "..."]]
        Maps a point ``(n,)`` to the float64 component array.
    """
    symbols = [sp.Symbol(s) if isinstance(s, str) else s for s in symbols]
    free = set().union(*(v.free_symbols for _, v in tensor.items()))
    missing = sorted(s.name for s in free - set(symbols))
    if missing:
        raise ValueError(f"no numeric value for symbols {missing}")
    f_raw = lambdify(symbols, tensor.tolist(), modules="jax")

    def f_wrapped(point: Float[Array, "n"]) -> Float[Array, "..."]:
        return jnp.asarray(f_raw(*point), dtype=jnp.float64)

    return f_wrapped


def metric_to_jax(
    metric: Metric,
    parameters: Mapping[str, float] | None = None,
) -> Callable[[Float[Array, "n"]], Float[Array, "n n"]]:
    """Pointwise ``coords -> g_{ab}`` function with parameters bound.

    Parameters
    ----------
    metric : Metric
        Metric without free functions.
    parameters : mapping of str to float
        Numeric values of the metric's parameters, e.g. ``{"M": 1.0}``.

    Raises
    ------
    ValueError
        If the metric contains free functions or an unbound parameter.
    """
    if metric.functions:
        raise ValueError(
            f"metrics with free functions {metric.functions} cannot be evaluated numerically"
        )
    values = {sp.Symbol(name): value for name, value in (parameters or {}).items()}
    bound = metric.g.map(lambda v: v.xreplace(values))
    return tensor_to_jax(bound, metric.coords)


@jaxtyped(typechecker=beartype)
def numeric_christoffel(
    metric_fn: Callable[[Float[Array, "n"]], Float[Array, "n n"]],
    point: Float[Array, "n"],
) -> Float[Array, "n n n"]:
    """Christoffel symbols of the second kind at a single point.

    Gamma^a_{bc} = 1/2 g^{ad} (d_b g_{cd} + d_c g_{bd} - d_d g_{bc})

    Parameters
    ----------
    metric_fn : callable
        Maps a point ``(n,)`` to the metric ``(n, n)``.
    point : Float[Array, "n"]
        Coordinates of the evaluation point.

    Returns
    -------
    Float[Array, "n n n"]
        ``[upper, lower, lower]`` array, comparable to
        :func:`tensorcalc.geometry.christoffel` evaluated at *point*.
    """
    g = metric_fn(point)
    g_inv = jnp.linalg.inv(g)
    # dg[a, b, c] = d g_{ab} / d x^c  (derivative index LAST per JAX jacfwd convention)
    dg = jax.jacfwd(metric_fn)(point)

    term1 = jnp.einsum("ad,cdb->abc", g_inv, dg)  # g^{ad} d_b g_{cd}
    term2 = jnp.einsum("ad,bdc->abc", g_inv, dg)  # g^{ad} d_c g_{bd}
    term3 = jnp.einsum("ad,bcd->abc", g_inv, dg)  # g^{ad} d_d g_{bc}

    return 0.5 * (term1 + term2 - term3)


def evaluate_tensor(
    tensor: SymbolicTensor,
    coords: Sequence[str | sp.Symbol],
    point: Sequence[float],
    parameters: Mapping[str, float] | None = None,
) -> Float[Array, "..."]:
    """Evaluate a symbolic tensor at one point with parameters bound."""
    coords = coordinate_symbols(coords)
    values = {sp.Symbol(name): value for name, value in (parameters or {}).items()}
    bound = tensor.map(lambda v: v.xreplace(values))
    return tensor_to_jax(bound, coords)(jnp.asarray(point, dtype=jnp.float64))
