"""Symbolic tensor calculus and Einstein field equation verification.

Units: geometric (G = c = 1) throughout.
"""

# Float64 enforcement - must happen before any JAX imports that might
# create arrays with default float32 precision.  The numeric bridge in
# ``tensorcalc.geometry.bridge`` relies on it.
import jax
jax.config.update("jax_enable_x64", True)

__version__ = "0.1.0"
