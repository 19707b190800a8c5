"""Schwarzschild spacetime verification.

Demonstrates exact verification of the vacuum field equations and the
Kretschmann invariant in Schwarzschild coordinates.

Verifies:
- Vacuum solution (every residual component proved zero)
- Kretschmann scalar equals the analytical 48 M^2 / r^6
- A perturbed lapse is reported as a violation, not as indeterminate
"""

from tensorcalc.expressions import ExpressionArena, format_expr, parse, simplify
from tensorcalc.field_equations import Verdict, verify
from tensorcalc.geometry import compute_curvature_chain, kretschmann_scalar
from tensorcalc.solutions import SCHWARZSCHILD
from tensorcalc.tensors import build_metric

COORDS = ["t", "r", "theta", "phi"]

metric = SCHWARZSCHILD.instantiate(COORDS)
arena = ExpressionArena()
chain = compute_curvature_chain(metric, arena=arena)

print("Schwarzschild Spacetime Verification")
print("=" * 40)
print(f"Domain: {SCHWARZSCHILD.domain_constraint(COORDS)}")
print(f"Non-zero Christoffel symbols: {len(chain.christoffel.nonzero())}")
print(f"Non-zero Riemann components:  {len(chain.riemann.nonzero())}")
print(f"Ricci scalar: {format_expr(chain.ricci_scalar)}")

K = kretschmann_scalar(chain.riemann, metric, arena)
K_analytical = parse(SCHWARZSCHILD.ground_truth["kretschmann"])
print(f"\nKretschmann (computed):   {format_expr(K)}")
print(f"Kretschmann (analytical): {format_expr(K_analytical)}")

result = verify(metric)
print(f"\nField equations: {result.verdict.value}")

matrix = [list(row) for row in SCHWARZSCHILD.components]
matrix[0][0] = "-(1 + 2*M/r)"
wrong = verify(build_metric(matrix, COORDS))
print(f"Perturbed lapse: {wrong.verdict.value} at {wrong.failing_components()}")

assert result.verdict is Verdict.SATISFIED
assert simplify(K - K_analytical) == 0
assert wrong.verdict is Verdict.VIOLATED

print("\nSchwarzschild verification complete!")
