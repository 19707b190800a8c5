"""Catalogue ground-truth validation.

Instantiates every exact-solution template of the registry, verifies the
field equations against the template's own source and cosmological
constant, and compares the Ricci scalar (and, optionally, the Kretschmann
scalar) with the template's recorded ground truth.  Results are written to
``<results-dir>/catalogue.json``.

Usage
-----
Default (spherical and cosmological classes):
    python scripts/verify_catalogue.py

Everything, Kretschmann comparison included (slow for Kerr):
    python scripts/verify_catalogue.py --symmetry spherical axisymmetric cosmological --kretschmann
"""
from __future__ import annotations

import argparse
import json
import os
import time

from tensorcalc.expressions import ExpressionArena, format_expr, parse, simplify
from tensorcalc.field_equations import verify
from tensorcalc.geometry import compute_curvature_chain, kretschmann_scalar
from tensorcalc.solutions import CANONICAL_COORDINATES, create_default_registry


def _matches(computed, expected: str | None, functions) -> bool | None:
    if expected is None:
        return None
    return simplify(computed - parse(expected, functions)) == 0


def check_template(template, workers: int | None, with_kretschmann: bool) -> dict:
    """Verify one template and compare its invariants with ground truth."""
    coords = list(CANONICAL_COORDINATES[: template.dimension])
    start = time.perf_counter()
    metric = template.instantiate(coords)
    result = verify(
        metric,
        template.build_source(metric),
        template.cosmological_constant,
        workers=workers,
    )

    arena = ExpressionArena()
    chain = compute_curvature_chain(metric, workers, arena)
    record = {
        "name": template.name,
        "verdict": result.verdict.value,
        "ricci_scalar": format_expr(chain.ricci_scalar),
        "ricci_scalar_matches": _matches(
            chain.ricci_scalar, template.ground_truth.get("ricci_scalar"), template.functions
        ),
    }
    if with_kretschmann:
        K = kretschmann_scalar(chain.riemann, metric, arena)
        record["kretschmann"] = format_expr(K)
        record["kretschmann_matches"] = _matches(
            K, template.ground_truth.get("kretschmann"), template.functions
        )
    record["seconds"] = round(time.perf_counter() - start, 2)
    return record


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main():
    parser = argparse.ArgumentParser(
        description="Catalogue ground-truth validation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--symmetry",
        nargs="+",
        default=["spherical", "cosmological"],
        help="Symmetry classes to check (default: spherical cosmological).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes for component-parallel evaluation (default: serial).",
    )
    parser.add_argument(
        "--kretschmann",
        action="store_true",
        help="Also compare the Kretschmann scalar (expensive).",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        default="results",
        help="Directory for output (default: results).",
    )
    args = parser.parse_args()

    registry = create_default_registry()
    os.makedirs(args.results_dir, exist_ok=True)

    print("=" * 60)
    print(f"Catalogue validation: {args.symmetry}")
    print("=" * 60)

    records = {}
    for symmetry in args.symmetry:
        ansatz = registry.get(symmetry)
        records[symmetry] = []
        for template in ansatz.templates:
            record = check_template(template, args.workers, args.kretschmann)
            records[symmetry].append(record)
            print(
                f"  {symmetry:<13s} {template.name:<20s} {record['verdict']:<13s} "
                f"R = {record['ricci_scalar']}  ({record['seconds']}s)"
            )

    path = os.path.join(args.results_dir, "catalogue.json")
    with open(path, "w") as f:
        json.dump(records, f, indent=2)
    print(f"\nResults written to {path}")


if __name__ == "__main__":
    main()
