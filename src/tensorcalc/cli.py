"""Command-line interface.

Every subcommand prints one pretty-printed JSON envelope
``{result_type, data, coordinates, success, error}`` to stdout and exits
with status 0 on success (a negative solver result included) or 1 on any
input or computation error.  Logs go to stderr.

Examples
--------
::

    tensor-calc christoffel --metric '[["-1","0"],["0","r^2"]]' --coords '["t","r"]'
    tensor-calc verify-solution --coords '["t","r","theta","phi"]' \\
        --metric '[["-(1-2*M/r)","0","0","0"],["0","1/(1-2*M/r)","0","0"],
                   ["0","0","r^2","0"],["0","0","0","r^2*sin(theta)^2"]]'
    tensor-calc solve-vacuum --coords '["t","r","theta","phi"]' --symmetry spherical
"""
from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Sequence

from . import __version__, api
from .errors import TensorCalcError
from .expressions import DEFAULT_SETTINGS
from .serialization import envelope, error_envelope, sparse_components, to_json

logger = logging.getLogger(__name__)

TENSOR_COMMANDS = {
    "christoffel": ("christoffel_symbols", api.christoffel),
    "riemann": ("riemann_tensor", api.riemann),
    "ricci": ("ricci_tensor", api.ricci),
    "einstein": ("einstein_tensor", api.einstein),
}


# ---------------------------------------------------------------------------
# JSON argument decoding
# ---------------------------------------------------------------------------


def _load_coords(text: str) -> list[str]:
    coords = json.loads(text)
    if not isinstance(coords, list) or not all(isinstance(c, str) for c in coords):
        raise TensorCalcError("--coords must be a JSON array of strings")
    return coords


def _formula(value: Any, option: str) -> str:
    # bool is an int subclass, and str(True) would parse as a symbol
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TensorCalcError(
        f"{option} entries must be formula strings or numbers, got {json.dumps(value)}"
    )


def _load_matrix(text: str, option: str) -> list[list[str]]:
    matrix = json.loads(text)
    if not isinstance(matrix, list) or not all(isinstance(row, list) for row in matrix):
        raise TensorCalcError(f"{option} must be a JSON array of arrays")
    return [[_formula(v, option) for v in row] for row in matrix]


def _load_functions(text: str | None) -> list[str]:
    if text is None:
        return []
    functions = json.loads(text)
    if not isinstance(functions, list) or not all(isinstance(f, str) for f in functions):
        raise TensorCalcError("--functions must be a JSON array of strings")
    return functions


def _sparse_fields(record: dict[str, Any], *keys: str) -> dict[str, Any]:
    record = dict(record)
    for key in keys:
        record[key] = sparse_components(record[key])
    return record


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _run(args: argparse.Namespace, coords: list[str]) -> dict[str, Any]:
    settings = DEFAULT_SETTINGS._replace(samples=args.samples, seed=args.seed)
    command = args.command

    if command in TENSOR_COMMANDS:
        result_type, operation = TENSOR_COMMANDS[command]
        nested = operation(
            _load_matrix(args.metric, "--metric"),
            coords,
            _load_functions(args.functions),
            workers=args.workers,
        )
        return envelope(result_type, sparse_components(nested), coords)

    if command == "ricci-scalar":
        scalar = api.ricci_scalar(
            _load_matrix(args.metric, "--metric"),
            coords,
            _load_functions(args.functions),
            workers=args.workers,
        )
        return envelope("ricci_scalar", scalar, coords)

    if command == "verify-solution":
        stress_energy = (
            _load_matrix(args.stress_energy, "--stress-energy")
            if args.stress_energy is not None
            else None
        )
        record = api.verify_solution(
            _load_matrix(args.metric, "--metric"),
            coords,
            stress_energy,
            args.cosmological_constant,
            _load_functions(args.functions),
            settings=settings,
            workers=args.workers,
        )
        return envelope("solution_verification", _sparse_fields(record, "residuals"), coords)

    if command == "solve-vacuum":
        if args.all:
            records = api.solve_catalogue(
                coords, args.symmetry, settings=settings, workers=args.workers
            )
            data = [_sparse_fields(r, "metric_tensor") for r in records]
        else:
            record = api.solve_vacuum(
                coords, args.symmetry, settings=settings, workers=args.workers
            )
            data = (
                _sparse_fields(record, "metric_tensor")
                if "metric_tensor" in record
                else record
            )
        return envelope("vacuum_solutions", data, coords)

    if command == "construct-equations":
        stress_energy = (
            _load_matrix(args.stress_energy, "--stress-energy")
            if args.stress_energy is not None
            else None
        )
        record = api.construct_equations(
            _load_matrix(args.metric, "--metric"),
            coords,
            stress_energy,
            args.cosmological_constant,
            _load_functions(args.functions),
            workers=args.workers,
        )
        return envelope("einstein_equations", record, coords)

    raise TensorCalcError(f"unknown command {command!r}")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tensor-calc",
        description="Symbolic tensor calculus for general relativity.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level on stderr (default: WARNING).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes for component-parallel evaluation (default: serial).",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SETTINGS.samples,
        help=f"Random samples per zero test (default: {DEFAULT_SETTINGS.samples}).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SETTINGS.seed,
        help=f"Seed of the zero-test sampler (default: {DEFAULT_SETTINGS.seed}).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def metric_command(name: str, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--metric", required=True, help="Metric as a JSON matrix of formulas.")
        p.add_argument("--coords", required=True, help="Coordinates as a JSON array.")
        p.add_argument(
            "--functions",
            default=None,
            help='Free function names as a JSON array, e.g. \'["a"]\' for a(t).',
        )
        return p

    metric_command("christoffel", "Compute Christoffel symbols Gamma^a_{bc}")
    metric_command("riemann", "Compute the Riemann tensor R^a_{bcd}")
    metric_command("ricci", "Compute the Ricci tensor R_{ab}")
    metric_command("ricci-scalar", "Compute the Ricci scalar R")
    metric_command("einstein", "Compute the Einstein tensor G_{ab}")

    for name, help_text in (
        ("verify-solution", "Verify G + Lambda g = 8 pi T for a metric"),
        ("construct-equations", "List the field equations of a metric ansatz"),
    ):
        p = metric_command(name, help_text)
        p.add_argument(
            "--stress-energy",
            default=None,
            help="Stress-energy tensor T_{ab} as a JSON matrix (default: vacuum).",
        )
        p.add_argument(
            "--lambda",
            dest="cosmological_constant",
            default=None,
            help="Cosmological constant formula (default: 0).",
        )

    p = sub.add_parser("solve-vacuum", help="Match a vacuum solution for a symmetry class")
    p.add_argument("--coords", required=True, help="Coordinates as a JSON array.")
    p.add_argument(
        "--symmetry",
        required=True,
        help="Symmetry ansatz: spherical, axisymmetric or cosmological.",
    )
    p.add_argument(
        "--all",
        action="store_true",
        help="Verify every catalogue template of the symmetry, sources included.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    coords: list[str] = []
    try:
        coords = _load_coords(args.coords)
        payload = _run(args, coords)
    except (TensorCalcError, json.JSONDecodeError) as err:
        logger.error("%s failed: %s", args.command, err)
        print(to_json(error_envelope(str(err), coords)))
        return 1

    print(to_json(payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
