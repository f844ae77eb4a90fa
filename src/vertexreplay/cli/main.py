"""Command line interface for vertexreplay."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import cast

from .inspect_cmd import VerbosityArg, run_inspect
from .list_cmd import run_list


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vertexreplay")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list", help="List jobs, captured steps of a job, or captured vertices of a step"
    )
    list_parser.add_argument("trace_root", type=Path, help="Root directory of the trace store")
    list_parser.add_argument("job_id", nargs="?", default=None, help="Job to list")
    list_parser.add_argument("--step", type=int, default=None, help="Computation step to list")
    list_parser.add_argument("--json", action="store_true", help="Emit a JSON array")

    inspect_parser = subparsers.add_parser("inspect", help="Inspect one captured scenario")
    inspect_parser.add_argument("trace_root", type=Path, help="Root directory of the trace store")
    inspect_parser.add_argument("job_id", help="Job that produced the trace")
    inspect_parser.add_argument("step", type=int, help="Computation step")
    inspect_parser.add_argument("vertex_id", help="Vertex id as written in the trace name")
    inspect_parser.add_argument(
        "--verbosity",
        choices=["minimal", "standard", "full"],
        default="standard",
        help="Console render verbosity",
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the display projection as JSON instead of text output",
    )
    inspect_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional output file path for --json output",
    )
    inspect_parser.add_argument(
        "--registry",
        default=None,
        help="TypeRegistry for user value types, as 'module:attribute'",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        return run_list(args.trace_root, args.job_id, args.step, as_json=args.json)

    if args.command == "inspect":
        return run_inspect(
            args.trace_root,
            args.job_id,
            args.step,
            args.vertex_id,
            cast(VerbosityArg, args.verbosity),
            as_json=args.json,
            output_path=args.output,
            registry_ref=args.registry,
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
