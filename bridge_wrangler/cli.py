"""
Command-line entry point for bridge-wrangler.

Subcommands
-----------
  rotate-deals   Rotate deals so dealer / declarer follow a pattern
  to-lin         Convert a PBN file to BBO LIN

Domain errors are reported as "ERROR: ..." on stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .basis import BASIS_MODES, DEFAULT_BASIS
from .lin_encoder import LinError, run_to_lin
from .rotate_deals import DEFAULT_PATTERN, RotateError, run_rotate_deals


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bridge-wrangler",
        description="CLI tool for operations on bridge PBN files",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    rotate = sub.add_parser(
        "rotate-deals",
        help="Rotate deals to set dealer/declarer according to a pattern",
    )
    rotate.add_argument("-i", "--input", required=True, type=Path, help="Input PBN file")
    rotate.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output PBN file (defaults to input with pattern appended). "
        "Not allowed with multiple patterns.",
    )
    rotate.add_argument(
        "-p",
        "--pattern",
        default=DEFAULT_PATTERN,
        help='Rotation pattern(s); comma-separate to write several files, e.g. "S,NS,NESW"',
    )
    rotate.add_argument(
        "-b",
        "--basis",
        choices=BASIS_MODES,
        default=DEFAULT_BASIS,
        help="Basis for determining current board orientation",
    )
    rotate.add_argument(
        "--standard-vul",
        action="store_true",
        help="Use standard vulnerability based on board number instead of rotating",
    )

    to_lin = sub.add_parser("to-lin", help="Convert PBN file to LIN format")
    to_lin.add_argument("-i", "--input", required=True, type=Path, help="Input PBN file")
    to_lin.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output LIN file (defaults to <input>.lin)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        if args.command == "rotate-deals":
            run_rotate_deals(
                args.input,
                output_path=args.output,
                pattern=args.pattern,
                basis=args.basis,
                standard_vul=args.standard_vul,
            )
        elif args.command == "to-lin":
            run_to_lin(args.input, args.output)
    except (RotateError, LinError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    return 0
