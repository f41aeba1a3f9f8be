"""
Rotate deals – replay one set of boards with different seat assignments.

Responsibilities
----------------
- Take:
    * an input PBN file
    * one or more rotation patterns ("NESW", "NS", "S,NS,NESW", ...)
    * a rotation basis mode (see basis.py)
- Produce:
    * one rotated PBN file per pattern

For each pattern, board i (0-based, among boards that have cards) gets
the target seat pattern[i % len(pattern)]. The board is rotated by the
distance from its basis seat to that target, and the original text is
re-streamed through pbn_rewriter with the rotated boards. Basis tags
come from each game's own Board.tags, so repeated board numbers never
mix two games.

This module MUST NOT:
- Re-serialise boards from the model (formatting would be lost).
- Share mutable board state between patterns.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .basis import DEFAULT_BASIS, find_basis
from .board_transform import rotate_board
from .pbn_reader import PbnParseError, board_has_cards, parse_seat, read_pbn
from .pbn_rewriter import RotationInfo, write_rotated_pbn
from .pbn_types import Board, Seat
from .rotation import rotation_amount

DEFAULT_PATTERN = "NESW"


# ---------------------------------------------------------------------------
# Exceptions and summary types
# ---------------------------------------------------------------------------


class RotateError(Exception):
    """Domain error raised when a rotate-deals run cannot complete."""


@dataclass
class RotateSummary:
    """Summary of what run_rotate_deals() produced."""

    num_boards: int
    output_paths: List[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def split_patterns(pattern: str) -> List[str]:
    """Split a comma-separated pattern list; pieces are stripped."""
    return [p.strip() for p in pattern.split(",")]


def parse_pattern(pattern: str) -> List[Seat]:
    """
    Parse a pattern such as "NESW" or "ns" into a list of seats.

    Raises RotateError on an unknown character or an empty pattern.
    """
    seats: List[Seat] = []
    for ch in pattern.upper():
        seat = parse_seat(ch)
        if seat is None:
            raise RotateError(f"Invalid direction {ch!r} in pattern {pattern!r}")
        seats.append(seat)

    if not seats:
        raise RotateError("Pattern cannot be empty")
    return seats


def make_output_path(input_path: Path, pattern: str) -> Path:
    """
    "<stem> - <PATTERN>.<ext>" next to the input file.

    E.g. lesson.pbn + "nes" -> "lesson - NES.pbn"
    """
    ext = input_path.suffix or ".pbn"
    return input_path.with_name(f"{input_path.stem} - {pattern.upper()}{ext}")


def _number_boards(boards: List[Board]) -> None:
    """Give unnumbered boards their 1-based position in source order."""
    for i, board in enumerate(boards):
        if board.number is None:
            board.number = i + 1


def rotate_boards_for_pattern(
    boards: List[Board],
    pattern: List[Seat],
    basis: str = DEFAULT_BASIS,
    standard_vul: bool = False,
) -> Tuple[List[Board], List[RotationInfo]]:
    """
    Rotate deep copies of `boards` for one pattern.

    Returns (rotated_boards, rotation_infos); rotation_infos[i] describes
    rotated_boards[i].
    The input boards are never modified.
    """
    rotated = copy.deepcopy(boards)
    infos: List[RotationInfo] = []

    for i, board in enumerate(rotated):
        target = pattern[i % len(pattern)]
        basis_seat, basis_kind = find_basis(board, board.tags, basis)
        rotation = rotation_amount(basis_seat, target)

        infos.append(
            RotationInfo(
                rotation=rotation,
                target=target,
                basis=basis_seat,
                basis_kind=basis_kind,
                use_standard_vul=standard_vul,
            )
        )
        rotate_board(board, rotation, standard_vul)

    return rotated, infos


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def run_rotate_deals(
    input_path: Path,
    output_path: Optional[Path] = None,
    pattern: str = DEFAULT_PATTERN,
    basis: str = DEFAULT_BASIS,
    standard_vul: bool = False,
) -> RotateSummary:
    """
    Rotate every board in input_path once per pattern and write the results.

    With a single pattern, output_path (if given) names the output file.
    With several patterns every output is auto-named; passing output_path
    as well is an error.
    """
    patterns = split_patterns(pattern)
    if len(patterns) > 1 and output_path is not None:
        raise RotateError(
            "Cannot use --output with multiple patterns. Output files will be auto-named."
        )

    # Validate every pattern before anything is written.
    parsed_patterns = [(p, parse_pattern(p)) for p in patterns]

    try:
        content = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RotateError(f"Failed to read input file {input_path}: {exc}") from exc

    try:
        pbn = read_pbn(content)
    except PbnParseError as exc:
        raise RotateError(f"Failed to parse PBN file {input_path}: {exc}") from exc

    boards = pbn.boards
    _number_boards(boards)
    valid_boards = [b for b in boards if board_has_cards(b)]
    skipped_starts = [
        b.start_line for b in boards if not board_has_cards(b) and b.start_line is not None
    ]
    if not valid_boards:
        raise RotateError(f"No valid boards found in input file {input_path}")

    print(f"Read {len(valid_boards)} boards from {input_path}")

    summary = RotateSummary(num_boards=len(valid_boards))
    for pattern_str, seats in parsed_patterns:
        rotated, infos = rotate_boards_for_pattern(
            valid_boards, seats, basis=basis, standard_vul=standard_vul
        )

        if len(patterns) == 1 and output_path is not None:
            out_path = output_path
        else:
            out_path = make_output_path(input_path, pattern_str)

        text = write_rotated_pbn(
            content,
            rotated,
            infos,
            event_title=pbn.event,
            skipped_starts=skipped_starts,
        )
        try:
            out_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise RotateError(f"Failed to write output file {out_path}: {exc}") from exc

        print(f"Wrote {len(rotated)} boards to {out_path}")
        summary.output_paths.append(out_path)

    return summary
