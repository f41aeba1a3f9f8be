# bridge_wrangler/board_transform.py
#
# In-place rotation of a structured Board: dealer, vulnerability, hands.
from __future__ import annotations

from typing import Dict, List

from .pbn_types import Board, Card, SEATS, Seat
from .rotation import rotate_seat

# Standard duplicate vulnerability, boards 1-16 (repeats every 16 boards).
STANDARD_VULNERABILITY: List[str] = [
    "None", "NS", "EW", "Both",
    "NS", "EW", "Both", "None",
    "EW", "Both", "None", "NS",
    "Both", "None", "NS", "EW",
]

_SWAP_SIDES: Dict[str, str] = {"NS": "EW", "EW": "NS"}


def standard_vulnerability(board_number: int) -> str:
    """Return the standard vulnerability for a 1-based board number."""
    return STANDARD_VULNERABILITY[(board_number - 1) % len(STANDARD_VULNERABILITY)]


def rotate_board(board: Board, rotation: int, use_standard_vul: bool = False) -> None:
    """
    Rotate a board by `rotation` clockwise quarter-turns, in place.

    This turns the table rather than relabelling seats: the hand that
    ends up at seat d is the one that was at rotate_seat(d, 4 - rotation).

    Vulnerability:
      • use_standard_vul → standard table by board number, whatever the
        rotation (including 0).
      • otherwise odd rotations swap NS/EW; None and Both are unchanged.
    """
    rotation %= 4

    if use_standard_vul and board.number is not None:
        board.vulnerability = standard_vulnerability(board.number)
    elif rotation % 2 == 1:
        board.vulnerability = _SWAP_SIDES.get(board.vulnerability, board.vulnerability)

    if rotation == 0:
        return

    if board.dealer is not None:
        board.dealer = rotate_seat(board.dealer, rotation)

    # Snapshot first: every read happens before any write.
    old_hands: Dict[Seat, List[Card]] = {
        seat: list(board.hands.get(seat, [])) for seat in SEATS
    }
    for seat in SEATS:
        board.hands[seat] = old_hands[rotate_seat(seat, 4 - rotation)]
