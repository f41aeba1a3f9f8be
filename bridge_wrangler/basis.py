"""
Rotation basis resolution.

A board's "basis" is the seat the board is currently oriented to. The
rotation applied to a board is the distance from its basis to the
target seat chosen by the rotation pattern.

Modes
-----
- "standard": [RotationBasis] tag, then [Student], then [Declarer],
  then the board's dealer, then North.
- "basis-tag", "student", "declarer": exactly that tag, else North.
- "dealer": the board's dealer, else North.
- "deal": the leading seat marker of the raw [Deal] value
  ("E:..." -> East), else the dealer, else North.
- "north", "east", "south", "west": that seat, whatever the board says.

Resolution never fails; anything unresolvable falls back to North.
"""

# file: bridge_wrangler/basis.py
from __future__ import annotations

from typing import Mapping, Optional, Tuple

from .pbn_reader import deal_first_seat, parse_seat
from .pbn_types import Board, SEAT_NAMES, Seat

DEFAULT_BASIS = "standard"

# Mode -> tag name for the single-tag modes.
_TAG_MODES = {
    "basis-tag": "RotationBasis",
    "student": "Student",
    "declarer": "Declarer",
}

_FIXED_MODES = {
    "north": "N",
    "east": "E",
    "south": "S",
    "west": "W",
}

BASIS_MODES = (
    "standard",
    "basis-tag",
    "student",
    "declarer",
    "dealer",
    "deal",
    "north",
    "south",
    "east",
    "west",
)

# Priority chain for the standard mode (before dealer / North).
_STANDARD_TAGS = ("RotationBasis", "Student", "Declarer")


def _tag_seat(tags: Optional[Mapping[str, str]], tag_name: str) -> Optional[Seat]:
    if not tags:
        return None
    value = tags.get(tag_name)
    if not value:
        return None
    return parse_seat(value[0])


def find_basis(
    board: Board,
    tags: Optional[Mapping[str, str]],
    mode: str = DEFAULT_BASIS,
) -> Tuple[Seat, str]:
    """
    Return (basis_seat, basis_kind) for a board.

    tags is the raw tag mapping for this board's number (may be None).
    basis_kind names the source that was used, for the RotationNote.
    """
    if mode == "standard":
        for tag_name in _STANDARD_TAGS:
            seat = _tag_seat(tags, tag_name)
            if seat is not None:
                return seat, tag_name
        if board.dealer is not None:
            return board.dealer, "Dealer"
        return "N", "North"

    if mode in _TAG_MODES:
        tag_name = _TAG_MODES[mode]
        return _tag_seat(tags, tag_name) or "N", tag_name

    if mode == "dealer":
        return board.dealer or "N", "Dealer"

    if mode == "deal":
        raw_deal = (tags or {}).get("Deal", "")
        return deal_first_seat(raw_deal) or board.dealer or "N", "Deal"

    if mode in _FIXED_MODES:
        seat = _FIXED_MODES[mode]
        return seat, SEAT_NAMES[seat]

    raise ValueError(f"Unknown rotation basis: {mode!r}")
