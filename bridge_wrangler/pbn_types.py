# bridge_wrangler/pbn_types.py
#
# Types, constants, and dataclasses shared by the reader, the rotation
# engine, and the encoders.
#
# This is a LEAF module: it has no bridge_wrangler imports.
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Seat = str  # "N", "E", "S", "W"
Card = str  # rank + suit, e.g. "AS", "TD"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Clockwise seat order; a seat's position in this tuple is its index.
SEATS: tuple = ("N", "E", "S", "W")

SEAT_NAMES: Dict[Seat, str] = {
    "N": "North",
    "E": "East",
    "S": "South",
    "W": "West",
}

SUIT_ORDER = "SHDC"
RANK_ORDER = "AKQJT98765432"

# Internal vulnerability labels.
VULNERABILITY_LABELS: List[str] = ["None", "NS", "EW", "Both"]


def rank_sort_key(rank: str) -> int:
    """
    Sort key for a rank character, high to low.

    Unknown ranks sort last rather than failing.
    """
    idx = RANK_ORDER.find(rank)
    return idx if idx != -1 else len(RANK_ORDER)


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass
class Auction:
    start: Seat
    calls: List[str] = field(default_factory=list)
    # Call index -> note text (from [Note] tags referenced as =n=).
    notes: Dict[int, str] = field(default_factory=dict)


@dataclass
class Play:
    leader: Seat
    # One list per trick, in column order starting at the leader.
    # Missing cards are None.
    tricks: List[List[Optional[Card]]] = field(default_factory=list)


@dataclass
class Board:
    """
    One game from a PBN file.

    Mutable on purpose: the rotation engine transforms deep copies of
    boards in place.
    """

    number: Optional[int]
    dealer: Optional[Seat]
    vulnerability: str  # 'None', 'NS', 'EW', 'Both'
    hands: Dict[Seat, List[Card]]
    auction: Optional[Auction] = None
    play: Optional[Play] = None
    players: Dict[Seat, str] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)
    # 1-based source line where this game starts: its [Board] tag, or its
    # first tag when there is none.
    start_line: Optional[int] = None


@dataclass
class PbnFile:
    boards: List[Board]
    directives: List[str] = field(default_factory=list)
    event: str = ""
