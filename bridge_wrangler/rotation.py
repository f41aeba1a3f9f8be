"""
Seat rotation arithmetic.

Seats form a cyclic group of order 4 under clockwise rotation:

    N=0, E=1, S=2, W=3

A rotation amount is always 0-3 (quarter-turns clockwise). Every
function here is pure and total.
"""

# file: bridge_wrangler/rotation.py
from __future__ import annotations

from .pbn_types import SEATS, Seat


def seat_index(seat: Seat) -> int:
    """Clockwise position of a seat (N=0, E=1, S=2, W=3)."""
    return SEATS.index(seat)


def rotation_amount(from_seat: Seat, to_seat: Seat) -> int:
    """Number of clockwise quarter-turns that move from_seat onto to_seat."""
    return (seat_index(to_seat) - seat_index(from_seat) + 4) % 4


def rotate_seat(seat: Seat, rotation: int) -> Seat:
    return SEATS[(seat_index(seat) + rotation) % 4]


def rotate_direction_value(value: str, rotation: int) -> str:
    """
    Rotate a single-character seat value such as an [Auction] or
    [Declarer] tag. Case is preserved; anything that is not exactly one
    seat character is returned unchanged.
    """
    if len(value) != 1 or value.upper() not in SEATS:
        return value
    rotated = rotate_seat(value.upper(), rotation)
    return rotated if value.isupper() else rotated.lower()


def rotate_side_value(value: str, rotation: int) -> str:
    """
    Rotate a value that starts with a side token, e.g. a [Score] like
    "NS 420". Odd rotations swap NS and EW; even rotations change nothing.
    """
    if rotation % 2 == 0:
        return value
    if value.startswith("NS"):
        return "EW" + value[2:]
    if value.startswith("EW"):
        return "NS" + value[2:]
    return value
