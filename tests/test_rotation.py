"""
Tests for seat rotation arithmetic in rotation.py.

Covers:
  - rotation_amount() / rotate_seat() group properties
  - rotate_direction_value() for single-seat tag values
  - rotate_side_value() for NS/EW side tokens (e.g. [Score])
"""

from __future__ import annotations

import pytest

from bridge_wrangler.rotation import (
    rotate_direction_value,
    rotate_seat,
    rotate_side_value,
    rotation_amount,
    seat_index,
)

SEATS = ("N", "E", "S", "W")


# ===================================================================
# rotation_amount / rotate_seat
# ===================================================================


class TestRotationAmount:
    """Tests for rotation_amount."""

    def test_from_north(self):
        assert rotation_amount("N", "N") == 0
        assert rotation_amount("N", "E") == 1
        assert rotation_amount("N", "S") == 2
        assert rotation_amount("N", "W") == 3

    def test_towards_north(self):
        assert rotation_amount("E", "N") == 3
        assert rotation_amount("S", "N") == 2
        assert rotation_amount("W", "N") == 1

    @pytest.mark.parametrize("a", SEATS)
    @pytest.mark.parametrize("b", SEATS)
    def test_inverse_pairs_sum_to_zero(self, a, b):
        assert (rotation_amount(a, b) + rotation_amount(b, a)) % 4 == 0

    @pytest.mark.parametrize("seat", SEATS)
    def test_same_seat_is_zero(self, seat):
        assert rotation_amount(seat, seat) == 0

    @pytest.mark.parametrize("a", SEATS)
    @pytest.mark.parametrize("b", SEATS)
    def test_rotating_by_amount_reaches_target(self, a, b):
        assert rotate_seat(a, rotation_amount(a, b)) == b


class TestRotateSeat:
    """Tests for rotate_seat."""

    def test_clockwise_steps(self):
        assert rotate_seat("N", 0) == "N"
        assert rotate_seat("N", 1) == "E"
        assert rotate_seat("N", 2) == "S"
        assert rotate_seat("N", 3) == "W"
        assert rotate_seat("E", 1) == "S"
        assert rotate_seat("W", 1) == "N"

    @pytest.mark.parametrize("seat", SEATS)
    @pytest.mark.parametrize("r1", range(4))
    @pytest.mark.parametrize("r2", range(4))
    def test_composition(self, seat, r1, r2):
        """Rotating by r1 then r2 equals rotating once by (r1 + r2) % 4."""
        assert rotate_seat(rotate_seat(seat, r1), r2) == rotate_seat(seat, (r1 + r2) % 4)

    def test_seat_index_is_clockwise(self):
        assert [seat_index(s) for s in SEATS] == [0, 1, 2, 3]


# ===================================================================
# Raw tag values
# ===================================================================


class TestRotateDirectionValue:
    """Tests for rotate_direction_value."""

    def test_single_uppercase_seat(self):
        assert rotate_direction_value("N", 1) == "E"
        assert rotate_direction_value("S", 2) == "N"

    def test_lowercase_is_preserved(self):
        assert rotate_direction_value("w", 1) == "n"

    def test_zero_rotation(self):
        assert rotate_direction_value("E", 0) == "E"

    def test_non_seat_values_unchanged(self):
        assert rotate_direction_value("", 1) == ""
        assert rotate_direction_value("X", 1) == "X"
        assert rotate_direction_value("^S", 1) == "^S"
        assert rotate_direction_value("NS", 1) == "NS"


class TestRotateSideValue:
    """Tests for rotate_side_value."""

    def test_odd_rotation_swaps_sides(self):
        assert rotate_side_value("NS 420", 1) == "EW 420"
        assert rotate_side_value("NS 420", 3) == "EW 420"
        assert rotate_side_value("EW -100", 1) == "NS -100"

    def test_even_rotation_keeps_side(self):
        assert rotate_side_value("NS 420", 0) == "NS 420"
        assert rotate_side_value("NS 420", 2) == "NS 420"

    def test_value_without_side_unchanged(self):
        assert rotate_side_value("420", 1) == "420"
