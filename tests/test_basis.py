"""
Tests for rotation basis resolution (basis.find_basis).
"""

from __future__ import annotations

import pytest

from bridge_wrangler.basis import BASIS_MODES, find_basis


class TestStandardChain:
    """The standard mode walks RotationBasis -> Student -> Declarer -> dealer -> North."""

    def test_rotation_basis_tag_wins(self, make_board):
        board = make_board(dealer="E")
        tags = {"RotationBasis": "W", "Student": "S", "Declarer": "N"}
        assert find_basis(board, tags, "standard") == ("W", "RotationBasis")

    def test_student_before_declarer(self, make_board):
        board = make_board(dealer="E")
        tags = {"Student": "South", "Declarer": "N"}
        assert find_basis(board, tags, "standard") == ("S", "Student")

    def test_declarer_before_dealer(self, make_board):
        board = make_board(dealer="E")
        assert find_basis(board, {"Declarer": "w"}, "standard") == ("W", "Declarer")

    def test_unparsable_tag_is_skipped(self, make_board):
        board = make_board(dealer="E")
        tags = {"RotationBasis": "?", "Student": "", "Declarer": "^S"}
        assert find_basis(board, tags, "standard") == ("E", "Dealer")

    def test_dealer_when_no_tags(self, make_board):
        assert find_basis(make_board(dealer="S"), None, "standard") == ("S", "Dealer")

    def test_north_fallback(self, make_board):
        assert find_basis(make_board(dealer=None), {}, "standard") == ("N", "North")


class TestSingleSourceModes:
    """Modes that read exactly one source."""

    def test_basis_tag_mode(self, make_board):
        board = make_board(dealer="E")
        assert find_basis(board, {"RotationBasis": "S"}, "basis-tag") == ("S", "RotationBasis")
        assert find_basis(board, {}, "basis-tag") == ("N", "RotationBasis")

    def test_student_mode_ignores_other_tags(self, make_board):
        board = make_board(dealer="E")
        tags = {"RotationBasis": "W", "Student": "S"}
        assert find_basis(board, tags, "student") == ("S", "Student")

    def test_declarer_mode_falls_back_to_north(self, make_board):
        board = make_board(dealer="E")
        assert find_basis(board, {"Student": "S"}, "declarer") == ("N", "Declarer")

    def test_dealer_mode(self, make_board):
        assert find_basis(make_board(dealer="W"), {"Student": "S"}, "dealer") == ("W", "Dealer")
        assert find_basis(make_board(dealer=None), None, "dealer") == ("N", "Dealer")

    def test_deal_mode_uses_leading_seat_marker(self, make_board):
        board = make_board(dealer="N")
        tags = {"Deal": "E:AKQJ.AKQ.AKQ.AKQ - - -"}
        assert find_basis(board, tags, "deal") == ("E", "Deal")

    def test_deal_mode_falls_back_to_dealer(self, make_board):
        board = make_board(dealer="S")
        assert find_basis(board, {}, "deal") == ("S", "Deal")
        assert find_basis(board, {"Deal": "garbage"}, "deal") == ("S", "Deal")

    @pytest.mark.parametrize(
        "mode, expected",
        [("north", ("N", "North")), ("east", ("E", "East")),
         ("south", ("S", "South")), ("west", ("W", "West"))],
    )
    def test_fixed_modes_ignore_board(self, make_board, mode, expected):
        board = make_board(dealer="E")
        tags = {"RotationBasis": "S"}
        assert find_basis(board, tags, mode) == expected


def test_every_mode_resolves(make_board):
    board = make_board(dealer=None)
    for mode in BASIS_MODES:
        seat, kind = find_basis(board, None, mode)
        assert seat in ("N", "E", "S", "W")
        assert kind


def test_unknown_mode_is_rejected(make_board):
    with pytest.raises(ValueError):
        find_basis(make_board(), None, "sideways")
