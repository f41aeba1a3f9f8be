"""
LIN encoder utilities.

This module converts Board objects read from a PBN file into BBO-style
LIN lines (the `to-lin` command).

Key behaviours
--------------
- Hands are encoded into the `md` tag in BBO's fixed seat order:
    South, West, North, East
  regardless of who the dealer is. The dealer is communicated via
  a numeric dealer code prefix.

- Board numbering:
    * board.number (1-based) is used both for:
        - The container prefix:  qx|o<number>|
        - The human-readable title: ah|Board <number>|
    * Unnumbered boards get neither.

- Vulnerability mapping:
    * Internal labels: "None", "NS", "EW", "Both"
    * BBO LIN codes (sv):
        "0" -> none
        "n" -> NS vulnerable
        "e" -> EW vulnerable
        "b" -> both vulnerable

- Auction calls become mb| tags; a call carrying a PBN note is alerted
  ("!") and followed by an an| tag (spaces as "+"). Played cards become
  pc| tags.
"""

# file: bridge_wrangler/lin_encoder.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .pbn_reader import PbnParseError, read_pbn
from .pbn_types import SUIT_ORDER, Auction, Board, Card, Play, rank_sort_key


class LinError(Exception):
    """Domain error raised when LIN conversion fails."""


def _hand_to_lin_suits(cards: Sequence[Card]) -> str:
    """
    Convert a list of cards (e.g. ["AS", "TD"]) to a compact per-suit string.

    We output in canonical BBO order S, H, D, C as:

        "S<spades>H<hearts>D<diamonds>C<clubs>"

    Example:
        ["AS", "KS", "TD"] -> "SAKHDTC"
    """
    by_suit: Dict[str, List[str]] = {s: [] for s in SUIT_ORDER}
    for card in cards:
        if len(card) != 2:
            continue
        rank, suit = card[0], card[1]
        if suit not in by_suit:
            continue
        by_suit[suit].append(rank)

    parts: List[str] = []
    for suit in SUIT_ORDER:
        ranks = by_suit[suit]
        ranks.sort(key=rank_sort_key)
        parts.append("".join(ranks))

    return f"S{parts[0]}H{parts[1]}D{parts[2]}C{parts[3]}"


def _dealer_to_bbo_code(dealer: Optional[str]) -> str:
    """
    Map compass dealer seat to BBO 'md' dealer code.

        1 = South, 2 = West, 3 = North, 4 = East
    """
    mapping = {"S": "1", "W": "2", "N": "3", "E": "4"}
    # Missing dealer reads as North (3).
    return mapping.get(dealer or "N", "3")


def _vul_to_bbo_code(vul: str) -> str:
    """
    Map internal vulnerability labels to BBO LIN 'sv' codes.

    BBO uses single-letter codes:
        '0' -> none
        'n' -> NS vulnerable
        'e' -> EW vulnerable
        'b' -> both vulnerable
    """
    mapping = {
        "None": "0",
        "NS": "n",
        "EW": "e",
        "Both": "b",
    }
    return mapping.get(vul, "0")


def _call_to_lin(call: str) -> str:
    """'Pass' -> 'p', 'X' -> 'd', 'XX' -> 'r', '1NT' -> '1N', '2H' -> '2H'."""
    if call == "Pass":
        return "p"
    if call == "X":
        return "d"
    if call == "XX":
        return "r"
    if call.endswith("NT"):
        return call[:-1]
    return call


def _encode_auction(auction: Auction) -> str:
    parts: List[str] = []
    for idx, call in enumerate(auction.calls):
        note = auction.notes.get(idx)
        alert = "!" if note is not None else ""
        parts.append(f"mb|{_call_to_lin(call)}{alert}|")
        if note is not None:
            parts.append(f"an|{note.replace(' ', '+')}|")
    return "".join(parts)


def _encode_play(play: Play) -> str:
    parts: List[str] = []
    for trick in play.tricks:
        for card in trick:
            if card is None:
                continue
            # LIN cards are suit first.
            parts.append(f"pc|{card[1]}{card[0]}|")
    return "".join(parts)


def encode_board_to_lin_line(board: Board) -> str:
    """
    Encode a single board into a BBO LIN line.

    Structure:

        qx|o<number>|
        pn|<S>,<W>,<N>,<E>|            (only when player names exist)
        md|<dealerCode><South-hand>,<West-hand>,<North-hand>,<East-hand>|
        ah|Board <number>|
        sv|<vulCode>|
        mb|..|an|..|  pc|..|
        pg||
    """
    parts: List[str] = []

    if board.number is not None:
        parts.append(f"qx|o{board.number}|")

    if any(board.players.values()):
        names = ",".join(board.players.get(seat, "") for seat in ("S", "W", "N", "E"))
        parts.append(f"pn|{names}|")

    dealer_code = _dealer_to_bbo_code(board.dealer)

    # BBO hand order: South, West, North, East
    south = _hand_to_lin_suits(board.hands.get("S", []))
    west = _hand_to_lin_suits(board.hands.get("W", []))
    north = _hand_to_lin_suits(board.hands.get("N", []))
    east = _hand_to_lin_suits(board.hands.get("E", []))
    parts.append(f"md|{dealer_code}{south},{west},{north},{east}|")

    if board.number is not None:
        parts.append(f"ah|Board {board.number}|")

    parts.append(f"sv|{_vul_to_bbo_code(board.vulnerability)}|")

    if board.auction is not None:
        parts.append(_encode_auction(board.auction))
    if board.play is not None:
        parts.append(_encode_play(board.play))

    parts.append("pg||")
    return "".join(parts)


def write_lin_file(path: Path, boards: Sequence[Board]) -> None:
    """
    Write one LIN line per board to the given path.
    """
    lines: List[str] = [encode_board_to_lin_line(b) for b in boards]
    text = "\n".join(lines) + "\n"
    path.write_text(text, encoding="utf-8")


def run_to_lin(input_path: Path, output_path: Optional[Path] = None) -> Path:
    """
    Convert a PBN file to LIN. Output defaults to the input path with a
    .lin extension. Returns the path written.
    """
    try:
        content = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LinError(f"Failed to read input file {input_path}: {exc}") from exc

    try:
        pbn = read_pbn(content)
    except PbnParseError as exc:
        raise LinError(f"Failed to parse PBN file {input_path}: {exc}") from exc

    out_path = output_path or input_path.with_suffix(".lin")
    try:
        write_lin_file(out_path, pbn.boards)
    except OSError as exc:
        raise LinError(f"Failed to write LIN output to {out_path}: {exc}") from exc

    print(f"Converted {len(pbn.boards)} boards to LIN format")
    print(f"Wrote to {out_path}")
    return out_path
