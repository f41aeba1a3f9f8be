"""
PBN reader utilities.

Turns the text of a PBN file into Board objects (see pbn_types).

Key behaviours
--------------
- Games are separated by blank lines. Files written without blank
  separators are still split correctly: a tag name that repeats inside
  the current game starts a new game ([Note] may repeat).

- Only the fields the rest of the package needs are modelled:
    * [Board], [Dealer], [Vulnerable], [Deal]
    * [Auction] / [Play] sections (continuation lines)
    * player names from [North], [East], [South], [West]
  Every tag value is also kept raw in Board.tags.

- Hands are lists of cards in "rank + suit" form ("AS", "TD"), the
  same convention used by the encoders.

- Full grammar validation is out of scope. Only malformed tag lines and
  malformed [Deal] values raise PbnParseError.
"""

# file: bridge_wrangler/pbn_reader.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .pbn_types import (
    Auction,
    Board,
    Card,
    PbnFile,
    Play,
    RANK_ORDER,
    SEATS,
    SUIT_ORDER,
    Seat,
    rank_sort_key,
)


class PbnParseError(Exception):
    """Raised when PBN text cannot be turned into boards."""


# ---------------------------------------------------------------------------
# Tag lines
# ---------------------------------------------------------------------------

_TAG_RE = re.compile(r'^\[(?P<name>[A-Za-z0-9_]+)\s+"(?P<value>.*)"\]$')

# Inline commentary inside auction / play sections.
_INLINE_COMMENT_RE = re.compile(r"\{[^}]*\}")

_NOTE_REF_RE = re.compile(r"^=(\d+)=$")

_BID_RE = re.compile(r"^([1-7])(C|D|H|S|NT|N)$", re.IGNORECASE)


def split_lines(text: str) -> List[str]:
    """
    Split text into lines without terminators.

    A trailing newline adds no empty line, and a carriage return before
    each newline is dropped.
    Line i of the result is source line i + 1 for every consumer, so
    Board.start_line can be matched against a second pass over the text.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_tag_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a trimmed tag line into (name, value).

    Returns None when the line is not a well-formed tag; callers decide
    whether that is an error.
    """
    m = _TAG_RE.match(line)
    if m is None:
        return None
    return m.group("name"), m.group("value")


# ---------------------------------------------------------------------------
# Seats and vulnerability
# ---------------------------------------------------------------------------


def parse_seat(ch: str) -> Optional[Seat]:
    """Parse a single direction character (any case). None if invalid."""
    if len(ch) != 1:
        return None
    seat = ch.upper()
    return seat if seat in SEATS else None


def seat_to_char(seat: Seat) -> str:
    """Seats are already stored as their canonical character."""
    return seat


_VUL_FROM_PBN = {
    "none": "None",
    "love": "None",
    "-": "None",
    "ns": "NS",
    "ew": "EW",
    "all": "Both",
    "both": "Both",
}


def vul_from_pbn(token: str) -> str:
    """
    Map a [Vulnerable] value to the internal label.

    Unknown values are treated as "None"; vulnerability is a display
    concern here, not something worth rejecting a file over.
    """
    return _VUL_FROM_PBN.get(token.strip().lower(), "None")


def vul_to_pbn(vul: str, both_token: str = "All") -> str:
    """
    Map an internal vulnerability label back to a PBN token.

    PBN spells "both vulnerable" as "All"; some tools write "Both", so
    the caller may choose the spelling.
    """
    mapping = {
        "None": "None",
        "NS": "NS",
        "EW": "EW",
        "Both": both_token,
    }
    return mapping.get(vul, "None")


# ---------------------------------------------------------------------------
# Hands and deals
# ---------------------------------------------------------------------------


def _parse_hand(text: str, line_no: int) -> List[Card]:
    """
    Parse one hand in S.H.D.C notation, e.g. "AKQ.JT9.876.5432".

    "-" means the hand is unknown and yields an empty list.
    """
    if text == "-":
        return []

    suits = text.split(".")
    if len(suits) != 4:
        raise PbnParseError(
            f"Line {line_no}: hand {text!r} does not have four suits"
        )

    cards: List[Card] = []
    for suit, holding in zip(SUIT_ORDER, suits):
        holding = holding.upper().replace("10", "T")
        for rank in holding:
            if rank not in RANK_ORDER:
                raise PbnParseError(
                    f"Line {line_no}: invalid rank {rank!r} in hand {text!r}"
                )
            cards.append(rank + suit)
    return cards


def parse_deal(value: str, line_no: int = 0) -> Tuple[Seat, Dict[Seat, List[Card]]]:
    """
    Parse a [Deal] value like "N:AKQ.JT9.876.5432 ... ... ...".

    Returns (first_seat, hands). Hands are listed clockwise starting at
    first_seat.
    """
    value = value.strip()
    if len(value) < 2 or value[1] != ":":
        raise PbnParseError(f"Line {line_no}: deal {value!r} has no seat marker")

    first = parse_seat(value[0])
    if first is None:
        raise PbnParseError(f"Line {line_no}: invalid first seat in deal {value!r}")

    parts = value[2:].split()
    if len(parts) != 4:
        raise PbnParseError(f"Line {line_no}: deal {value!r} does not have four hands")

    start = SEATS.index(first)
    hands: Dict[Seat, List[Card]] = {}
    for offset, part in enumerate(parts):
        seat = SEATS[(start + offset) % 4]
        hands[seat] = _parse_hand(part, line_no)
    return first, hands


def deal_first_seat(value: str) -> Optional[Seat]:
    """Return the leading seat marker of a raw [Deal] value, if any."""
    value = value.strip()
    if len(value) < 2 or value[1] != ":":
        return None
    return parse_seat(value[0])


def hand_to_pbn(cards: Sequence[Card]) -> str:
    """
    Render a hand in compact S.H.D.C notation.

    An empty hand renders as "-" (unknown hand).
    """
    if not cards:
        return "-"

    by_suit: Dict[str, List[str]] = {s: [] for s in SUIT_ORDER}
    for card in cards:
        if len(card) != 2:
            continue
        rank, suit = card[0], card[1]
        if suit in by_suit:
            by_suit[suit].append(rank)

    for suit in SUIT_ORDER:
        by_suit[suit].sort(key=rank_sort_key)

    return ".".join("".join(by_suit[s]) for s in SUIT_ORDER)


def deal_to_pbn(hands: Dict[Seat, List[Card]], first_seat: Seat) -> str:
    """Render hands as a [Deal] value starting at first_seat."""
    start = SEATS.index(first_seat)
    parts = [
        hand_to_pbn(hands.get(SEATS[(start + i) % 4], []))
        for i in range(4)
    ]
    return f"{first_seat}:" + " ".join(parts)


def board_has_cards(board: Board) -> bool:
    """True when at least one of the four hands holds a card."""
    return any(board.hands.get(seat) for seat in SEATS)


# ---------------------------------------------------------------------------
# Auction and play sections
# ---------------------------------------------------------------------------


def _section_tokens(line: str) -> List[str]:
    line = _INLINE_COMMENT_RE.sub(" ", line)
    line = line.split(";", 1)[0]
    return line.split()


def _normalise_call(token: str) -> Optional[str]:
    upper = token.upper()
    if upper in ("PASS", "P"):
        return "Pass"
    if upper == "X":
        return "X"
    if upper == "XX":
        return "XX"
    m = _BID_RE.match(token)
    if m:
        strain = m.group(2).upper()
        if strain == "N":
            strain = "NT"
        return m.group(1) + strain
    return None


def _build_auction(start: Seat, tokens: Sequence[str], notes: Dict[str, str]) -> Auction:
    auction = Auction(start=start)
    for token in tokens:
        if token.upper() == "AP":
            auction.calls.extend(["Pass", "Pass", "Pass"])
            continue
        ref = _NOTE_REF_RE.match(token)
        if ref:
            if auction.calls and ref.group(1) in notes:
                auction.notes[len(auction.calls) - 1] = notes[ref.group(1)]
            continue
        call = _normalise_call(token)
        if call is not None:
            auction.calls.append(call)
    return auction


def _parse_play_card(token: str) -> Optional[Card]:
    """PBN play cards are suit first ("SA", "H10"); convert to "AS"."""
    token = token.upper().replace("10", "T")
    if len(token) != 2:
        return None
    suit, rank = token[0], token[1]
    if suit not in SUIT_ORDER or rank not in RANK_ORDER:
        return None
    return rank + suit


def _build_play(leader: Seat, tokens: Sequence[str]) -> Play:
    play = Play(leader=leader)
    trick: List[Optional[Card]] = []
    for token in tokens:
        if token == "-":
            trick.append(None)
        else:
            card = _parse_play_card(token)
            if card is None:
                # "*", NAGs, note refs
                continue
            trick.append(card)
        if len(trick) == 4:
            play.tricks.append(trick)
            trick = []
    if trick:
        trick.extend([None] * (4 - len(trick)))
        play.tricks.append(trick)
    return play


# ---------------------------------------------------------------------------
# Game splitting
# ---------------------------------------------------------------------------


@dataclass
class _RawGame:
    tags: Dict[str, str] = field(default_factory=dict)
    tag_lines: Dict[str, int] = field(default_factory=dict)
    sections: Dict[str, List[str]] = field(default_factory=dict)
    notes: List[str] = field(default_factory=list)
    first_line: int = 0


def _split_games(text: str) -> Tuple[List[_RawGame], List[str]]:
    games: List[_RawGame] = []
    directives: List[str] = []

    current = _RawGame()
    section: Optional[str] = None
    in_comment = False

    def _finish() -> None:
        nonlocal current
        if current.tags:
            games.append(current)
        current = _RawGame()

    for line_no, raw in enumerate(split_lines(text), start=1):
        line = raw.strip()

        if in_comment:
            if line.endswith("}"):
                in_comment = False
            continue

        if line.startswith("%"):
            directives.append(raw.rstrip())
            continue

        if not line:
            _finish()
            section = None
            continue

        if line.startswith(";"):
            continue

        if line.startswith("{"):
            if not line.endswith("}"):
                in_comment = True
            continue

        if line.startswith("["):
            tag = parse_tag_line(line)
            if tag is None:
                raise PbnParseError(f"Line {line_no}: malformed tag {line!r}")
            name, value = tag

            if name == "Note":
                current.notes.append(value)
                continue

            if name in current.tags:
                _finish()

            if not current.tags:
                current.first_line = line_no

            current.tags[name] = value
            current.tag_lines[name] = line_no
            if name in ("Auction", "Play"):
                section = name
                current.sections[name] = []
            else:
                section = None
            continue

        if section is not None:
            current.sections[section].extend(_section_tokens(line))

    _finish()
    return games, directives


def _parse_notes(raw_notes: Sequence[str]) -> Dict[str, str]:
    notes: Dict[str, str] = {}
    for raw in raw_notes:
        key, sep, text = raw.partition(":")
        if sep:
            notes[key.strip()] = text.strip()
    return notes


def _board_from_game(game: _RawGame) -> Board:
    tags = game.tags

    number: Optional[int] = None
    raw_number = tags.get("Board", "").strip()
    if raw_number.isdigit():
        number = int(raw_number)

    dealer = parse_seat(tags.get("Dealer", "").strip()[:1])
    vulnerability = vul_from_pbn(tags.get("Vulnerable", "None"))

    hands: Dict[Seat, List[Card]] = {seat: [] for seat in SEATS}
    if "Deal" in tags:
        _, parsed = parse_deal(tags["Deal"], game.tag_lines["Deal"])
        hands.update(parsed)

    auction: Optional[Auction] = None
    auction_start = parse_seat(tags.get("Auction", "").strip()[:1])
    if auction_start is not None:
        auction = _build_auction(
            auction_start,
            game.sections.get("Auction", []),
            _parse_notes(game.notes),
        )

    play: Optional[Play] = None
    leader = parse_seat(tags.get("Play", "").strip()[:1])
    if leader is not None:
        play = _build_play(leader, game.sections.get("Play", []))

    players: Dict[Seat, str] = {}
    for seat, tag_name in (("N", "North"), ("E", "East"), ("S", "South"), ("W", "West")):
        if tag_name in tags:
            players[seat] = tags[tag_name]

    return Board(
        number=number,
        dealer=dealer,
        vulnerability=vulnerability,
        hands=hands,
        auction=auction,
        play=play,
        players=players,
        tags=dict(tags),
        start_line=game.tag_lines.get("Board", game.first_line),
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def read_pbn(text: str) -> PbnFile:
    """
    Parse PBN text into a PbnFile.

    Games without a [Board] or [Deal] tag (e.g. a file-level header
    game) do not produce boards. Boards keep source order.
    """
    games, directives = _split_games(text)

    boards: List[Board] = []
    event = ""
    for game in games:
        if not event and game.tags.get("Event"):
            event = game.tags["Event"]
        if "Board" not in game.tags and "Deal" not in game.tags:
            continue
        boards.append(_board_from_game(game))

    return PbnFile(boards=boards, directives=directives, event=event)
