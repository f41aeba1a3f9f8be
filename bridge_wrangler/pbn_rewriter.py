"""
Format-preserving PBN rewriter.

The rotated file is produced by re-streaming the ORIGINAL text rather
than re-serialising boards, so anything this package does not model
(unknown tags, directives, auction/play lines, comments) survives
byte-for-byte. Only seat-dependent values are substituted, using the
already-rotated Board objects.

The rewrite is a finite-state machine over the line stream:

    header      before the first board
    active      inside a board that is being kept
    suppressed  inside a board that is not kept; lines are dropped
    free_text   inside a multi-line {...} block; remembers the state
                it returns to when the block closes

Boards are matched to the text by Board.start_line (the game's [Board]
tag, or its first tag for games without one), never by board number,
so repeated or missing numbers still pair every game with its own
rotated board. Transitions happen only on game start lines, on [Board]
lines, and on {/} delimiters.
"""

# file: bridge_wrangler/pbn_rewriter.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .commentary import rotate_commentary
from .pbn_reader import (
    deal_first_seat,
    deal_to_pbn,
    parse_tag_line,
    seat_to_char,
    split_lines,
    vul_to_pbn,
)
from .pbn_types import Board, Seat
from .rotation import rotate_direction_value, rotate_side_value, seat_index

HEADER = "header"
ACTIVE = "active"
SUPPRESSED = "suppressed"
FREE_TEXT = "free_text"

# Tag after which the RotationNote diagnostic line is written.
FLAGS_TAG = "BCFlags"

# Written fresh in front of every kept board.
_TITLE_TAGS = ("Event", "Site", "Date")

_SEAT_VALUE_TAGS = ("Auction", "Play", "Declarer")


@dataclass
class RotationInfo:
    """How one board was rotated for one pattern."""

    rotation: int
    target: Seat
    basis: Seat
    basis_kind: str
    use_standard_vul: bool

    def to_rotation_note(self, board_number: Optional[int]) -> str:
        return (
            f'[RotationNote "Board {board_number}, '
            f"chOption: {self.target}, "
            f"chBasis: {self.basis}, "
            f"basisKind:{self.basis_kind}, "
            f"nOption:{seat_index(self.target)}, "
            f"nBasis: {seat_index(self.basis)}, "
            f"nRot: {self.rotation}, "
            f'useStandardVul: {"true" if self.use_standard_vul else "false"}"]'
        )


class PbnRewriter:
    """
    Line-at-a-time rewriter. Feed every source line, in order, to
    process_line(), then read the result from text().

    rotated_boards[i] is paired with rotation_infos[i]. skipped_starts
    holds the start lines of games that must be dropped.
    """

    def __init__(
        self,
        rotated_boards: Sequence[Board],
        rotation_infos: Sequence[RotationInfo],
        event_title: str = "",
        skipped_starts: Iterable[int] = (),
    ) -> None:
        # Start line -> (board, info), or None for a dropped game.
        self._starts: Dict[int, Optional[Tuple[Board, RotationInfo]]] = {
            line: None for line in skipped_starts
        }
        for board, info in zip(rotated_boards, rotation_infos):
            if board.start_line is not None:
                self._starts[board.start_line] = (board, info)
        self._event_title = event_title

        self.state = HEADER
        self._line_no = 0
        self._resume_state = HEADER
        self._free_text: List[str] = []
        self._board: Optional[Board] = None
        self._info: Optional[RotationInfo] = None
        self._rotation = 0
        self._title_written = False
        self._out: List[str] = []

    # -- output helpers -----------------------------------------------------

    def _emit(self, line: str) -> None:
        self._out.append(line)

    def _emit_text(self, text: str) -> None:
        if self.state == ACTIVE and self._rotation != 0:
            text = rotate_commentary(text, self._rotation)
        self._out.append(text)

    def text(self) -> str:
        return "".join(line + "\n" for line in self._out)

    # -- state machine ------------------------------------------------------

    def process_line(self, line: str) -> None:
        self._line_no += 1
        trimmed = line.strip()

        if self.state == FREE_TEXT:
            self._free_text.append(line)
            if trimmed.endswith("}"):
                self._close_free_text()
            return

        if trimmed.startswith("{") and not trimmed.endswith("}"):
            self._resume_state = self.state
            self.state = FREE_TEXT
            self._free_text = [line]
            return

        tag = parse_tag_line(trimmed) if trimmed.startswith("[") else None
        is_marker = tag is not None and tag[0] == "Board"

        if self._line_no in self._starts:
            self._start_game(self._starts[self._line_no])
            if is_marker:
                if self.state == ACTIVE:
                    self._emit(line)
                return
        elif is_marker:
            self._unknown_marker(line, tag[1])
            return

        if self.state == SUPPRESSED:
            return

        if trimmed.startswith("{"):
            self._emit_text(line)
            return

        if tag is None:
            # Directives, comments, blank lines, auction / play data and
            # anything unrecognised.
            self._emit(line)
            return

        name, value = tag
        if name in _TITLE_TAGS:
            return

        if self.state == HEADER:
            self._emit(line)
            return

        self._rewrite_tag(line, name, value)

    def _close_free_text(self) -> None:
        self.state = self._resume_state
        if self.state == SUPPRESSED:
            return
        self._emit_text("\n".join(self._free_text))
        self._free_text = []

    def _suppress(self) -> None:
        self.state = SUPPRESSED
        self._board = None
        self._info = None
        self._rotation = 0

    def _start_game(self, entry: Optional[Tuple[Board, RotationInfo]]) -> None:
        if entry is None:
            self._suppress()
            return

        self.state = ACTIVE
        self._board, self._info = entry
        self._rotation = self._info.rotation

        title = "" if self._title_written else self._event_title
        self._title_written = True
        self._emit(f'[Event "{title}"]')
        self._emit('[Site ""]')
        self._emit('[Date ""]')

    def _unknown_marker(self, line: str, value: str) -> None:
        """A [Board] line that starts no known game."""
        if not value.strip().isdigit():
            if self.state != SUPPRESSED:
                self._emit(line)
            return
        self._suppress()

    def _rewrite_tag(self, line: str, name: str, value: str) -> None:
        board, info = self._board, self._info
        assert board is not None and info is not None
        rotation = self._rotation

        if name == FLAGS_TAG:
            self._emit(line)
            self._emit(info.to_rotation_note(board.number))
        elif name == "Vulnerable" and (rotation != 0 or info.use_standard_vul):
            both = "Both" if value.strip().lower() == "both" else "All"
            self._emit(f'[Vulnerable "{vul_to_pbn(board.vulnerability, both)}"]')
        elif rotation == 0:
            self._emit(line)
        elif name == "Dealer":
            self._emit(f'[Dealer "{seat_to_char(board.dealer or "N")}"]')
        elif name == "Deal":
            first = deal_first_seat(value) or board.dealer or "N"
            self._emit(f'[Deal "{deal_to_pbn(board.hands, first)}"]')
        elif name in _SEAT_VALUE_TAGS:
            self._emit(f'[{name} "{rotate_direction_value(value, rotation)}"]')
        elif name == "Score":
            self._emit(f'[Score "{rotate_side_value(value, rotation)}"]')
        else:
            self._emit(line)


def write_rotated_pbn(
    original_text: str,
    rotated_boards: Sequence[Board],
    rotation_infos: Sequence[RotationInfo],
    event_title: str = "",
    skipped_starts: Iterable[int] = (),
) -> str:
    """
    Re-stream original_text, keeping only the games of rotated_boards
    and substituting their rotated seat-dependent values.

    event_title is written into the first kept board's [Event] tag.
    Games starting at a line in skipped_starts are dropped entirely.
    """
    rewriter = PbnRewriter(
        rotated_boards,
        rotation_infos,
        event_title=event_title,
        skipped_starts=skipped_starts,
    )
    for line in split_lines(original_text):
        rewriter.process_line(line)
    return rewriter.text()
