from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from bridge_wrangler.pbn_types import Board


# ---------------------------------------------------------------------------
# Reusable deal data
# ---------------------------------------------------------------------------

# N: all the honours, E: T9 8 7 / J T 9, S: middling, W: the small cards.
NORTH_HAND = "AKQJ.AKQ.AKQ.AKQ"
EAST_HAND = "T987.JT9.JT9.JT9"
SOUTH_HAND = "6543.876.876.876"
WEST_HAND = "2.5432.5432.5432"

DEAL_N = f"N:{NORTH_HAND} {EAST_HAND} {SOUTH_HAND} {WEST_HAND}"

EMPTY_DEAL = "N:- - - -"


TWO_BOARD_PBN = f"""% PBN 2.1
[Event "Practice Set"]
[Site "Club"]
[Date "2024.01.01"]
[Board "1"]
[Dealer "N"]
[Vulnerable "NS"]
[Deal "{DEAL_N}"]
[BCFlags "1f"]
[Auction "N"]
2C Pass 2D Pass
{{North opens a strong two clubs.}}

[Event ""]
[Site ""]
[Date ""]
[Board "2"]
[Dealer "N"]
[Vulnerable "EW"]
[Deal "{DEAL_N}"]
[Score "NS 420"]
[BCFlags "1f"]
[Auction "N"]
2C Pass 2D Pass
{{North opens; EAST
and west pass.}}
"""


def pbn_game(
    number: int,
    *,
    dealer: str = "N",
    vul: str = "None",
    deal: str = DEAL_N,
    extra: Optional[List[str]] = None,
) -> str:
    """Build the text of one PBN game (no trailing blank line)."""
    lines = [
        '[Event ""]',
        '[Site ""]',
        '[Date ""]',
        f'[Board "{number}"]',
        f'[Dealer "{dealer}"]',
        f'[Vulnerable "{vul}"]',
        f'[Deal "{deal}"]',
    ]
    lines.extend(extra or [])
    return "\n".join(lines)


def pbn_file(*games: str) -> str:
    return "\n\n".join(games) + "\n"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def two_board_file(tmp_path: Path) -> Path:
    path = tmp_path / "practice.pbn"
    path.write_text(TWO_BOARD_PBN, encoding="utf-8")
    return path


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """
    Factory for a Board holding the standard test deal.

    Hands are built from the N/E/S/W constants above so tests can check
    exactly which hand moved where.
    """
    from bridge_wrangler.pbn_reader import parse_deal

    def _make(
        number: Optional[int] = 1,
        dealer: Optional[str] = "N",
        vulnerability: str = "None",
        tags: Optional[Dict[str, str]] = None,
    ) -> Board:
        _, hands = parse_deal(DEAL_N)
        return Board(
            number=number,
            dealer=dealer,
            vulnerability=vulnerability,
            hands=hands,
            tags=dict(tags or {}),
        )

    return _make
