# bridge_wrangler/commentary.py
#
# Rotation of compass-direction words inside free-text commentary.
#
# Replacement words are themselves direction words, so rewriting in place
# would rotate some words twice. Two phases instead:
#   1) each direction word -> placeholder (direction index, case class)
#   2) each placeholder -> rotated direction word in the recorded case
from __future__ import annotations

import re
from typing import List

DIRECTION_WORDS: List[str] = ["North", "East", "South", "West"]

_WORD_PATTERNS = [
    re.compile(rf"\b{word}\b", re.IGNORECASE) for word in DIRECTION_WORDS
]

# NUL never appears in PBN text, so placeholders cannot match a word.
_PLACEHOLDER_RE = re.compile(r"\x00DIR([0-3])([ULT])\x00")


def _case_class(matched: str) -> str:
    if matched[0].isupper():
        return "U" if matched.isupper() else "T"
    return "L"


def _render(word: str, case_class: str) -> str:
    if case_class == "U":
        return word.upper()
    if case_class == "L":
        return word.lower()
    return word


def rotate_commentary(text: str, rotation: int) -> str:
    """
    Rotate every whole-word direction name in `text` by `rotation`
    clockwise quarter-turns, keeping each word's case (NORTH / North /
    north). Rotation 0 returns the text unchanged.
    """
    rotation %= 4
    if rotation == 0:
        return text

    result = text
    for idx, pattern in enumerate(_WORD_PATTERNS):
        result = pattern.sub(
            lambda m, idx=idx: f"\x00DIR{idx}{_case_class(m.group(0))}\x00",
            result,
        )

    def _final(m: re.Match) -> str:
        new_idx = (int(m.group(1)) + rotation) % 4
        return _render(DIRECTION_WORDS[new_idx], m.group(2))

    return _PLACEHOLDER_RE.sub(_final, result)
