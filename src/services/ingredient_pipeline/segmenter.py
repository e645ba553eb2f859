"""
Ingredients block segmentation.

Cuts the ingredients declaration out of the full label text: everything
before the anchor token is dropped and the block ends at the nearest stop
token.
"""

import re
from typing import Iterable, Optional

from constants.rulebook import Rulebook

_ANCHOR_SEPARATOR = re.compile(r"\s*[:\-]?")


def _token_pattern(token: str) -> re.Pattern:
    words = [re.escape(w) for w in token.split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


def find_anchor_end(text: str, anchors: Iterable[str]) -> Optional[int]:
    """Index just past the earliest anchor (and its separator), or None."""
    best: Optional[re.Match] = None
    for anchor in anchors:
        match = _token_pattern(anchor).search(text)
        if match and (best is None or match.start() < best.start()):
            best = match
    if best is None:
        return None
    separator = _ANCHOR_SEPARATOR.match(text, best.end())
    return separator.end() if separator else best.end()


def find_stop_index(text: str, stop_tokens: Iterable[str], start: int = 0) -> int:
    earliest = len(text)
    for token in stop_tokens:
        match = _token_pattern(token).search(text, start)
        if match and match.start() < earliest:
            earliest = match.start()
    return earliest


def extract_ingredients_block(
    text: str,
    rulebook: Rulebook,
    require_anchor: bool = False,
) -> str:
    if not text:
        return ""
    start = find_anchor_end(text, rulebook.anchors)
    if start is None:
        if require_anchor:
            return ""
        start = 0
    end = find_stop_index(text, rulebook.stop_tokens, start)
    return text[start:end].strip()
