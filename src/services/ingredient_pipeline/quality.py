"""
Heuristics that tell OCR noise apart from real ingredient names.
"""

import re
from typing import Iterable

MAX_CANDIDATE_LENGTH = 60
MAX_CANDIDATE_WORDS = 6

_UNEXPECTED_CHAR = re.compile(r"[^a-z0-9\s\-.,()]", re.IGNORECASE)
# Two letter runs glued by something that is neither a space nor a hyphen,
# e.g. "wheat1flour" or "sugar|salts".
_MERGED_TOKENS = re.compile(r"[a-z]{5,}[^a-z\s\-]+[a-z]{5,}", re.IGNORECASE)


def is_gibberish(candidate: str) -> bool:
    if len(candidate) > MAX_CANDIDATE_LENGTH:
        return True
    if len(candidate.split()) > MAX_CANDIDATE_WORDS:
        return True
    if _UNEXPECTED_CHAR.search(candidate) and "e" not in candidate.lower():
        return True
    return bool(_MERGED_TOKENS.search(candidate))


def gibberish_ratio(candidates: Iterable[str]) -> float:
    names = list(candidates)
    if not names:
        return 0.0
    noisy = sum(1 for name in names if is_gibberish(name))
    return noisy / len(names)


def is_unusable(candidates: Iterable[str], threshold: float) -> bool:
    names = list(candidates)
    if not names:
        return True
    return gibberish_ratio(names) > threshold
