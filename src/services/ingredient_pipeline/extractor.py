"""
Candidate extraction from an ingredients block.

Two passes run over the block: a nested pass that reads the contents of
parenthesized groups (sub-ingredients of a compound ingredient, at any depth)
and a flat pass over what remains once those groups are removed.
"""

import re
from typing import Dict, List, Tuple

from services.ingredient_pipeline.models import IngredientCandidate

_NESTED_SPLIT = re.compile(r",|&|\band\b", re.IGNORECASE)
_AND_WORD = re.compile(r"\band\b", re.IGNORECASE)
_DISALLOWED = re.compile(r"[^a-zA-Z0-9,.\s]")
_WHITESPACE = re.compile(r"\s+")


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _dedupe_words(name: str) -> str:
    # OCR frequently repeats words ("sugar sugar"); keep the first occurrence.
    return " ".join(dict.fromkeys(name.split()))


def split_groups(block: str) -> Tuple[str, List[str]]:
    """Separate top-level text from the contents of parenthesized groups.

    Groups are returned in the order they close, so inner groups come before
    the group that contains them; a closed group leaves a space behind in its
    parent. An unclosed ``(`` becomes a comma and its text stays with the
    parent. A stray ``)`` is dropped.
    """
    stack: List[List[str]] = [[]]
    groups: List[str] = []
    for char in block:
        if char == "(":
            stack.append([])
        elif char == ")":
            if len(stack) == 1:
                stack[0].append(" ")
                continue
            groups.append("".join(stack.pop()))
            stack[-1].append(" ")
        else:
            stack[-1].append(char)
    while len(stack) > 1:
        unclosed = "".join(stack.pop())
        stack[-1].append(", " + unclosed)
    return "".join(stack[0]), groups


def nested_candidates(block: str) -> List[str]:
    _, groups = split_groups(block)
    names: List[str] = []
    for group in groups:
        for part in _NESTED_SPLIT.split(group):
            name = _collapse_whitespace(part).lower()
            if name:
                names.append(name)
    return names


def _normalize_flat_token(token: str) -> str:
    name = token.strip().lower().rstrip(".").strip()
    return _dedupe_words(name)


def flat_candidates(block: str) -> List[str]:
    text, _ = split_groups(block)
    text = text.replace("\n", " ").replace("&", ",")
    text = _DISALLOWED.sub("", text)
    text = _AND_WORD.sub(",", text)
    text = _WHITESPACE.sub(" ", text)
    names = (_normalize_flat_token(token) for token in text.split(","))
    return [name for name in names if name]


def extract_candidates(block: str) -> List[IngredientCandidate]:
    """Union of flat and nested candidates, flat first, unique by name."""
    if not block:
        return []
    seen: Dict[str, IngredientCandidate] = {}
    for name in flat_candidates(block):
        seen.setdefault(name, IngredientCandidate(name=name, nested=False))
    for name in nested_candidates(block):
        seen.setdefault(name, IngredientCandidate(name=name, nested=True))
    return list(seen.values())
