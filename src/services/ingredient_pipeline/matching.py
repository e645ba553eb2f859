"""
Reference matching.

A candidate is first looked up by E-code, then by name through a pluggable
strategy. Every strategy checks for an exact (case-insensitive) name across
the whole collection before applying its looser rule, so a curated entry
with the exact name always wins over an earlier partial hit.
"""

import re
from abc import ABC, abstractmethod
from difflib import SequenceMatcher
from typing import Dict, List, Optional, Sequence, Tuple

from services.ingredient_pipeline.models import ReferenceEntry

IndexedReferences = Sequence[Tuple[str, ReferenceEntry]]

_WHITESPACE = re.compile(r"\s+")
_E_CODE = re.compile(r"^(?:e|ins)[\s\-]*(\d{3,4})\s*([a-z]?)$", re.IGNORECASE)


def normalize_name(name: str) -> str:
    return _WHITESPACE.sub(" ", name or "").strip().lower()


def normalize_e_code(text: str) -> Optional[str]:
    """Canonical form of an E-number ("e 150a" -> "E150A"), or None."""
    match = _E_CODE.match(normalize_name(text))
    if not match:
        return None
    digits, suffix = match.groups()
    return f"E{digits}{suffix.upper()}"


class MatchStrategy(ABC):
    name: str = ""

    def match(self, candidate: str, references: IndexedReferences) -> Optional[ReferenceEntry]:
        key = normalize_name(candidate)
        if not key:
            return None
        for ref_key, ref in references:
            if ref_key == key:
                return ref
        return self._loose_match(key, references)

    @abstractmethod
    def _loose_match(self, key: str, references: IndexedReferences) -> Optional[ReferenceEntry]:
        pass


class ExactMatchStrategy(MatchStrategy):
    name = "exact"

    def _loose_match(self, key, references):
        return None


class SubstringMatchStrategy(MatchStrategy):
    """Bidirectional containment, first hit in scan order."""

    name = "substring"

    def _loose_match(self, key, references):
        for ref_key, ref in references:
            if ref_key in key or key in ref_key:
                return ref
        return None


class TokenSetMatchStrategy(MatchStrategy):
    name = "token_set"

    def _loose_match(self, key, references):
        tokens = set(key.split())
        for ref_key, ref in references:
            if set(ref_key.split()) == tokens:
                return ref
        return None


class EditDistanceMatchStrategy(MatchStrategy):
    name = "edit_distance"

    def __init__(self, threshold: float = 0.85):
        self.threshold = threshold

    def _loose_match(self, key, references):
        best: Optional[ReferenceEntry] = None
        best_score = 0.0
        for ref_key, ref in references:
            score = SequenceMatcher(None, key, ref_key).ratio()
            if score >= self.threshold and score > best_score:
                best, best_score = ref, score
        return best


STRATEGIES = {
    ExactMatchStrategy.name: ExactMatchStrategy,
    SubstringMatchStrategy.name: SubstringMatchStrategy,
    TokenSetMatchStrategy.name: TokenSetMatchStrategy,
    EditDistanceMatchStrategy.name: EditDistanceMatchStrategy,
}


def get_match_strategy(name: str, similarity_threshold: float = 0.85) -> MatchStrategy:
    strategy_cls = STRATEGIES.get(name.lower())
    if strategy_cls is None:
        raise ValueError(f"Unknown match strategy: {name}")
    if strategy_cls is EditDistanceMatchStrategy:
        return EditDistanceMatchStrategy(similarity_threshold)
    return strategy_cls()


class ReferenceMatcher:
    def __init__(self, references: Sequence[ReferenceEntry], strategy: MatchStrategy):
        self.strategy = strategy
        self._indexed: List[Tuple[str, ReferenceEntry]] = [
            (normalize_name(ref.name), ref) for ref in references if normalize_name(ref.name)
        ]
        self._by_code: Dict[str, ReferenceEntry] = {}
        for ref in references:
            code = normalize_e_code(ref.code or "")
            if code:
                self._by_code.setdefault(code, ref)

    def match(self, candidate: str) -> Optional[ReferenceEntry]:
        code = normalize_e_code(candidate)
        if code and code in self._by_code:
            return self._by_code[code]
        return self.strategy.match(candidate, self._indexed)
