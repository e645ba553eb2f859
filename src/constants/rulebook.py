"""Loader for the keyword data that drives segmentation, classification and learning."""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from models.domain import CURATED_STATUSES, HalalStatus

logger = logging.getLogger(__name__)

DEFAULT_RULEBOOK_PATH = Path(__file__).parent / "halal_rules.yaml"


@dataclass(frozen=True)
class KeywordRule:
    keywords: tuple[str, ...]
    status: HalalStatus
    description: str

    def matches(self, name: str) -> bool:
        return any(keyword in name for keyword in self.keywords)


@dataclass(frozen=True)
class Rulebook:
    anchors: tuple[str, ...]
    stop_tokens: tuple[str, ...]
    generic_terms: frozenset[str] = field(default_factory=frozenset)
    rules: tuple[KeywordRule, ...] = ()


def _lowered(values: Any) -> tuple[str, ...]:
    return tuple(str(v).strip().lower() for v in values or [] if str(v).strip())


def _parse_rule(raw: Dict[str, Any]) -> KeywordRule:
    status = HalalStatus(raw["status"])
    if status not in CURATED_STATUSES:
        raise ValueError(f"Rule status must be one of OK/Caution/Avoid, got {status.value}")
    keywords = _lowered(raw.get("keywords"))
    if not keywords:
        raise ValueError("Rule without keywords")
    return KeywordRule(keywords, status, str(raw.get("description", "")))


def parse_rulebook(data: Dict[str, Any]) -> Rulebook:
    anchors = _lowered(data.get("anchors"))
    if not anchors:
        raise ValueError("Rulebook needs at least one anchor token")
    return Rulebook(
        anchors=anchors,
        stop_tokens=_lowered(data.get("stop_tokens")),
        generic_terms=frozenset(_lowered(data.get("generic_terms"))),
        rules=tuple(_parse_rule(r) for r in data.get("rules") or []),
    )


@lru_cache(maxsize=8)
def _load_rulebook_file(path: str) -> Rulebook:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    rulebook = parse_rulebook(data)
    logger.info(f"Loaded rulebook from {path} ({len(rulebook.rules)} rules)")
    return rulebook


def load_rulebook(path: Optional[str] = None) -> Rulebook:
    if path is None:
        from config import settings

        path = settings.rulebook_path
    return _load_rulebook_file(str(path or DEFAULT_RULEBOOK_PATH))


def reload_rulebook() -> None:
    _load_rulebook_file.cache_clear()
