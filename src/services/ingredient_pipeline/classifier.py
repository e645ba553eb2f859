"""
Fallback keyword classifier for candidates without a reference match.
"""

from typing import Optional, Sequence

from constants.rulebook import KeywordRule
from models.domain import HalalStatus
from services.ingredient_pipeline.matching import ReferenceMatcher
from services.ingredient_pipeline.models import (
    SOURCE_REFERENCE,
    SOURCE_RULE,
    ClassifiedIngredient,
    IngredientCandidate,
)


def classify_by_rules(name: str, rules: Sequence[KeywordRule]) -> tuple[HalalStatus, str]:
    lowered = name.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.status, rule.description
    return HalalStatus.UNKNOWN, ""


def classify_candidate(
    candidate: IngredientCandidate,
    matcher: Optional[ReferenceMatcher],
    rules: Sequence[KeywordRule],
) -> ClassifiedIngredient:
    reference = matcher.match(candidate.name) if matcher else None
    if reference is not None:
        return ClassifiedIngredient(
            name=candidate.name,
            status=HalalStatus(reference.status),
            description=reference.description,
            nested=candidate.nested,
            source=SOURCE_REFERENCE,
        )
    status, description = classify_by_rules(candidate.name, rules)
    return ClassifiedIngredient(
        name=candidate.name,
        status=status,
        description=description,
        nested=candidate.nested,
        source=SOURCE_RULE,
    )
