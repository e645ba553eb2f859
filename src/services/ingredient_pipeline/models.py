"""
Data models for the ingredient classification pipeline.

These are the in-memory shapes passed between the pipeline stages. Persistent
rows live in ``models.domain``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from models.domain import HalalStatus

SOURCE_REFERENCE = "reference"
SOURCE_RULE = "rule"


@dataclass(frozen=True)
class IngredientCandidate:
    """A normalized ingredient name pulled out of label text."""
    name: str
    nested: bool = False


@dataclass(frozen=True)
class ReferenceEntry:
    """Detached snapshot of a curated reference ingredient."""
    name: str
    status: HalalStatus
    description: str = ""
    code: Optional[str] = None
    category: str = ""


@dataclass(frozen=True)
class ClassifiedIngredient:
    name: str
    status: HalalStatus
    description: str = ""
    nested: bool = field(default=False, compare=False)
    source: str = field(default=SOURCE_RULE, compare=False)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "status": self.status.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class ProductVerdict:
    ingredients: List[ClassifiedIngredient]
    overall_status: HalalStatus

    def to_dict(self) -> dict:
        return {
            "ingredients": [i.to_dict() for i in self.ingredients],
            "overallStatus": self.overall_status.value,
        }


@dataclass
class LearnerReport:
    """Outcome of one learner run, for logging and tests."""
    inserted: List[str] = field(default_factory=list)
    existing: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
