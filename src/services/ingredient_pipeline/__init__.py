"""
Halal ingredient classification pipeline.

Turns OCR label text into per-ingredient halal statuses and one product
verdict, and feeds unknown ingredient names back into the candidate store.
"""

from services.ingredient_pipeline.aggregator import aggregate_status
from services.ingredient_pipeline.classifier import classify_by_rules, classify_candidate
from services.ingredient_pipeline.extractor import extract_candidates
from services.ingredient_pipeline.learner import learn_unknown_ingredients, select_novel_names
from services.ingredient_pipeline.matching import (
    EditDistanceMatchStrategy,
    ExactMatchStrategy,
    MatchStrategy,
    ReferenceMatcher,
    SubstringMatchStrategy,
    TokenSetMatchStrategy,
    get_match_strategy,
)
from services.ingredient_pipeline.models import (
    ClassifiedIngredient,
    IngredientCandidate,
    LearnerReport,
    ProductVerdict,
    ReferenceEntry,
)
from services.ingredient_pipeline.orchestrator import (
    classify_candidates,
    classify_label_text,
    learn_from_verdict,
    prepare_candidates,
    scan_image,
)
from services.ingredient_pipeline.quality import gibberish_ratio, is_gibberish
from services.ingredient_pipeline.segmenter import extract_ingredients_block

__all__ = [
    # Data models
    "ClassifiedIngredient",
    "IngredientCandidate",
    "LearnerReport",
    "ProductVerdict",
    "ReferenceEntry",

    # Stages
    "extract_ingredients_block",
    "extract_candidates",
    "is_gibberish",
    "gibberish_ratio",
    "ReferenceMatcher",
    "classify_by_rules",
    "classify_candidate",
    "aggregate_status",
    "select_novel_names",
    "learn_unknown_ingredients",

    # Matching strategies
    "MatchStrategy",
    "ExactMatchStrategy",
    "SubstringMatchStrategy",
    "TokenSetMatchStrategy",
    "EditDistanceMatchStrategy",
    "get_match_strategy",

    # Entry points
    "prepare_candidates",
    "classify_candidates",
    "classify_label_text",
    "scan_image",
    "learn_from_verdict",
]
