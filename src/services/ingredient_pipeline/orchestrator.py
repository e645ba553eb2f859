"""
Pipeline orchestration.

label text -> segmenter -> extractor -> quality gate -> matcher / rule
classifier -> aggregator. The learner is a separate entry point that the API
schedules after the verdict has been produced.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from config import settings
from constants.rulebook import Rulebook, load_rulebook
from services.errors import CollaboratorError, LowQualityInputError
from services.ingredient_pipeline.aggregator import aggregate_status
from services.ingredient_pipeline.classifier import classify_candidate
from services.ingredient_pipeline.extractor import extract_candidates
from services.ingredient_pipeline.learner import learn_unknown_ingredients
from services.ingredient_pipeline.matching import (
    MatchStrategy,
    ReferenceMatcher,
    get_match_strategy,
)
from services.ingredient_pipeline.models import (
    IngredientCandidate,
    LearnerReport,
    ProductVerdict,
    ReferenceEntry,
)
from services.ingredient_pipeline.quality import gibberish_ratio, is_unusable
from services.ingredient_pipeline.segmenter import extract_ingredients_block
from services.store_session import SessionFactory, store_session
from services.text_extraction import BaseTextExtractor

logger = logging.getLogger(__name__)


def default_match_strategy() -> MatchStrategy:
    return get_match_strategy(settings.match_strategy, settings.match_similarity_threshold)


def prepare_candidates(
    text: str,
    rulebook: Rulebook,
    require_anchor: Optional[bool] = None,
    gibberish_threshold: Optional[float] = None,
) -> List[IngredientCandidate]:
    """Segment and extract candidates; raise LowQualityInputError on noisy input."""
    if require_anchor is None:
        require_anchor = settings.segmenter_require_anchor
    if gibberish_threshold is None:
        gibberish_threshold = settings.gibberish_ratio_threshold

    block = extract_ingredients_block(text, rulebook, require_anchor=require_anchor)
    candidates = extract_candidates(block)
    names = [c.name for c in candidates]
    if is_unusable(names, gibberish_threshold):
        ratio = gibberish_ratio(names)
        logger.info(
            f"Rejecting scan: {len(names)} candidates, gibberish ratio {ratio:.2f}"
        )
        raise LowQualityInputError(ratio)
    return candidates


def classify_candidates(
    candidates: Sequence[IngredientCandidate],
    references: Sequence[ReferenceEntry],
    rulebook: Rulebook,
    strategy: Optional[MatchStrategy] = None,
) -> ProductVerdict:
    matcher = ReferenceMatcher(references, strategy or default_match_strategy())
    ingredients = [classify_candidate(c, matcher, rulebook.rules) for c in candidates]
    overall = aggregate_status(i.status for i in ingredients)
    return ProductVerdict(ingredients=ingredients, overall_status=overall)


def classify_label_text(
    text: str,
    references: Sequence[ReferenceEntry],
    rulebook: Optional[Rulebook] = None,
    strategy: Optional[MatchStrategy] = None,
    require_anchor: Optional[bool] = None,
) -> ProductVerdict:
    rulebook = rulebook or load_rulebook()
    candidates = prepare_candidates(text, rulebook, require_anchor=require_anchor)
    return classify_candidates(candidates, references, rulebook, strategy)


def load_references(session_factory: Optional[SessionFactory] = None) -> List[ReferenceEntry]:
    from services.reference_store import load_reference_entries

    with store_session(session_factory=session_factory) as db:
        return load_reference_entries(db)


async def _scan(
    image: bytes,
    extractor: BaseTextExtractor,
    rulebook: Rulebook,
    session_factory: Optional[SessionFactory],
    strategy: Optional[MatchStrategy],
) -> ProductVerdict:
    text = await extractor.extract_text(image)
    candidates = prepare_candidates(text, rulebook)
    references = await asyncio.to_thread(load_references, session_factory)
    return classify_candidates(candidates, references, rulebook, strategy)


async def scan_image(
    image: bytes,
    extractor: BaseTextExtractor,
    session_factory: Optional[SessionFactory] = None,
    rulebook: Optional[Rulebook] = None,
    strategy: Optional[MatchStrategy] = None,
    timeout: Optional[float] = None,
) -> ProductVerdict:
    budget = timeout if timeout is not None else settings.scan_timeout_seconds
    try:
        return await asyncio.wait_for(
            _scan(image, extractor, rulebook or load_rulebook(), session_factory, strategy),
            timeout=budget,
        )
    except asyncio.TimeoutError as exc:
        raise CollaboratorError(f"Scan did not finish within {budget}s") from exc


async def learn_from_verdict(
    verdict: ProductVerdict,
    session_factory: Optional[SessionFactory] = None,
    rulebook: Optional[Rulebook] = None,
    concurrency: Optional[int] = None,
) -> LearnerReport:
    rulebook = rulebook or load_rulebook()
    try:
        return await learn_unknown_ingredients(
            verdict.ingredients,
            rulebook.generic_terms,
            session_factory=session_factory,
            concurrency=concurrency or settings.learner_concurrency,
        )
    except Exception:
        logger.exception("Learner run failed; verdict already delivered")
        return LearnerReport()
