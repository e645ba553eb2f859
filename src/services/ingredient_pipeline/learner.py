"""
Knowledge learner.

Records ingredient names that were classified as Unknown into the candidate
store so a curator can review them later. Runs after the verdict is built
and never affects it: every failure is logged and reported, not raised.
"""

import asyncio
import logging
from typing import AbstractSet, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from models.domain import HalalStatus
from services.candidate_store import insert_candidate_if_absent
from services.errors import LearnerWriteError
from services.ingredient_pipeline.models import ClassifiedIngredient, LearnerReport
from services.ingredient_pipeline.quality import is_gibberish
from services.store_session import SessionFactory, store_session

logger = logging.getLogger(__name__)


def select_novel_names(
    ingredients: Iterable[ClassifiedIngredient],
    generic_terms: AbstractSet[str],
) -> List[str]:
    names: List[str] = []
    for ingredient in ingredients:
        if ingredient.status != HalalStatus.UNKNOWN:
            continue
        name = ingredient.name.strip().lower()
        if not name or name in generic_terms or is_gibberish(name):
            continue
        if name not in names:
            names.append(name)
    return names


def _record_candidate(name: str, session_factory: Optional[SessionFactory]) -> bool:
    try:
        with store_session(write=True, session_factory=session_factory) as db:
            return insert_candidate_if_absent(db, name)
    except SQLAlchemyError as exc:
        raise LearnerWriteError(name, exc) from exc


async def _learn_one(
    name: str,
    session_factory: Optional[SessionFactory],
    semaphore: asyncio.Semaphore,
) -> bool:
    async with semaphore:
        return await asyncio.to_thread(_record_candidate, name, session_factory)


def _build_report(names: List[str], results: list) -> LearnerReport:
    report = LearnerReport()
    for name, result in zip(names, results):
        if isinstance(result, Exception):
            logger.warning(f"Learner could not record '{name}': {result}")
            report.failed.append(name)
        elif result:
            report.inserted.append(name)
        else:
            report.existing.append(name)
    return report


async def learn_unknown_ingredients(
    ingredients: Iterable[ClassifiedIngredient],
    generic_terms: AbstractSet[str],
    session_factory: Optional[SessionFactory] = None,
    concurrency: int = 4,
) -> LearnerReport:
    names = select_novel_names(ingredients, generic_terms)
    if not names:
        return LearnerReport()
    semaphore = asyncio.Semaphore(max(1, concurrency))
    coros = [_learn_one(name, session_factory, semaphore) for name in names]
    results = await asyncio.gather(*coros, return_exceptions=True)
    report = _build_report(names, results)
    logger.info(
        f"Learner recorded {len(report.inserted)} new candidates "
        f"({len(report.existing)} already known, {len(report.failed)} failed)"
    )
    return report
