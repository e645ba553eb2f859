import pytest
from sqlalchemy.exc import OperationalError

from constants.rulebook import load_rulebook
from models.domain import CandidateIngredient, HalalStatus
from services.ingredient_pipeline import learner
from services.ingredient_pipeline.learner import learn_unknown_ingredients, select_novel_names
from services.ingredient_pipeline.models import ClassifiedIngredient


def _unknown(name):
    return ClassifiedIngredient(name=name, status=HalalStatus.UNKNOWN)


@pytest.fixture
def generic_terms():
    return load_rulebook().generic_terms


def test_select_novel_names_filters_known_generic_and_noisy(generic_terms):
    ingredients = [
        _unknown("quinoa"),
        ClassifiedIngredient(name="gelatin", status=HalalStatus.CAUTION),
        ClassifiedIngredient(name="sugar", status=HalalStatus.OK),
        _unknown("vitamins"),
        _unknown("a" * 80),
        _unknown(""),
        _unknown("Quinoa"),
        _unknown("bovine"),
    ]
    assert select_novel_names(ingredients, generic_terms) == ["quinoa", "bovine"]


@pytest.mark.asyncio
async def test_learner_records_each_name_once(session_factory, generic_terms):
    ingredients = [_unknown("bovine"), _unknown("quinoa")]

    report = await learn_unknown_ingredients(
        ingredients, generic_terms, session_factory=session_factory, concurrency=2
    )
    assert sorted(report.inserted) == ["bovine", "quinoa"]

    again = await learn_unknown_ingredients(
        ingredients, generic_terms, session_factory=session_factory, concurrency=2
    )
    assert again.inserted == []
    assert sorted(again.existing) == ["bovine", "quinoa"]

    db = session_factory()
    try:
        names = sorted(row.name for row in db.query(CandidateIngredient).all())
    finally:
        db.close()
    assert names == ["bovine", "quinoa"]


@pytest.mark.asyncio
async def test_learner_with_nothing_to_record(session_factory, generic_terms):
    report = await learn_unknown_ingredients(
        [ClassifiedIngredient(name="sugar", status=HalalStatus.OK)],
        generic_terms,
        session_factory=session_factory,
    )
    assert report.inserted == report.existing == report.failed == []


@pytest.mark.asyncio
async def test_learner_failure_is_isolated_per_name(session_factory, generic_terms, monkeypatch):
    original = learner.insert_candidate_if_absent

    def flaky_insert(db, name):
        if name == "quinoa":
            raise OperationalError("insert", {}, Exception("disk I/O error"))
        return original(db, name)

    monkeypatch.setattr(learner, "insert_candidate_if_absent", flaky_insert)

    report = await learn_unknown_ingredients(
        [_unknown("quinoa"), _unknown("bovine")],
        generic_terms,
        session_factory=session_factory,
    )
    assert report.failed == ["quinoa"]
    assert report.inserted == ["bovine"]
