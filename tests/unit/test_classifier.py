import pytest

from constants.rulebook import load_rulebook
from models.domain import HalalStatus
from services.ingredient_pipeline.classifier import classify_by_rules, classify_candidate
from services.ingredient_pipeline.matching import ReferenceMatcher, SubstringMatchStrategy
from services.ingredient_pipeline.models import (
    SOURCE_REFERENCE,
    SOURCE_RULE,
    IngredientCandidate,
    ReferenceEntry,
)


@pytest.fixture
def rules():
    return load_rulebook().rules


@pytest.mark.parametrize(
    "name,status,description",
    [
        ("pork fat", HalalStatus.AVOID, "Contains swine or swine-derived products."),
        ("lard", HalalStatus.AVOID, "Contains swine or swine-derived products."),
        ("white wine vinegar", HalalStatus.AVOID, "Contains intoxicants."),
        ("dried blood", HalalStatus.AVOID, "Contains blood or dead animals not slaughtered Islamically."),
        ("gelatin", HalalStatus.CAUTION, "Gelatin may be derived from haram sources."),
        ("chicken stock", HalalStatus.CAUTION, "Contains meat; halal status depends on slaughter method."),
        ("rice flour", HalalStatus.UNKNOWN, ""),
    ],
)
def test_classify_by_rules(rules, name, status, description):
    assert classify_by_rules(name, rules) == (status, description)


def test_first_matching_rule_wins(rules):
    # Both the swine rule and the meat rule apply; the swine rule is listed first.
    status, description = classify_by_rules("pork meat", rules)
    assert status == HalalStatus.AVOID
    assert "swine" in description


def test_rule_keywords_match_as_substrings(rules):
    # "rum" inside "drumstick" counts as a hit.
    status, _ = classify_by_rules("chicken drumstick", rules)
    assert status == HalalStatus.AVOID


def test_rule_match_ignores_case(rules):
    assert classify_by_rules("BACON bits", rules)[0] == HalalStatus.AVOID


def test_reference_match_takes_priority_over_rules(rules):
    matcher = ReferenceMatcher(
        [ReferenceEntry("Beef Gelatin (Halal)", HalalStatus.OK, "Certified halal bovine gelatin")],
        SubstringMatchStrategy(),
    )
    result = classify_candidate(IngredientCandidate("beef gelatin (halal)"), matcher, rules)
    assert result.status == HalalStatus.OK
    assert result.description == "Certified halal bovine gelatin"
    assert result.source == SOURCE_REFERENCE


def test_rules_apply_without_reference_match(rules):
    matcher = ReferenceMatcher([ReferenceEntry("Sugar", HalalStatus.OK)], SubstringMatchStrategy())
    result = classify_candidate(IngredientCandidate("gelatin", nested=True), matcher, rules)
    assert result.status == HalalStatus.CAUTION
    assert result.nested is True
    assert result.source == SOURCE_RULE


def test_classify_candidate_without_matcher(rules):
    result = classify_candidate(IngredientCandidate("quinoa"), None, rules)
    assert result.status == HalalStatus.UNKNOWN
    assert result.description == ""


def test_gelatin_rule_precedes_meat_rule(rules):
    status, description = classify_by_rules("beef gelatin", rules)
    assert status == HalalStatus.CAUTION
    assert description == "Gelatin may be derived from haram sources."
