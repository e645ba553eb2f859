import pytest
from sqlalchemy.exc import OperationalError

from models.domain import HalalStatus, ReferenceIngredient
from services import reference_store
from services.errors import ReferenceStoreError
from services.reference_store import (
    find_reference_by_code,
    list_reference_ingredients,
    load_reference_entries,
)


def test_load_reference_entries_keeps_insertion_order(db_session, add_reference):
    add_reference("Sugar", "OK")
    add_reference("Gelatin", "Avoid", "Porcine", category="thickener")
    add_reference("Sodium Benzoate", "Caution", code="E211", category="preservative")

    entries = load_reference_entries(db_session)

    assert [e.name for e in entries] == ["Sugar", "Gelatin", "Sodium Benzoate"]
    assert entries[1].status == HalalStatus.AVOID
    assert entries[1].description == "Porcine"
    assert entries[2].code == "E211"


def test_load_reference_entries_skips_invalid_status(db_session, add_reference):
    add_reference("Mystery", "Maybe")
    add_reference("Salt", "OK")

    assert [e.name for e in load_reference_entries(db_session)] == ["Salt"]


def test_load_reference_entries_wraps_store_failures(db_session, monkeypatch):
    def broken(db):
        raise OperationalError("select", {}, Exception("no such table: reference_ingredients"))

    monkeypatch.setattr(reference_store, "_all_rows", broken)

    with pytest.raises(ReferenceStoreError) as exc_info:
        load_reference_entries(db_session)
    assert exc_info.value.status_code == 500


def test_list_reference_ingredients_filters(db_session, add_reference):
    add_reference("Sodium Benzoate", "Caution", code="E211", category="preservative")
    add_reference("Citric Acid", "OK", code="E330", category="acidity regulator")
    add_reference("Potassium Sorbate", "OK", code="E202", category="preservative")

    preservatives = list_reference_ingredients(db_session, category="preservative")
    assert [r.name for r in preservatives] == ["Potassium Sorbate", "Sodium Benzoate"]

    ok_preservatives = list_reference_ingredients(db_session, status="OK", category="preservative")
    assert [r.name for r in ok_preservatives] == ["Potassium Sorbate"]


def test_find_reference_by_code_normalizes(db_session, add_reference):
    add_reference("Caramel Colour", "OK", code="E150a")

    assert find_reference_by_code(db_session, "e150a").name == "Caramel Colour"
    assert find_reference_by_code(db_session, "E 150A").name == "Caramel Colour"
    assert find_reference_by_code(db_session, "E999") is None
    assert find_reference_by_code(db_session, "sugar") is None


def test_reference_rows_default_optional_fields(db_session):
    db_session.add(ReferenceIngredient(name="Water", status="OK"))
    db_session.commit()
    row = db_session.query(ReferenceIngredient).one()
    assert row.category == ""
    assert row.description == ""
    assert row.code is None


def test_load_reference_entries_skips_unknown_status(db_session, add_reference):
    add_reference("Bovine Extract", "Unknown")
    add_reference("Salt", "OK")

    assert [e.name for e in load_reference_entries(db_session)] == ["Salt"]


def test_list_reference_ingredients_text_search(db_session, add_reference):
    add_reference("Sodium Benzoate", "Caution", code="E211", category="preservative")
    add_reference("Cochineal", "Avoid", code="E120", category="colour")
    add_reference("Water", "OK")

    assert [r.name for r in list_reference_ingredients(db_session, q="BENZO")] == ["Sodium Benzoate"]
    assert [r.name for r in list_reference_ingredients(db_session, q="e12")] == ["Cochineal"]
    assert [r.name for r in list_reference_ingredients(db_session, q="colo")] == ["Cochineal"]
    assert len(list_reference_ingredients(db_session, q="  ")) == 3
    assert list_reference_ingredients(db_session, q="%") == []
