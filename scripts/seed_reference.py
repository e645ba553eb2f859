"""Load curated reference ingredients from a YAML file into the database."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models import HalalStatus, ReferenceIngredient, SessionLocal, init_db
from models.db_retry import commit_with_retry

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "reference_ingredients.yaml"


def _load_entries(path: Path) -> list[dict]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data.get("ingredients") or []


def _existing_keys(db) -> set[tuple[str, str]]:
    rows = db.query(ReferenceIngredient.name, ReferenceIngredient.code).all()
    return {((name or "").lower(), (code or "").upper()) for name, code in rows}


def seed(path: Path, replace: bool = False) -> int:
    init_db()
    entries = _load_entries(path)
    db = SessionLocal()
    try:
        if replace:
            deleted = db.query(ReferenceIngredient).delete()
            logger.info(f"Removed {deleted} existing reference ingredients")
        known = set() if replace else _existing_keys(db)
        added = 0
        for entry in entries:
            status = HalalStatus(entry["status"])
            key = (entry["name"].lower(), (entry.get("code") or "").upper())
            if key in known:
                continue
            db.add(
                ReferenceIngredient(
                    name=entry["name"],
                    code=entry.get("code"),
                    category=entry.get("category", ""),
                    status=status.value,
                    description=entry.get("description", ""),
                )
            )
            known.add(key)
            added += 1
        commit_with_retry(db)
        return added
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", nargs="?", type=Path, default=DEFAULT_SEED_FILE)
    parser.add_argument("--replace", action="store_true", help="Delete existing entries first")
    args = parser.parse_args()

    added = seed(args.path, replace=args.replace)
    logger.info(f"Added {added} reference ingredients from {args.path}")


if __name__ == "__main__":
    main()
