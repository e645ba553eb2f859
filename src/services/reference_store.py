import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.db_retry import read_with_retry
from models.domain import CURATED_STATUSES, HalalStatus, ReferenceIngredient
from services.errors import ReferenceStoreError
from services.ingredient_pipeline.matching import normalize_e_code
from services.ingredient_pipeline.models import ReferenceEntry

logger = logging.getLogger(__name__)


def _curated_status(value: str) -> Optional[HalalStatus]:
    try:
        status = HalalStatus(value)
    except ValueError:
        return None
    return status if status in CURATED_STATUSES else None


def _to_entry(row: ReferenceIngredient) -> Optional[ReferenceEntry]:
    status = _curated_status(row.status)
    if status is None:
        logger.warning(f"Skipping reference ingredient {row.id} with invalid status '{row.status}'")
        return None
    return ReferenceEntry(
        name=row.name or "",
        status=status,
        description=row.description or "",
        code=row.code,
        category=row.category or "",
    )


def _all_rows(db: Session) -> List[ReferenceIngredient]:
    return db.query(ReferenceIngredient).order_by(ReferenceIngredient.id.asc()).all()


def load_reference_entries(db: Session) -> List[ReferenceEntry]:
    """Snapshot the whole reference collection in scan order (ascending id)."""
    try:
        rows = read_with_retry(db, _all_rows)
    except SQLAlchemyError as exc:
        raise ReferenceStoreError(f"Reference store query failed: {exc}") from exc
    entries = [_to_entry(row) for row in rows]
    return [entry for entry in entries if entry is not None]


def _search_condition(q: str):
    pattern = q.strip()
    return or_(
        ReferenceIngredient.name.icontains(pattern, autoescape=True),
        ReferenceIngredient.code.icontains(pattern, autoescape=True),
        ReferenceIngredient.category.icontains(pattern, autoescape=True),
    )


def list_reference_ingredients(
    db: Session,
    status: Optional[str] = None,
    category: Optional[str] = None,
    q: Optional[str] = None,
) -> List[ReferenceIngredient]:
    """Filter by exact status/category and a case-insensitive search over name, code and category."""
    query = db.query(ReferenceIngredient)
    if status:
        query = query.filter(ReferenceIngredient.status == status)
    if category:
        query = query.filter(ReferenceIngredient.category == category)
    if q and q.strip():
        query = query.filter(_search_condition(q))
    return query.order_by(ReferenceIngredient.name.asc(), ReferenceIngredient.id.asc()).all()


def find_reference_by_code(db: Session, code: str) -> Optional[ReferenceIngredient]:
    wanted = normalize_e_code(code)
    if not wanted:
        return None
    rows = db.query(ReferenceIngredient).filter(
        ReferenceIngredient.code.isnot(None)
    ).order_by(ReferenceIngredient.id.asc()).all()
    for row in rows:
        if normalize_e_code(row.code or "") == wanted:
            return row
    return None
