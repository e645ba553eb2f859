from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.db_retry import commit_with_retry
from models.domain import CANDIDATE_SOURCE_AUTO_UPLOAD, CandidateIngredient, HalalStatus


def find_candidate(db: Session, name: str) -> Optional[CandidateIngredient]:
    return db.query(CandidateIngredient).filter(CandidateIngredient.name == name).first()


def insert_candidate_if_absent(db: Session, name: str) -> bool:
    """Record ``name`` unless it is already present. Returns True on insert.

    The unique constraint on ``name`` decides races: a concurrent writer that
    loses gets an IntegrityError, which means the row exists.
    """
    if find_candidate(db, name):
        return False
    db.add(
        CandidateIngredient(
            name=name,
            status=HalalStatus.UNKNOWN.value,
            source=CANDIDATE_SOURCE_AUTO_UPLOAD,
        )
    )
    try:
        commit_with_retry(db)
    except IntegrityError:
        db.rollback()
        return False
    return True


def list_candidates(db: Session, limit: int = 100) -> List[CandidateIngredient]:
    return db.query(CandidateIngredient).order_by(
        CandidateIngredient.created_at.desc(), CandidateIngredient.id.desc()
    ).limit(limit).all()
