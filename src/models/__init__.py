from models.database import Base, SessionLocal, get_db, init_db
from models.domain import (
    CANDIDATE_SOURCE_AUTO_UPLOAD,
    CURATED_STATUSES,
    CandidateIngredient,
    HalalStatus,
    ReferenceIngredient,
)

__all__ = [
    "Base",
    "SessionLocal",
    "get_db",
    "init_db",
    "HalalStatus",
    "CURATED_STATUSES",
    "CANDIDATE_SOURCE_AUTO_UPLOAD",
    "ReferenceIngredient",
    "CandidateIngredient",
]
