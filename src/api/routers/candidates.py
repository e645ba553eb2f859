from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from models import CandidateIngredient, get_db
from models.schemas import CandidateIngredientResponse
from services.candidate_store import list_candidates

router = APIRouter()


@router.get("", response_model=List[CandidateIngredientResponse])
async def list_candidate_ingredients(
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> List[CandidateIngredient]:
    """List automatically recorded ingredient names awaiting curation, newest first."""
    return list_candidates(db, limit=limit)
