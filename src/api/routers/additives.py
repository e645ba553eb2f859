"""API router for browsing the curated reference ingredients."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from models import ReferenceIngredient, get_db
from models.schemas import ReferenceIngredientResponse
from services.reference_store import find_reference_by_code, list_reference_ingredients

router = APIRouter()


@router.get("", response_model=List[ReferenceIngredientResponse])
async def list_additives(
    status: Optional[str] = None,
    category: Optional[str] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db),
) -> List[ReferenceIngredient]:
    """
    List reference ingredients, optionally filtered.

    Args:
        status: Only entries with this halal status (OK, Caution, Avoid)
        category: Only entries in this category
        q: Case-insensitive text matched against name, E-code and category
        db: Database session

    Returns:
        Matching reference ingredients ordered by name
    """
    return list_reference_ingredients(db, status=status, category=category, q=q)


@router.get("/{code}", response_model=ReferenceIngredientResponse)
async def get_additive_by_code(
    code: str,
    db: Session = Depends(get_db),
) -> ReferenceIngredient:
    """Look up a reference ingredient by its E-code (e.g. E471)."""
    additive = find_reference_by_code(db, code)
    if not additive:
        raise HTTPException(status_code=404, detail=f"No additive found with code '{code}'")
    return additive
