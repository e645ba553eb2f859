from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from models.domain import HalalStatus


class ScanRequest(BaseModel):
    image: Any = Field(default=None, description="Base64-encoded image bytes")


class ClassifiedIngredientResponse(BaseModel):
    name: str
    status: HalalStatus
    description: str


class ScanResponse(BaseModel):
    ingredients: List[ClassifiedIngredientResponse]
    overallStatus: HalalStatus


class ErrorResponse(BaseModel):
    error: str


class ReferenceIngredientResponse(BaseModel):
    id: int
    name: str
    code: Optional[str]
    category: str
    status: str
    description: str

    model_config = {"from_attributes": True}


class CandidateIngredientResponse(BaseModel):
    id: int
    name: str
    status: str
    source: str
    created_at: datetime

    model_config = {"from_attributes": True}
