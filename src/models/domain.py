import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class HalalStatus(str, enum.Enum):
    OK = "OK"
    CAUTION = "Caution"
    AVOID = "Avoid"
    UNKNOWN = "Unknown"


CURATED_STATUSES = (HalalStatus.OK, HalalStatus.CAUTION, HalalStatus.AVOID)

CANDIDATE_SOURCE_AUTO_UPLOAD = "auto-upload"


class ReferenceIngredient(Base):
    __tablename__ = "reference_ingredients"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class CandidateIngredient(Base):
    __tablename__ = "candidate_ingredients"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=HalalStatus.UNKNOWN.value
    )
    source: Mapped[str] = mapped_column(
        String(50), nullable=False, default=CANDIDATE_SOURCE_AUTO_UPLOAD
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
