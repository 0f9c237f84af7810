# Fichier: backend/app/schemas/chapter_schema.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ChapterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class ChapterUpdate(BaseModel):
    """Whole new value for the editable fields: an omitted field is cleared."""

    name: str = Field("", max_length=255)
    description: str = ""


class ChapterOut(BaseModel):
    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
