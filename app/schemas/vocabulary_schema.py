# Fichier: backend/app/schemas/vocabulary_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class VocabularyBase(BaseModel):
    chinese: str = Field(..., min_length=1, max_length=255)
    pinyin: str = ""
    meaning: str = ""
    image_url: str = ""


class VocabularyCreate(VocabularyBase):
    chapter_id: int = Field(..., gt=0)


class VocabularyBatchItem(VocabularyBase):
    """One entry of a batch import; the chapter comes from the URL."""


class VocabularyUpdate(BaseModel):
    """Partial update: ``None`` means "keep the stored value"."""

    chinese: Optional[str] = Field(None, min_length=1, max_length=255)
    pinyin: Optional[str] = None
    meaning: Optional[str] = None
    image_url: Optional[str] = None


class VocabularyOut(BaseModel):
    id: int
    chinese: str
    pinyin: str
    meaning: str
    image_url: str
    chapter_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
