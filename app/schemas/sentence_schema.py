# Fichier: backend/app/schemas/sentence_schema.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class SentenceBase(BaseModel):
    speaker: str = ""
    chinese: str = ""
    pinyin: str = ""
    english: str = ""
    audio_url: str = ""
    order: int = 0


class SentenceCreate(SentenceBase):
    pass


class SentenceUpdate(SentenceBase):
    """Every field is replaced, including the ones left at their default."""


class SentenceOut(SentenceBase):
    id: int
    dialogue_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
