# Fichier: backend/app/schemas/dialogue_schema.py
from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from .sentence_schema import SentenceOut


class DialogueCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class DialogueUpdate(BaseModel):
    """Full replace of title and description, like ``ChapterUpdate``."""

    title: str = Field("", max_length=255)
    description: str = ""


class DialogueOut(BaseModel):
    id: int
    chapter_id: int
    title: str
    description: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DialogueWithSentences(DialogueOut):
    sentences: List[SentenceOut] = []
