from __future__ import annotations

from pydantic import BaseModel


class DeleteResult(BaseModel):
    message: str
    chapters: int = 0
    vocabularies: int = 0
    dialogues: int = 0
    sentences: int = 0
