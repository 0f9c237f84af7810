from __future__ import annotations

import logging

from app.crud.repository import Repository
from app.models.chapter_model import Chapter
from app.schemas.chapter_schema import ChapterCreate, ChapterUpdate
from app.services.association_rules import AssociationRules, CascadeResult

logger = logging.getLogger(__name__)


class ChapterService:
    """Business logic for chapters."""

    def __init__(self, repository: Repository, rules: AssociationRules | None = None):
        self.repository = repository
        self.rules = rules or AssociationRules(repository)

    def list_chapters(self) -> list[Chapter]:
        return self.repository.list(Chapter)

    def get_chapter(self, chapter_id: int) -> Chapter:
        return self.repository.get(Chapter, chapter_id)

    def create_chapter(self, payload: ChapterCreate) -> Chapter:
        chapter = self.repository.create(Chapter(name=payload.name, description=payload.description))
        logger.info("Chapitre %s créé (%s).", chapter.id, chapter.name)
        return chapter

    def update_chapter(self, chapter_id: int, payload: ChapterUpdate) -> Chapter:
        chapter = self.repository.get(Chapter, chapter_id)
        chapter.name = payload.name
        chapter.description = payload.description
        return self.repository.save(chapter)

    def delete_chapter(self, chapter_id: int) -> CascadeResult:
        return self.rules.delete_chapter_cascade(chapter_id)
