from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.crud.repository import Repository
from app.models.chapter_model import Chapter
from app.models.dialogue_model import Dialogue
from app.models.sentence_model import Sentence
from app.models.vocabulary_model import Vocabulary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CascadeResult:
    """Rows removed by a cascade delete, per table."""

    chapters: int = 0
    vocabularies: int = 0
    dialogues: int = 0
    sentences: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "chapters": self.chapters,
            "vocabularies": self.vocabularies,
            "dialogues": self.dialogues,
            "sentences": self.sentences,
        }


class AssociationRules:
    """Parent/child rules between chapters, vocabulary, dialogues and sentences.

    Children always go before their parent, and each cascade runs in a single
    transaction so a failure halfway leaves nothing half-deleted.
    """

    SENTENCE_ORDER = (Sentence.order.asc(), Sentence.id.asc())

    def __init__(self, repository: Repository):
        self.repository = repository

    def delete_chapter_cascade(self, chapter_id: int) -> CascadeResult:
        result = CascadeResult()
        dialogue_ids = select(Dialogue.id).where(Dialogue.chapter_id == chapter_id)

        with self.repository.atomic():
            result.sentences = self.repository.delete_where(Sentence, Sentence.dialogue_id.in_(dialogue_ids))
            result.dialogues = self.repository.delete_where(Dialogue, chapter_id=chapter_id)
            result.vocabularies = self.repository.delete_where(Vocabulary, chapter_id=chapter_id)
            result.chapters = self.repository.delete(Chapter, chapter_id)

        logger.info("Chapitre %s supprimé en cascade: %s", chapter_id, result.as_dict())
        return result

    def delete_dialogue_cascade(self, dialogue_id: int) -> CascadeResult:
        result = CascadeResult()
        with self.repository.atomic():
            result.sentences = self.repository.delete_where(Sentence, dialogue_id=dialogue_id)
            result.dialogues = self.repository.delete(Dialogue, dialogue_id)

        logger.info("Dialogue %s supprimé en cascade: %s", dialogue_id, result.as_dict())
        return result

    def list_sentences_ordered(self, dialogue_id: int) -> list[Sentence]:
        return self.repository.list(Sentence, dialogue_id=dialogue_id, order_by=self.SENTENCE_ORDER)

    def list_dialogues_with_sentences(self, chapter_id: int) -> list[Dialogue]:
        # ``Dialogue.sentences`` is declared with the same (order, id) ordering.
        return self.repository.list(
            Dialogue,
            chapter_id=chapter_id,
            options=(selectinload(Dialogue.sentences),),
        )
