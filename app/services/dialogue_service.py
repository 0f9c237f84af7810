from __future__ import annotations

from app.crud.repository import Repository
from app.models.chapter_model import Chapter
from app.models.dialogue_model import Dialogue
from app.schemas.dialogue_schema import DialogueCreate, DialogueUpdate
from app.services.association_rules import AssociationRules, CascadeResult


class DialogueService:
    """Business logic for dialogues. Sentences are handled by ``SentenceService``."""

    def __init__(self, repository: Repository, rules: AssociationRules | None = None):
        self.repository = repository
        self.rules = rules or AssociationRules(repository)

    def list_dialogues(self, chapter_id: int) -> list[Dialogue]:
        """Dialogues of a chapter, each with its ordered sentences."""
        return self.rules.list_dialogues_with_sentences(chapter_id)

    def get_dialogue(self, dialogue_id: int) -> Dialogue:
        return self.repository.get(Dialogue, dialogue_id)

    def create_dialogue(self, chapter_id: int, payload: DialogueCreate) -> Dialogue:
        self.repository.get(Chapter, chapter_id)
        dialogue = Dialogue(
            chapter_id=chapter_id,
            title=payload.title,
            description=payload.description,
        )
        return self.repository.create(dialogue)

    def update_dialogue(self, dialogue_id: int, payload: DialogueUpdate) -> Dialogue:
        dialogue = self.repository.get(Dialogue, dialogue_id)
        dialogue.title = payload.title
        dialogue.description = payload.description
        return self.repository.save(dialogue)

    def delete_dialogue(self, dialogue_id: int) -> CascadeResult:
        return self.rules.delete_dialogue_cascade(dialogue_id)
