from __future__ import annotations

from app.crud.repository import Repository
from app.models.dialogue_model import Dialogue
from app.models.sentence_model import Sentence
from app.schemas.sentence_schema import SentenceCreate, SentenceUpdate
from app.services.association_rules import AssociationRules

_REPLACED_FIELDS = ("speaker", "chinese", "pinyin", "english", "audio_url", "order")


class SentenceService:
    def __init__(self, repository: Repository, rules: AssociationRules | None = None):
        self.repository = repository
        self.rules = rules or AssociationRules(repository)

    def list_sentences(self, dialogue_id: int) -> list[Sentence]:
        return self.rules.list_sentences_ordered(dialogue_id)

    def get_sentence(self, sentence_id: int) -> Sentence:
        return self.repository.get(Sentence, sentence_id)

    def create_sentence(self, dialogue_id: int, payload: SentenceCreate) -> Sentence:
        self.repository.get(Dialogue, dialogue_id)
        sentence = Sentence(dialogue_id=dialogue_id, **payload.model_dump(include=set(_REPLACED_FIELDS)))
        return self.repository.create(sentence)

    def update_sentence(self, sentence_id: int, payload: SentenceUpdate) -> Sentence:
        sentence = self.repository.get(Sentence, sentence_id)
        for field in _REPLACED_FIELDS:
            setattr(sentence, field, getattr(payload, field))
        return self.repository.save(sentence)

    def delete_sentence(self, sentence_id: int) -> int:
        return self.repository.delete(Sentence, sentence_id)
