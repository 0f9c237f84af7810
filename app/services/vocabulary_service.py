from __future__ import annotations

import logging
from typing import Sequence

from app.core.errors import InvalidInputError, StorageFailure
from app.crud.repository import Repository
from app.models.chapter_model import Chapter
from app.models.vocabulary_model import Vocabulary
from app.schemas.vocabulary_schema import VocabularyBatchItem, VocabularyCreate, VocabularyUpdate
from app.services.upload_storage import ImageUpload, UploadStorage

logger = logging.getLogger(__name__)


class VocabularyService:
    """Business logic for vocabulary entries and their illustrative images."""

    def __init__(self, repository: Repository, storage: UploadStorage | None = None):
        self.repository = repository
        self.storage = storage

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_vocabularies(self, chapter_id: int | None = None) -> list[Vocabulary]:
        if chapter_id is None:
            return self.repository.list(Vocabulary)
        return self.repository.list(Vocabulary, chapter_id=chapter_id)

    def get_vocabulary(self, vocabulary_id: int) -> Vocabulary:
        return self.repository.get(Vocabulary, vocabulary_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create_vocabulary(self, payload: VocabularyCreate, image: ImageUpload | None = None) -> Vocabulary:
        # Rejects orphans before anything is written to disk.
        self.repository.get(Chapter, payload.chapter_id)

        stored_url = self._store_image(image) if image is not None else None

        vocabulary = Vocabulary(
            chinese=payload.chinese,
            pinyin=payload.pinyin,
            meaning=payload.meaning,
            image_url=stored_url or payload.image_url,
            chapter_id=payload.chapter_id,
        )
        return self._persist(self.repository.create, vocabulary, stored_url)

    def batch_create(self, chapter_id: int, items: Sequence[VocabularyBatchItem]) -> list[Vocabulary]:
        if not items:
            raise InvalidInputError("empty_inputs")
        self.repository.get(Chapter, chapter_id)

        vocabularies = [
            Vocabulary(
                chinese=item.chinese,
                pinyin=item.pinyin,
                meaning=item.meaning,
                image_url=item.image_url,
                chapter_id=chapter_id,
            )
            for item in items
        ]
        created = self.repository.create_all(vocabularies)
        logger.info("%s mots ajoutés au chapitre %s.", len(created), chapter_id)
        return created

    def update_vocabulary(
        self,
        vocabulary_id: int,
        payload: VocabularyUpdate,
        image: ImageUpload | None = None,
    ) -> Vocabulary:
        vocabulary = self.repository.get(Vocabulary, vocabulary_id)

        if payload.chinese is not None:
            vocabulary.chinese = payload.chinese
        if payload.pinyin is not None:
            vocabulary.pinyin = payload.pinyin
        if payload.meaning is not None:
            vocabulary.meaning = payload.meaning

        # Upload first, then an explicit URL, then whatever was stored.
        stored_url = None
        if image is not None:
            stored_url = vocabulary.image_url = self._store_image(image)
        elif payload.image_url is not None:
            vocabulary.image_url = payload.image_url

        return self._persist(self.repository.save, vocabulary, stored_url)

    def delete_vocabulary(self, vocabulary_id: int) -> int:
        return self.repository.delete(Vocabulary, vocabulary_id)

    def _store_image(self, image: ImageUpload) -> str:
        if self.storage is None:
            raise InvalidInputError("uploads_disabled")
        return self.storage.save(image)

    def _persist(self, write, vocabulary: Vocabulary, stored_url: str | None) -> Vocabulary:
        # A file nobody references must not outlive a failed write.
        try:
            return write(vocabulary)
        except StorageFailure:
            if stored_url is not None:
                self.storage.discard(stored_url)
            raise
