"""FastAPI dependencies wiring sessions, the repository and the services."""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.crud.repository import Repository
from app.db.session import get_db
from app.services.chapter_service import ChapterService
from app.services.dialogue_service import DialogueService
from app.services.sentence_service import SentenceService
from app.services.upload_storage import UploadStorage
from app.services.vocabulary_service import VocabularyService


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return Repository(db)


def get_upload_storage() -> UploadStorage:
    return UploadStorage(settings.UPLOAD_DIR, settings.public_base_url)


def get_chapter_service(repository: Repository = Depends(get_repository)) -> ChapterService:
    return ChapterService(repository)


def get_vocabulary_service(
    repository: Repository = Depends(get_repository),
    storage: UploadStorage = Depends(get_upload_storage),
) -> VocabularyService:
    return VocabularyService(repository, storage)


def get_dialogue_service(repository: Repository = Depends(get_repository)) -> DialogueService:
    return DialogueService(repository)


def get_sentence_service(repository: Repository = Depends(get_repository)) -> SentenceService:
    return SentenceService(repository)
