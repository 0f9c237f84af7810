# Fichier: backend/app/api/endpoints/chapter_router.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_chapter_service, get_dialogue_service, get_vocabulary_service
from app.api.errors import service_errors
from app.schemas.chapter_schema import ChapterCreate, ChapterOut, ChapterUpdate
from app.schemas.common_schema import DeleteResult
from app.schemas.dialogue_schema import DialogueCreate, DialogueOut, DialogueWithSentences
from app.schemas.vocabulary_schema import VocabularyBatchItem, VocabularyOut
from app.services.chapter_service import ChapterService
from app.services.dialogue_service import DialogueService
from app.services.vocabulary_service import VocabularyService

router = APIRouter()


@router.get("", response_model=List[ChapterOut])
def list_chapters(service: ChapterService = Depends(get_chapter_service)):
    with service_errors():
        return service.list_chapters()


@router.post("", response_model=ChapterOut, status_code=status.HTTP_201_CREATED)
def create_chapter(payload: ChapterCreate, service: ChapterService = Depends(get_chapter_service)):
    with service_errors():
        return service.create_chapter(payload)


@router.get("/{chapter_id}", response_model=ChapterOut)
def get_chapter(chapter_id: int, service: ChapterService = Depends(get_chapter_service)):
    with service_errors():
        return service.get_chapter(chapter_id)


@router.put("/{chapter_id}", response_model=ChapterOut)
def update_chapter(
    chapter_id: int,
    payload: ChapterUpdate,
    service: ChapterService = Depends(get_chapter_service),
):
    with service_errors():
        return service.update_chapter(chapter_id, payload)


@router.delete("/{chapter_id}", response_model=DeleteResult)
def delete_chapter(chapter_id: int, service: ChapterService = Depends(get_chapter_service)):
    """Delete the chapter together with its vocabulary, dialogues and sentences."""
    with service_errors():
        result = service.delete_chapter(chapter_id)
    return DeleteResult(message="Chapter deleted", **result.as_dict())


# --- Vocabulaire du chapitre ---
@router.get("/{chapter_id}/vocabularies", response_model=List[VocabularyOut])
def list_chapter_vocabularies(
    chapter_id: int,
    service: VocabularyService = Depends(get_vocabulary_service),
):
    with service_errors():
        return service.list_vocabularies(chapter_id=chapter_id)


@router.post(
    "/{chapter_id}/vocabularies/batch",
    response_model=List[VocabularyOut],
    status_code=status.HTTP_201_CREATED,
)
def batch_create_vocabularies(
    chapter_id: int,
    items: List[VocabularyBatchItem],
    service: VocabularyService = Depends(get_vocabulary_service),
):
    with service_errors():
        return service.batch_create(chapter_id, items)


# --- Dialogues du chapitre ---
@router.get("/{chapter_id}/dialogues", response_model=List[DialogueWithSentences])
def list_chapter_dialogues(
    chapter_id: int,
    service: DialogueService = Depends(get_dialogue_service),
):
    with service_errors():
        return service.list_dialogues(chapter_id)


@router.post(
    "/{chapter_id}/dialogues",
    response_model=DialogueOut,
    status_code=status.HTTP_201_CREATED,
)
def create_dialogue(
    chapter_id: int,
    payload: DialogueCreate,
    service: DialogueService = Depends(get_dialogue_service),
):
    with service_errors():
        return service.create_dialogue(chapter_id, payload)
