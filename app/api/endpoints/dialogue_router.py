# Fichier: backend/app/api/endpoints/dialogue_router.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_dialogue_service, get_sentence_service
from app.api.errors import service_errors
from app.schemas.common_schema import DeleteResult
from app.schemas.dialogue_schema import DialogueUpdate, DialogueWithSentences
from app.schemas.sentence_schema import SentenceCreate, SentenceOut
from app.services.dialogue_service import DialogueService
from app.services.sentence_service import SentenceService

router = APIRouter()


@router.get("/{dialogue_id}", response_model=DialogueWithSentences)
def get_dialogue(dialogue_id: int, service: DialogueService = Depends(get_dialogue_service)):
    with service_errors():
        return service.get_dialogue(dialogue_id)


@router.put("/{dialogue_id}", response_model=DialogueWithSentences)
def update_dialogue(
    dialogue_id: int,
    payload: DialogueUpdate,
    service: DialogueService = Depends(get_dialogue_service),
):
    with service_errors():
        return service.update_dialogue(dialogue_id, payload)


@router.delete("/{dialogue_id}", response_model=DeleteResult)
def delete_dialogue(dialogue_id: int, service: DialogueService = Depends(get_dialogue_service)):
    with service_errors():
        result = service.delete_dialogue(dialogue_id)
    return DeleteResult(message="Dialogue deleted", **result.as_dict())


# --- Phrases du dialogue ---
@router.get("/{dialogue_id}/sentences", response_model=List[SentenceOut])
def list_dialogue_sentences(dialogue_id: int, service: SentenceService = Depends(get_sentence_service)):
    with service_errors():
        return service.list_sentences(dialogue_id)


@router.post(
    "/{dialogue_id}/sentences",
    response_model=SentenceOut,
    status_code=status.HTTP_201_CREATED,
)
def create_sentence(
    dialogue_id: int,
    payload: SentenceCreate,
    service: SentenceService = Depends(get_sentence_service),
):
    with service_errors():
        return service.create_sentence(dialogue_id, payload)
