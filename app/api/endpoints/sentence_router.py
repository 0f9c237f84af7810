# Fichier: backend/app/api/endpoints/sentence_router.py
from fastapi import APIRouter, Depends

from app.api.dependencies import get_sentence_service
from app.api.errors import service_errors
from app.schemas.common_schema import DeleteResult
from app.schemas.sentence_schema import SentenceOut, SentenceUpdate
from app.services.sentence_service import SentenceService

router = APIRouter()


@router.get("/{sentence_id}", response_model=SentenceOut)
def get_sentence(sentence_id: int, service: SentenceService = Depends(get_sentence_service)):
    with service_errors():
        return service.get_sentence(sentence_id)


@router.put("/{sentence_id}", response_model=SentenceOut)
def update_sentence(
    sentence_id: int,
    payload: SentenceUpdate,
    service: SentenceService = Depends(get_sentence_service),
):
    """Replace every field of the sentence with the body's values."""
    with service_errors():
        return service.update_sentence(sentence_id, payload)


@router.delete("/{sentence_id}", response_model=DeleteResult)
def delete_sentence(sentence_id: int, service: SentenceService = Depends(get_sentence_service)):
    with service_errors():
        deleted = service.delete_sentence(sentence_id)
    return DeleteResult(message="Sentence deleted", sentences=deleted)
