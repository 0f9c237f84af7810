# Fichier: backend/app/api/endpoints/vocabulary_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from app.api.dependencies import get_vocabulary_service
from app.api.errors import form_errors, service_errors
from app.schemas.common_schema import DeleteResult
from app.schemas.vocabulary_schema import VocabularyCreate, VocabularyOut, VocabularyUpdate
from app.services.upload_storage import ImageUpload
from app.services.vocabulary_service import VocabularyService

router = APIRouter()


def _image_upload(image: UploadFile | None) -> ImageUpload | None:
    """Browsers post an empty, unnamed part when no file was picked."""
    if image is None or not image.filename:
        return None
    return ImageUpload(filename=image.filename, stream=image.file)


def _form_value(value: str | None) -> str | None:
    # An empty form field means "leave unchanged".
    if value is None or value == "":
        return None
    return value


@router.get("", response_model=List[VocabularyOut])
def list_vocabularies(
    chapter_id: Optional[int] = Query(default=None, gt=0),
    service: VocabularyService = Depends(get_vocabulary_service),
):
    with service_errors():
        return service.list_vocabularies(chapter_id=chapter_id)


@router.get("/{vocabulary_id}", response_model=VocabularyOut)
def get_vocabulary(vocabulary_id: int, service: VocabularyService = Depends(get_vocabulary_service)):
    with service_errors():
        return service.get_vocabulary(vocabulary_id)


@router.post("", response_model=VocabularyOut, status_code=status.HTTP_201_CREATED)
def create_vocabulary(
    chinese: str = Form(""),
    pinyin: str = Form(""),
    meaning: str = Form(""),
    chapter_id: str = Form(""),
    image_url: str = Form(""),
    image: Optional[UploadFile] = File(None),
    service: VocabularyService = Depends(get_vocabulary_service),
):
    if not chinese or not chapter_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="chinese_and_chapter_id_required",
        )

    try:
        parsed_chapter_id = int(chapter_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_chapter_id") from exc

    with form_errors():
        payload = VocabularyCreate(
            chinese=chinese,
            pinyin=pinyin,
            meaning=meaning,
            image_url=image_url,
            chapter_id=parsed_chapter_id,
        )

    with service_errors():
        return service.create_vocabulary(payload, image=_image_upload(image))


@router.put("/{vocabulary_id}", response_model=VocabularyOut)
def update_vocabulary(
    vocabulary_id: int,
    chinese: Optional[str] = Form(None),
    pinyin: Optional[str] = Form(None),
    meaning: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: VocabularyService = Depends(get_vocabulary_service),
):
    """Partial update: only non-empty fields overwrite the stored entry."""

    with form_errors():
        payload = VocabularyUpdate(
            chinese=_form_value(chinese),
            pinyin=_form_value(pinyin),
            meaning=_form_value(meaning),
            image_url=_form_value(image_url),
        )
    with service_errors():
        return service.update_vocabulary(vocabulary_id, payload, image=_image_upload(image))


@router.delete("/{vocabulary_id}", response_model=DeleteResult)
def delete_vocabulary(vocabulary_id: int, service: VocabularyService = Depends(get_vocabulary_service)):
    with service_errors():
        deleted = service.delete_vocabulary(vocabulary_id)
    return DeleteResult(message="Vocabulary deleted", vocabularies=deleted)
