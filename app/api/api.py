# Fichier: backend/app/api/api.py
from fastapi import APIRouter
from .endpoints import (
    chapter_router,
    vocabulary_router,
    dialogue_router,
    sentence_router,
)

api_router = APIRouter()

api_router.include_router(chapter_router.router, prefix="/chapters", tags=["Chapters"])
api_router.include_router(vocabulary_router.router, prefix="/vocabularies", tags=["Vocabularies"])
api_router.include_router(dialogue_router.router, prefix="/dialogues", tags=["Dialogues"])
api_router.include_router(sentence_router.router, prefix="/sentences", tags=["Sentences"])
