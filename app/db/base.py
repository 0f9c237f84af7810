"""Déclare l'ensemble des modèles SQLAlchemy pour que ``Base.metadata`` les connaisse."""

from app.db.base_class import Base

# Contenu pédagogique
from app.models.chapter_model import Chapter
from app.models.vocabulary_model import Vocabulary
from app.models.dialogue_model import Dialogue
from app.models.sentence_model import Sentence

__all__ = (
    "Base",
    "Chapter",
    "Vocabulary",
    "Dialogue",
    "Sentence",
)
