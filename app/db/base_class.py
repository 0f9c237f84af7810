# Fichier: backend/app/db/base_class.py
from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """
    Declarative base shared by the chapter, vocabulary, dialogue and
    sentence models. ``Base.metadata`` is what ``create_all`` runs against.
    """
