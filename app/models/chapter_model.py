# Fichier: backend/app/models/chapter_model.py
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.utils.time_utils import utcnow

if TYPE_CHECKING:
    from .vocabulary_model import Vocabulary
    from .dialogue_model import Dialogue


class Chapter(Base):
    """Lesson unit grouping vocabulary entries and dialogues."""

    __tablename__ = "chapters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Not unique: the CSV importer only uses it as a lookup key.
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # --- Relations ---
    # Children are removed by the association rules (and ON DELETE CASCADE),
    # never by the ORM nulling out foreign keys.
    vocabularies: Mapped[List["Vocabulary"]] = relationship(
        back_populates="chapter",
        passive_deletes=True,
        order_by="Vocabulary.id",
    )
    dialogues: Mapped[List["Dialogue"]] = relationship(
        back_populates="chapter",
        passive_deletes=True,
        order_by="Dialogue.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Chapter(id={self.id}, name='{self.name}')>"
