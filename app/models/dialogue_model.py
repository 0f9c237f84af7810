# Fichier: backend/app/models/dialogue_model.py
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.utils.time_utils import utcnow

if TYPE_CHECKING:
    from .chapter_model import Chapter
    from .sentence_model import Sentence


class Dialogue(Base):
    """Named conversation of a chapter, made of ordered sentences."""

    __tablename__ = "dialogues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    chapter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    chapter: Mapped["Chapter"] = relationship(back_populates="dialogues")
    # ``order`` is not unique: ties fall back to insertion order (id).
    sentences: Mapped[List["Sentence"]] = relationship(
        back_populates="dialogue",
        passive_deletes=True,
        order_by="[Sentence.order, Sentence.id]",
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Dialogue(id={self.id}, title='{self.title}', chapter_id={self.chapter_id})>"
