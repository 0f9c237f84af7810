# Fichier: backend/app/models/vocabulary_model.py
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.utils.time_utils import utcnow

if TYPE_CHECKING:
    from .chapter_model import Chapter


class Vocabulary(Base):
    __tablename__ = "vocabularies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    chinese: Mapped[str] = mapped_column(String(255), nullable=False, index=True)  # ex: "猫"
    pinyin: Mapped[str] = mapped_column(String(255), nullable=False, default="")  # ex: "māo"
    meaning: Mapped[str] = mapped_column(Text, nullable=False, default="")  # ex: "cat"
    image_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    chapter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    chapter: Mapped["Chapter"] = relationship(back_populates="vocabularies")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Vocabulary(id={self.id}, chinese='{self.chinese}', chapter_id={self.chapter_id})>"
