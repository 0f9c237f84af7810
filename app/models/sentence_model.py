# Fichier: backend/app/models/sentence_model.py
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.utils.time_utils import utcnow

if TYPE_CHECKING:
    from .dialogue_model import Dialogue


class Sentence(Base):
    __tablename__ = "sentences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    dialogue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dialogues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    speaker: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    chinese: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pinyin: Mapped[str] = mapped_column(Text, nullable=False, default="")
    english: Mapped[str] = mapped_column(Text, nullable=False, default="")
    audio_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    order: Mapped[int] = mapped_column("order", Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    dialogue: Mapped["Dialogue"] = relationship(back_populates="sentences")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Sentence(id={self.id}, dialogue_id={self.dialogue_id}, order={self.order})>"
