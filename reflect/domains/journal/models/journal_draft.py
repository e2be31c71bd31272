"""Single in-progress entry per user."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from reflect.extensions import db


class JournalDraft(db.Model):
    __tablename__ = "journal_draft"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False, default="")
    content: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    mood: Mapped[str] = mapped_column(db.String(32), nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.content or self.mood)
