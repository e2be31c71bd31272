"""Published journal entry."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from reflect.extensions import db


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (
        db.Index("ix_journal_entry_user_created_at", "user_id", "created_at"),
        db.Index("ix_journal_entry_user_collection", "user_id", "collection_id"),
        db.Index("ix_journal_entry_user_mood", "user_id", "mood"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    collection_id: Mapped[int | None] = mapped_column(
        db.ForeignKey("journal_collection.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    mood: Mapped[str] = mapped_column(db.String(32), nullable=False)
    mood_score: Mapped[int] = mapped_column(db.Integer, nullable=False)
    mood_image_query: Mapped[str | None] = mapped_column(db.String(255))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    collection = relationship("Collection", back_populates="entries")
