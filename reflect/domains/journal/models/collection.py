"""Named grouping of journal entries."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from reflect.extensions import db


class Collection(db.Model):
    __tablename__ = "journal_collection"
    __table_args__ = (db.UniqueConstraint("user_id", "name", name="uq_journal_collection_user_name"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(db.String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    entries = relationship("JournalEntry", back_populates="collection", passive_deletes=True)
