"""
Notes App Backend - Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD statements, by Database.ensure_schema()
       and by Alembic.

Table:
    notes(
      id          INTEGER AUTO-INCREMENT PRIMARY KEY,
      title       VARCHAR(255) NOT NULL,
      content     TEXT,
      created_at  TIMESTAMP DEFAULT now,
      updated_at  TIMESTAMP DEFAULT now, refreshed on every UPDATE
    )

Timestamps get a Python-side default (microsecond precision on every
backend) and a server default for rows written outside the ORM.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notes_app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single note.

    Lifecycle:
        1. Inserted by POST /api/notes (created_at = updated_at = now)
        2. Title/content replaced by PUT /api/notes/{id} (updated_at = now)
        3. Removed by DELETE /api/notes/{id}; no soft delete
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Nullable at the column level; the API refuses empty content.
    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # onupdate applies to Core update() statements that do not set it.
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Newest-first listing is the only query pattern
    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
