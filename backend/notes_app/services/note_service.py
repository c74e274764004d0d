"""
Notes App Backend - Note Service (CRUD Statements)
===================================================

What:  The four statements the API issues against the `notes` table.
How:   Each method borrows one session from the injected Database, runs a
       single statement in its own transaction and returns plain results.
Who:   Called by the route handlers in routes/notes.py.

Error Handling Strategy:
    Any failure talking to the store is logged with its detail and re-raised
    as DatabaseError whose message is the fixed, operation-specific text the
    API returns ("Failed to fetch notes", ...). Nothing is retried.

Affected-row semantics:
    update_note() and delete_note() report whether the statement matched a
    row. The routes turn False into 404. updated_at is always rewritten, so
    an update of an existing id always counts one row even if title and
    content are unchanged.
"""

import logging
from typing import List

from sqlalchemy import delete, desc, select, update
from starlette.requests import Request

from notes_app.database import Database
from notes_app.exceptions import DatabaseError
from notes_app.models.note import Note, utcnow

logger = logging.getLogger(__name__)


class NoteService:
    """
    Persistence operations for notes.

    Holds a reference to the process-wide Database; stateless otherwise,
    so one instance serves all concurrent requests.
    """

    def __init__(self, database: Database):
        self.database = database

    async def list_notes(self) -> List[Note]:
        """
        All notes, newest first.

        Ordered by created_at DESC; notes created in the same instant fall
        back to id DESC so the later insert still comes first.

        Raises:
            DatabaseError: "Failed to fetch notes"
        """
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(Note).order_by(desc(Note.created_at), desc(Note.id))
                )
                return list(result.scalars().all())
        except Exception as e:
            logger.error("Error fetching notes: %s", e, exc_info=True)
            raise DatabaseError(
                message="Failed to fetch notes",
                context={"error_type": type(e).__name__},
            ) from e

    async def insert_note(self, title: str, content: str) -> Note:
        """
        Insert a note and return it with its assigned id.

        Raises:
            DatabaseError: "Failed to create note"
        """
        note = Note(title=title, content=content)
        try:
            async with self.database.session() as session:
                session.add(note)
                await session.commit()
        except Exception as e:
            logger.error("Error creating note: %s", e, exc_info=True)
            raise DatabaseError(
                message="Failed to create note",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %d created", note.id)
        return note

    async def update_note(self, note_id: int, title: str, content: str) -> bool:
        """
        Replace title and content of note `note_id` and bump updated_at.

        Returns:
            True if a row matched, False if no note has that id.

        Raises:
            DatabaseError: "Failed to update note"
        """
        stmt = (
            update(Note)
            .where(Note.id == note_id)
            .values(title=title, content=content, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                affected = result.rowcount
                await session.commit()
        except Exception as e:
            logger.error("Error updating note %s: %s", note_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to update note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        return affected > 0

    async def delete_note(self, note_id: int) -> bool:
        """
        Delete note `note_id`.

        Returns:
            True if a row was removed, False if no note has that id.

        Raises:
            DatabaseError: "Failed to delete note"
        """
        stmt = (
            delete(Note)
            .where(Note.id == note_id)
            .execution_options(synchronize_session=False)
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                affected = result.rowcount
                await session.commit()
        except Exception as e:
            logger.error("Error deleting note %s: %s", note_id, e, exc_info=True)
            raise DatabaseError(
                message="Failed to delete note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        return affected > 0


def get_note_service(request: Request) -> NoteService:
    """FastAPI dependency returning the NoteService stored on app.state."""
    return request.app.state.note_service
