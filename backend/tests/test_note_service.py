"""
Notes App Backend - Note Service Tests
========================================

What:  NoteService statements against a real (SQLite) database.

What we test:
    ✅ Insert assigns ids starting at 1
    ✅ Listing is newest first
    ✅ Update/delete report whether a row matched
    ✅ Update refreshes updated_at but not created_at
    ✅ Driver failures become DatabaseError with the operation message
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from notes_app.exceptions import DatabaseError
from notes_app.services.note_service import NoteService


class TestNoteServiceInsert:

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, note_service):
        note = await note_service.insert_note("T", "C")

        assert note.id >= 1
        assert note.title == "T"
        assert note.content == "C"
        assert note.created_at is not None
        assert note.updated_at is not None

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, note_service):
        first = await note_service.insert_note("A", "a")
        second = await note_service.insert_note("B", "b")

        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_whitespace_is_stored_verbatim(self, note_service):
        await note_service.insert_note("  padded  ", "\tcontent\n")

        notes = await note_service.list_notes()
        assert notes[0].title == "  padded  "
        assert notes[0].content == "\tcontent\n"


class TestNoteServiceList:

    @pytest.mark.asyncio
    async def test_empty_table(self, note_service):
        assert await note_service.list_notes() == []

    @pytest.mark.asyncio
    async def test_newest_first(self, note_service):
        for title in ("A", "B", "C"):
            await note_service.insert_note(title, f"{title} content")

        notes = await note_service.list_notes()

        assert [n.title for n in notes] == ["C", "B", "A"]


class TestNoteServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_existing(self, note_service):
        note = await note_service.insert_note("Old", "old content")
        [before] = await note_service.list_notes()

        assert await note_service.update_note(note.id, "New", "new content") is True

        [stored] = await note_service.list_notes()
        assert stored.title == "New"
        assert stored.content == "new content"
        assert stored.updated_at >= stored.created_at
        assert stored.updated_at >= before.updated_at

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self, note_service):
        note = await note_service.insert_note("Old", "old content")
        [before] = await note_service.list_notes()

        await note_service.update_note(note.id, "New", "new content")

        [after] = await note_service.list_notes()
        assert after.created_at == before.created_at

    @pytest.mark.asyncio
    async def test_update_same_values_still_matches(self, note_service):
        note = await note_service.insert_note("Same", "same")

        assert await note_service.update_note(note.id, "Same", "same") is True

    @pytest.mark.asyncio
    async def test_update_missing_id(self, note_service):
        assert await note_service.update_note(999999, "T", "C") is False


class TestNoteServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_existing(self, note_service):
        note = await note_service.insert_note("T", "C")

        assert await note_service.delete_note(note.id) is True
        assert await note_service.list_notes() == []

    @pytest.mark.asyncio
    async def test_second_delete_reports_no_row(self, note_service):
        note = await note_service.insert_note("T", "C")
        await note_service.delete_note(note.id)

        assert await note_service.delete_note(note.id) is False

    @pytest.mark.asyncio
    async def test_delete_only_targets_one_row(self, note_service):
        keep = await note_service.insert_note("keep", "k")
        drop = await note_service.insert_note("drop", "d")

        await note_service.delete_note(drop.id)

        notes = await note_service.list_notes()
        assert [n.id for n in notes] == [keep.id]


class TestNoteServiceErrors:
    """Every failure is wrapped with the fixed per-operation message."""

    @pytest.mark.asyncio
    async def test_closed_database(self, database, note_service):
        await database.close()

        with pytest.raises(DatabaseError) as fetch:
            await note_service.list_notes()
        with pytest.raises(DatabaseError) as create:
            await note_service.insert_note("T", "C")
        with pytest.raises(DatabaseError) as update:
            await note_service.update_note(1, "T", "C")
        with pytest.raises(DatabaseError) as delete:
            await note_service.delete_note(1)

        assert fetch.value.message == "Failed to fetch notes"
        assert create.value.message == "Failed to create note"
        assert update.value.message == "Failed to update note"
        assert delete.value.message == "Failed to delete note"

    @pytest.mark.asyncio
    async def test_driver_error_is_wrapped(self):
        """The driver message ends up in the logs only, never in `message`."""
        session = AsyncMock()
        session.execute = AsyncMock(side_effect=ConnectionResetError("connection reset by peer"))

        database = MagicMock()
        database.session.return_value.__aenter__ = AsyncMock(return_value=session)
        database.session.return_value.__aexit__ = AsyncMock(return_value=False)

        service = NoteService(database)

        with patch("notes_app.services.note_service.logger") as mock_logger:
            with pytest.raises(DatabaseError) as exc_info:
                await service.list_notes()

        assert exc_info.value.message == "Failed to fetch notes"
        assert "connection reset" not in exc_info.value.message
        assert exc_info.value.context == {"error_type": "ConnectionResetError"}
        mock_logger.error.assert_called_once()
