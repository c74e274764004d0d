"""
Notes App Backend - Notes Route Handlers
==========================================

What:  CRUD endpoints under /api/notes.
How:   Validate the body, delegate one call to NoteService, shape the JSON.
Who:   Called by the static frontend (public/index.html) and any HTTP client.

Route Inventory:
    GET    /api/notes         → 200 [note, ...]            newest first
    POST   /api/notes         → 201 {id, title, content, message}
    PUT    /api/notes/{id}    → 200 {message}              404 if no such id
    DELETE /api/notes/{id}    → 200 {message}              404 if no such id

Errors are raised as NotesAppError subclasses and turned into
`{"error": "..."}` bodies by the handlers registered in main.py.
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from notes_app.exceptions import NotFoundError, ValidationError
from notes_app.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreatedResponse,
    NoteInput,
    NoteResponse,
)
from notes_app.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

REQUIRED_FIELDS_MESSAGE = "Title and content are required"

# Upper bound of the INTEGER id column (int32 on PostgreSQL)
MAX_NOTE_ID = 2_147_483_647

_NOTE_ID_PATTERN = re.compile(r"[0-9]+")


def is_present(value: Optional[str]) -> bool:
    """
    A required string field counts as present when it was sent and is not "".

    Whitespace is NOT stripped: "   " is an accepted title.
    """
    return value is not None and value != ""


def require_title_and_content(payload: NoteInput) -> None:
    """Raise ValidationError unless both title and content are present."""
    if not is_present(payload.title) or not is_present(payload.content):
        raise ValidationError(message=REQUIRED_FIELDS_MESSAGE)


def parse_note_id(raw: str) -> int:
    """
    Convert the {note_id} path segment to an id that can exist in the table.

    Anything that is not a plain decimal within 1..MAX_NOTE_ID cannot match a
    row, so it is reported as NotFoundError without reaching the database.
    """
    if _NOTE_ID_PATTERN.fullmatch(raw) is None:
        raise NotFoundError(resource="Note", resource_id=raw)
    note_id = int(raw)
    if not 1 <= note_id <= MAX_NOTE_ID:
        raise NotFoundError(resource="Note", resource_id=raw)
    return note_id


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all notes, newest first",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    notes = await service.list_notes()
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteCreatedResponse,
    responses={
        400: {"description": "Missing title or content", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteInput,
    service: NoteService = Depends(get_note_service),
) -> NoteCreatedResponse:
    """
    Insert a new note.

    The response echoes the submitted title/content together with the id
    assigned by the database.
    """
    require_title_and_content(payload)

    note = await service.insert_note(payload.title, payload.content)
    return NoteCreatedResponse(
        id=note.id,
        title=payload.title,
        content=payload.content,
        message="Note created successfully",
    )


@router.put(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing title or content", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: str,
    payload: NoteInput,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    """Body validation comes first: an empty title is a 400 even for an unknown id."""
    require_title_and_content(payload)
    note_id = parse_note_id(note_id)

    updated = await service.update_note(note_id, payload.title, payload.content)
    if not updated:
        raise NotFoundError(resource="Note", resource_id=note_id)

    logger.info("Note %d updated", note_id)
    return MessageResponse(message="Note updated successfully")


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    note_id = parse_note_id(note_id)
    deleted = await service.delete_note(note_id)
    if not deleted:
        raise NotFoundError(resource="Note", resource_id=note_id)

    logger.info("Note %d deleted", note_id)
    return MessageResponse(message="Note deleted successfully")
