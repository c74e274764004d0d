"""
Notes App Backend - Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract with the frontend.
How:   FastAPI uses them to parse request bodies, serialize responses and
       generate the OpenAPI document.

Schemas are separate from the SQLAlchemy model so the wire format can be
controlled independently of the table (e.g. create/update responses only
echo a subset of columns).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Both fields are Optional here on purpose: a missing field must produce
    the same 400 "Title and content are required" as an empty one, and that
    check lives in the route (see `is_present`). Unknown keys are ignored.
    """
    title: Optional[str] = Field(default=None, description="Note title (non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (non-empty)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """One row of GET /api/notes."""
    id: int = Field(description="Auto-assigned note identifier")
    title: str
    content: Optional[str] = None
    created_at: datetime = Field(description="Insertion time")
    updated_at: datetime = Field(description="Last modification time")

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Returned by POST /api/notes with HTTP 201."""
    id: int
    title: str
    content: str
    message: str = Field(default="Note created successfully")


class MessageResponse(BaseModel):
    """Returned by PUT and DELETE on success."""
    message: str


class ErrorResponse(BaseModel):
    """
    Error body for every 4xx/5xx answer.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Liveness probe body: the process is up and serving requests."""
    status: str = Field(default="OK")
    timestamp: str = Field(description="Current server time, ISO 8601 (UTC)")


class ReadinessResponse(BaseModel):
    """Readiness probe body: whether the database answers."""
    status: str = Field(description="OK or UNAVAILABLE")
    database: str = Field(description="connected or disconnected")
