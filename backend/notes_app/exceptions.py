"""
Notes App Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception class carries a client-safe message and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return `{"error": message}` with the matching status code.
Who:   Raised by routes, NoteService and Database; caught by global handlers.

Exception Hierarchy:
    NotesAppError (base)
    ├── ValidationError           → 400 Bad Request
    ├── NotFoundError             → 404 Not Found
    ├── DatabaseError             → 500 Internal Server Error
    └── DatabaseUnavailableError  → fatal during startup (process exits)
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAppError):
    """
    Raised when client input fails validation.

    When:    Missing or empty title/content, malformed JSON body.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Title and content are required",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesAppError):
    """
    Raised when an update or delete matched no row.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(NotesAppError):
    """
    Raised when a database operation fails.

    What:    A statement could not be executed (connection lost, pool
             closed, constraint violation, ...).
    HTTP:    500 Internal Server Error

    Security Note:
        `message` is the fixed, operation-specific text returned to the
        client ("Failed to fetch notes", ...). The driver error is kept in
        `context` and only ever logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseUnavailableError(NotesAppError):
    """
    Raised by Database.ensure_schema() when the store cannot be reached.

    This is the fatal startup error. The persistence layer only raises it;
    the application lifespan logs it and lets startup fail, which makes
    uvicorn exit with a non-zero status.
    """

    def __init__(
        self,
        message: str = "Database connection failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
