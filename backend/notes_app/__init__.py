"""
Notes App Backend - Application Package Initializer
===================================================

What: Marks the `notes_app` directory as a Python package.
Who:  Imported by uvicorn (`notes_app.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into two layers:

    ┌─────────────────────────────────────┐
    │      Routes + Handlers (API)        │  ← HTTP routing, validation, responses
    ├─────────────────────────────────────┤
    │   NoteService + Database (Storage)  │  ← CRUD statements, pool lifecycle
    └─────────────────────────────────────┘

    The storage objects are built once per process by `create_app()` and
    handed to the routes through FastAPI dependencies.
"""

__version__ = "1.0.0"
