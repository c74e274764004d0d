# Services package init
"""
Notes App Backend - Services Layer
====================================

Service Inventory:
    - NoteService: list / insert / update / delete statements on `notes`

Services receive the Database through their constructor and are reachable
from routes via FastAPI dependencies (get_note_service), so tests can swap
them with mocks through `app.dependency_overrides`.
"""
