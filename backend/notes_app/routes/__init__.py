# Routes package init
"""
Notes App Backend - API Routes Package
========================================

Route Inventory:
    - notes.py:   GET/POST /api/notes, PUT/DELETE /api/notes/{id}
    - health.py:  GET /health, GET /health/ready

Routes stay thin: they validate input, call NoteService and pick the status
code. Statements live in services/note_service.py.
"""
