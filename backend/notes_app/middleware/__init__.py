# Middleware package init
"""
Notes App Backend - Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the ID;
    Logging sees the final status code on the way back out.
"""
