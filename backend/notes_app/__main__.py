"""
Notes App Backend - Server Entry Point
========================================

Usage:
    python -m notes_app
    notes-app                    (console script installed by pip)

Starts uvicorn on HOST:PORT. If the database cannot be reached during
startup the lifespan fails and uvicorn exits with a non-zero status.
"""

import uvicorn

from notes_app.config import settings


def main() -> None:
    uvicorn.run(
        "notes_app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        # RequestLoggingMiddleware writes the access log
        access_log=False,
    )


if __name__ == "__main__":
    main()
