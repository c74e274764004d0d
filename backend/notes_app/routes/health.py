"""
Notes App Backend - Health Check Routes
=========================================

What:  Liveness and readiness probes.
Who:   Docker HEALTHCHECK, load balancers, monitoring.

    GET /health        → 200 {status: "OK", timestamp}   never touches the database
    GET /health/ready  → 200 / 503 depending on SELECT 1 against the database

/health answers as long as the process can serve HTTP, so a database outage
does not get the container restarted; /health/ready is the probe to use for
routing traffic.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notes_app.database import Database, get_database
from notes_app.schemas.note import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


def iso_timestamp() -> str:
    """Current UTC time as e.g. 2024-01-15T12:00:00.123Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=iso_timestamp())


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
    summary="Readiness probe (database connectivity)",
)
async def readiness_check(database: Database = Depends(get_database)):
    if await database.ping():
        return ReadinessResponse(status="OK", database="connected")

    logger.warning("Readiness check: database unreachable")
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="UNAVAILABLE", database="disconnected").model_dump(),
    )
