"""
Notes API — Health Check Route
===============================

What:  Liveness endpoint for probes and load balancers.
How:   Pings the MongoDB primary through NoteService.
Who:   Called by Docker health checks, orchestrators and monitoring.

    200 "API is running and connected to database"
    500 {"error": "<driver message>"}

No Authorization header is required.
"""

from fastapi import APIRouter, Depends

from notes_api.routes.deps import get_note_service
from notes_api.schemas.note import ErrorResponse
from notes_api.services.note_service import NoteService

router = APIRouter(tags=["Health"])

HEALTHY_MESSAGE = "API is running and connected to database"


@router.get(
    "/health",
    response_model=str,
    responses={500: {"description": "Database unreachable", "model": ErrorResponse}},
    summary="Service health check",
)
async def check_health(service: NoteService = Depends(get_note_service)) -> str:
    await service.ping()
    return HEALTHY_MESSAGE
