"""
Notes API — Notes Route Handlers
=================================

What:  Note CRUD plus forwarding a note to the content service.
How:   Each handler depends on `authorize` (bearer-token pipeline), calls
       NoteService, and returns the bare JSON value. Errors are raised as
       application exceptions and turned into `{"error": ...}` responses by
       the handlers registered in main.py.

Route Inventory:
    GET    /notes        list every note                → 200 [Note]
    GET    /note/{id}    one note                       → 200 Note | 204
    POST   /note         create from NoteRequest        → 200 message
    PUT    /note/{id}    replace name and text          → 200 message
    DELETE /note/{id}    hard delete                    → 200 message
    POST   /save/{id}    upload text to content service → 200 message
"""

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, Response

from notes_api.exceptions import InternalInvariantError
from notes_api.models.note import Note
from notes_api.responses import no_content_response
from notes_api.routes.deps import authorize, read_note_request
from notes_api.schemas.note import ErrorResponse, NoteRequest
from notes_api.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_AUTH_ERRORS = {
    400: {"description": "Missing or malformed input", "model": ErrorResponse},
    401: {"description": "Bearer token rejected", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=List[Note],
    responses=_AUTH_ERRORS,
    summary="List all notes",
)
async def list_notes(service: NoteService = Depends(authorize)) -> List[Note]:
    return await service.get_notes("")


@router.get(
    "/note/{note_id}",
    response_model=Note,
    responses={204: {"description": "No note has this ID"}, **_AUTH_ERRORS},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(authorize),
) -> Union[Note, Response]:
    notes = await service.get_notes(note_id)
    if not notes:
        return no_content_response()
    if len(notes) > 1:
        raise InternalInvariantError(
            message="more than one note returned for given ID",
            context={"note_id": note_id, "count": len(notes)},
        )
    return notes[0]


@router.post(
    "/note",
    response_model=str,
    responses=_AUTH_ERRORS,
    summary="Create a note",
)
async def create_note(
    payload: NoteRequest = Depends(read_note_request),
    service: NoteService = Depends(authorize),
) -> str:
    note_id = await service.create_note(payload)
    # "successfuly" is part of the established response contract
    return f"Note with ID '{note_id}' created successfuly"


@router.put(
    "/note/{note_id}",
    response_model=str,
    responses={404: {"description": "No note has this ID", "model": ErrorResponse}, **_AUTH_ERRORS},
    summary="Edit a note",
)
async def edit_note(
    note_id: str,
    payload: NoteRequest = Depends(read_note_request),
    service: NoteService = Depends(authorize),
) -> str:
    await service.update_note(note_id, payload)
    return f"Note with ID '{note_id}' updated successfully"


@router.delete(
    "/note/{note_id}",
    response_model=str,
    responses={404: {"description": "No note has this ID", "model": ErrorResponse}, **_AUTH_ERRORS},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(authorize),
) -> str:
    await service.delete_note(note_id)
    return f"Note with ID '{note_id}' deleted successfully"


@router.post(
    "/save/{note_id}",
    response_model=str,
    responses={404: {"description": "No note has this ID", "model": ErrorResponse}, **_AUTH_ERRORS},
    summary="Send a note to the content service",
)
async def send_to_content_service(
    note_id: str,
    service: NoteService = Depends(authorize),
) -> str:
    await service.send_to_content_service(note_id)
    return f"Note with ID '{note_id}' sent to content service successfully"
