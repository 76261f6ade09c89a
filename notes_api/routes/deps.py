"""
Notes API — Route Dependencies (FastAPI Depends)
=================================================

What:  Per-request wiring shared by the route handlers.

    get_note_service   → assembles a request-scoped NoteService from the
                         process-wide repository and clients on app.state
    authorize          → bearer-token pipeline; returns the NoteService
                         with the caller's token set
    read_note_request  → decodes the JSON body into a NoteRequest, after
                         authorization has passed

Authorization pipeline (every route except /health):
    1. No Authorization header            → 400 "no authorization header found"
    2. Header not exactly "Bearer <token>" → 400 "authorization header must be in format 'Bearer'"
    3. Login service rejects / unreachable → 401 with the underlying message
    4. Token stored on the request's NoteService for later uploads
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from pydantic import ValidationError as PydanticValidationError

from notes_api.exceptions import BadRequestError, NotesAPIError, UnauthorizedError
from notes_api.schemas.note import NoteRequest
from notes_api.services.note_service import NoteService

logger = logging.getLogger(__name__)

MISSING_AUTH_HEADER = "no authorization header found"
MALFORMED_AUTH_HEADER = "authorization header must be in format 'Bearer'"


def get_note_service(request: Request) -> NoteService:
    """A fresh NoteService per request; shares only immutable collaborators."""
    state = request.app.state
    return NoteService(
        repository=state.note_repository,
        token_validator=state.token_validator,
        content_uploader=state.content_uploader,
    )


def parse_bearer_token(authorization: Optional[str]) -> str:
    """
    Extracts the token from an Authorization header value.

    Raises:
        BadRequestError: header missing, or not "Bearer" + one space + token
    """
    if not authorization:
        raise BadRequestError(message=MISSING_AUTH_HEADER)
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise BadRequestError(message=MALFORMED_AUTH_HEADER)
    return parts[1]


async def authorize(
    authorization: Optional[str] = Header(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteService:
    token = parse_bearer_token(authorization)
    try:
        await service.validate_token(token)
    except UnauthorizedError:
        raise
    except NotesAPIError as e:
        # Unreachable or unconfigured login service still means "not authorized"
        raise UnauthorizedError(message=e.message, context=e.context)
    service.set_token(token)
    return service


async def read_note_request(
    request: Request,
    _service: NoteService = Depends(authorize),
) -> NoteRequest:
    """
    Decodes the request body as a NoteRequest.

    Depends on `authorize` so that a bad body never masks an auth failure.
    """
    body = await request.body()
    try:
        return NoteRequest.model_validate_json(body)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False)
        message = _describe_validation_error(errors[0]) if errors else str(e)
        logger.warning("Error decoding request body: %s", message)
        raise BadRequestError(message=message, context={"errors": str(errors)})


def _describe_validation_error(error: dict) -> str:
    # "name: Input should be a valid string", or just the message for whole-body errors
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]
