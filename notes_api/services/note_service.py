"""
Notes API — Note Service (Business Logic Orchestrator)
=======================================================

What:  Translates public inputs (hex identifiers, request bodies) into
       repository filters and documents, and composes the
       forward-to-content-service workflow.
How:   Composes NoteRepository, TokenValidator and ContentUploader.
Who:   Called by route handlers; one NoteService is assembled per request by
       the `get_note_service` dependency.

Orchestration Flow (POST /save/{id}):
    ┌───────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │ decode id │───▶│ fetch note  │───▶│ build form   │───▶│ upload       │
    │           │    │ (repository)│    │ (multipart)  │    │ (uploader)   │
    └───────────┘    └─────────────┘    └──────────────┘    └──────────────┘

Request-scoped token:
    The repository and the outbound clients are process-wide and immutable.
    The caller's bearer token lives on the per-request NoteService only
    (set_token), so concurrent uploads never see each other's credentials.
"""

import logging
import re
from typing import List, Optional, Tuple

import httpx
from bson import ObjectId

from notes_api.exceptions import InvalidNoteIdError, NotFoundError, UnauthorizedError
from notes_api.models.note import PRIMARY_KEY, Note, utc_now
from notes_api.repositories.note_repository import Filter, NoteRepository
from notes_api.schemas.note import NoteRequest
from notes_api.services.content_uploader import ContentUploader
from notes_api.services.token_validator import TokenValidator

logger = logging.getLogger(__name__)

_NOTE_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

# Form field carrying the note text in content-service uploads
UPLOAD_FIELD_NAME = "file"
UPLOAD_FILE_EXTENSION = ".txt"
UPLOAD_PLACEHOLDER_STEM = "note"


def decode_note_id(note_id: str) -> ObjectId:
    """
    Decodes a 24-character hex string into an ObjectId.

    Raises:
        InvalidNoteIdError: `note_id` is not exactly 24 hex characters
    """
    if not _NOTE_ID_PATTERN.fullmatch(note_id):
        raise InvalidNoteIdError(note_id)
    return ObjectId(note_id)


def derive_upload_filename(name: str) -> str:
    """
    Derives the filename a note is uploaded under.

    Spaces are removed, the final dot-extension (from the last "." to the
    end) is dropped, and ".txt" is appended. An empty stem becomes "note".

        "my note"     → "mynote.txt"
        "draft.v2.md" → "draft.v2.txt"
        "foo .txt"    → "foo.txt"
        ""            → "note.txt"
    """
    filename = name.replace(" ", "")
    stem, dot, _extension = filename.rpartition(".")
    if dot:
        filename = stem
    return f"{filename or UPLOAD_PLACEHOLDER_STEM}{UPLOAD_FILE_EXTENSION}"


def build_upload_form(note: Note) -> Tuple[bytes, str]:
    """
    Encodes a note as a multipart/form-data body with a single file part.

    Returns:
        (body, content_type) where content_type carries the generated boundary
    """
    request = httpx.Request(
        "POST",
        "/upload",
        files={
            UPLOAD_FIELD_NAME: (
                derive_upload_filename(note.name),
                note.text.encode("utf-8"),
                "application/octet-stream",
            )
        },
    )
    return request.read(), request.headers["Content-Type"]


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - get_notes / create_note / update_note / delete_note: note lifecycle
        - send_to_content_service(): note → multipart upload
        - validate_token() / set_token(): bearer token handling

    Error Handling Strategy:
        Identifier problems raise InvalidNoteIdError before the repository is
        touched. Repository and client errors propagate unchanged.
    """

    def __init__(
        self,
        repository: NoteRepository,
        token_validator: TokenValidator,
        content_uploader: ContentUploader,
        token: Optional[str] = None,
    ):
        self.repository = repository
        self.token_validator = token_validator
        self.content_uploader = content_uploader
        self._token = token

    async def ping(self) -> None:
        await self.repository.ping()

    async def get_notes(self, note_id: str = "") -> List[Note]:
        """
        Returns all notes when `note_id` is empty, otherwise the notes whose
        primary key equals the decoded id (zero or one in practice).
        """
        filter: Filter = {}
        if note_id:
            filter[PRIMARY_KEY] = decode_note_id(note_id)
        return await self.repository.get_notes(filter)

    async def create_note(self, request: NoteRequest) -> str:
        """
        Creates a note with a fresh ObjectId and the current timestamp.

        Returns:
            The new note's id as 24 lowercase hex characters
        """
        note = Note(
            id=str(ObjectId()),
            name=request.name,
            last_edited_ts=utc_now(),
            text=request.text,
        )
        await self.repository.create_note(note)
        logger.info("Note %s created", note.id)
        return note.id

    async def update_note(self, note_id: str, request: NoteRequest) -> None:
        """Replaces `name` and `text` and refreshes `lastEditedTs`."""
        filter: Filter = {PRIMARY_KEY: decode_note_id(note_id)}
        updates = {
            "$set": {
                "name": request.name,
                "text": request.text,
                "lastEditedTs": utc_now(),
            }
        }
        await self.repository.update_note(filter, updates)
        logger.info("Note %s updated", note_id)

    async def delete_note(self, note_id: str) -> None:
        filter: Filter = {PRIMARY_KEY: decode_note_id(note_id)}
        await self.repository.delete_note(filter)
        logger.info("Note %s deleted", note_id)

    async def send_to_content_service(self, note_id: str, token: Optional[str] = None) -> None:
        """
        Uploads a note's text to the content service as `<name>.txt`.

        Args:
            note_id: 24-hex id of the note to forward
            token:   bearer token for the upload; defaults to the one set on
                     this request's service via set_token()

        Raises:
            InvalidNoteIdError: malformed id
            NotFoundError:      no note has this id
            UnauthorizedError:  no bearer token is available
            ConfigMissingError / TransportError / UpstreamError: from the uploader
        """
        bearer = token or self._token
        if not bearer:
            raise UnauthorizedError(message="no bearer token available for content service")

        notes = await self.get_notes(note_id)
        if not notes:
            raise NotFoundError(message=f"Note with ID '{note_id}' was not found")
        note = notes[0]

        body, content_type = build_upload_form(note)
        await self.content_uploader.send(body, content_type, bearer)
        logger.info("Note %s sent to content service as %s", note_id, derive_upload_filename(note.name))

    async def validate_token(self, token: str) -> None:
        await self.token_validator.validate(token)

    def set_token(self, token: str) -> None:
        """Stores the caller's bearer token for uploads made by this request."""
        self._token = token
