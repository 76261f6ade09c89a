"""
Notes API — Custom Exception Hierarchy
=======================================

What:  Defines application-specific exceptions for each failure kind.
How:   Each exception carries a message and an optional context dict, plus
       the HTTP status code it maps to. The handlers registered in main.py
       catch these and return `{"error": <message>}` with that status.
Who:   Raised by the repository, the outbound clients, the note service and
       the authorization dependency.

Exception Hierarchy:
    NotesAPIError (base)                    → 500
    ├── BadRequestError                     → 400 Bad Request
    │   └── InvalidNoteIdError              → 400 (id is not 24 hex chars)
    ├── UnauthorizedError                   → 401 Unauthorized
    ├── NotFoundError                       → 404 Not Found
    ├── StoreError                          → 500 (driver failure)
    │   └── StoreUnavailableError           → 500 (ping failed)
    ├── ConfigMissingError                  → 500 (collaborator URL unset)
    ├── TransportError                      → 500 (request could not be sent)
    ├── UpstreamError                       → 500 (non-200 from a collaborator)
    └── InternalInvariantError              → 500 (e.g. duplicate primary key hit)

Errors are not wrapped as they travel up: each layer raises the immediate
error and the message reaches the client verbatim.
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  Text placed in the `error` field of the response body
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(NotesAPIError):
    """
    Raised when the client sent something it can fix.

    When:  Missing or malformed Authorization header, undecodable JSON body,
           unparseable note identifier.
    """

    status_code = 400


class InvalidNoteIdError(BadRequestError):
    """Raised when a note identifier is not a 24-character hex string."""

    def __init__(self, note_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["note_id"] = note_id
        super().__init__(
            message=(
                f"'{note_id}' is not a valid note ID, "
                "it must be a 24-character hex string"
            ),
            context=ctx,
        )
        self.note_id = note_id


class UnauthorizedError(NotesAPIError):
    """Raised when the login service rejected the bearer token or could not be asked."""

    status_code = 401


class NotFoundError(NotesAPIError):
    """
    Raised when an update, delete or upload addresses a note that does not exist.

    MongoDB reports "nothing matched" through result objects rather than
    exceptions; the repository converts those results into this error.
    """

    status_code = 404


class StoreError(NotesAPIError):
    """
    Raised when a MongoDB operation fails.

    The message is the driver's own error text, e.g. an E11000 duplicate key
    report or a server selection timeout.
    """


class StoreUnavailableError(StoreError):
    """Raised when the primary cannot be reached by a ping."""


class ConfigMissingError(NotesAPIError):
    """Raised when an outbound client is used without its base URL configured."""


class TransportError(NotesAPIError):
    """Raised when an outbound request could not be sent or its response not received."""


class UpstreamError(NotesAPIError):
    """Raised when an external service answered with a non-200 status."""

    def __init__(
        self,
        message: str = "non-200 status code received",
        status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status is not None:
            ctx["upstream_status"] = status
        super().__init__(message=message, context=ctx)
        self.status = status


class InternalInvariantError(NotesAPIError):
    """Raised when data violates an assumption the service relies on."""
