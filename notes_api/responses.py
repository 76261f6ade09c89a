"""
Notes API — Response Envelope
==============================

What:  The JSON response class and error envelope shared by routes,
       exception handlers and middleware.

Every response carries `Content-Type: application/json; charset=utf-8`.
Success bodies are the encoded value itself; error bodies are
`{"error": "<message>"}`; 204 responses have no body.
"""

from http import HTTPStatus

from starlette.responses import JSONResponse, Response

JSON_MEDIA_TYPE = "application/json; charset=utf-8"


class NotesJSONResponse(JSONResponse):
    """JSONResponse that always declares the UTF-8 charset."""

    media_type = JSON_MEDIA_TYPE


def error_response(status_code: int, message: str) -> NotesJSONResponse:
    """
    Builds the `{"error": ...}` envelope.

    An empty message falls back to the status' reason phrase so clients never
    receive a blank error.
    """
    if not message:
        try:
            message = HTTPStatus(status_code).phrase
        except ValueError:
            message = "error"
    return NotesJSONResponse(status_code=status_code, content={"error": message})


def no_content_response() -> Response:
    return Response(status_code=204, media_type=JSON_MEDIA_TYPE)
