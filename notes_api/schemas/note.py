"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract that is not the Note itself.
How:   NoteRequest is decoded from request bodies on create/update;
       ErrorResponse documents the error envelope in the OpenAPI schema.

Success bodies are bare JSON values (a string, a Note, or a list of Notes);
error bodies are always `{"error": "<message>"}`.
"""

from pydantic import BaseModel, Field, field_validator


class NoteRequest(BaseModel):
    """
    What:  Input accepted on POST /note and PUT /note/{id}.

    Missing or null fields decode as empty strings and unknown fields are ignored,
    so `{}` is a valid (if empty) request. No identifier is accepted.
    """

    name: str = Field(default="", description="Free-form label")
    text: str = Field(default="", description="Free-form body")

    @field_validator("name", "text", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """`null` decodes like a missing field."""
        return "" if v is None else v


class ErrorResponse(BaseModel):
    """
    What:  Error envelope returned for every failed request.

    Example:
        {"error": "no authorization header found"}
    """

    error: str = Field(description="Human-readable error description")
