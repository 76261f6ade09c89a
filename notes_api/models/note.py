"""
Notes API — Note Model
=======================

What:  The `Note` record as it travels over the wire and as it is stored in
       MongoDB.
How:   A Pydantic model with conversion helpers to and from BSON documents.
Who:   Built by NoteService on create; produced by NoteRepository on read;
       serialized by the routes.

Document layout (collection configured by COLLECTION):
    {
        "_id":          ObjectId("65a4f0c2e13b4a7d9c0f1a2b"),
        "name":         "groceries",
        "lastEditedTs": ISODate("2024-01-15T12:00:00.000Z"),
        "text":         "milk, eggs"
    }

JSON layout:
    {
        "id":           "65a4f0c2e13b4a7d9c0f1a2b",
        "name":         "groceries",
        "lastEditedTs": "2024-01-15T12:00:00Z",
        "text":         "milk, eggs"
    }

The identifier is a 12-byte ObjectId (4-byte timestamp prefix, 5-byte
process-random value, 3-byte counter); it is rendered as 24 lowercase hex
characters everywhere outside the store.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

# Primary key field of every MongoDB document
PRIMARY_KEY = "_id"


def utc_now() -> datetime:
    """
    Current UTC time truncated to milliseconds.

    BSON dates carry millisecond precision; truncating up front keeps the
    value returned on create identical to the value read back later.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class Note(BaseModel):
    """
    A user-authored note.

    Invariants:
        - `id` never changes after creation
        - `last_edited_ts` is set on create and refreshed on every update
        - `name` and `text` are unbounded free-form strings
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="24-character hex ObjectId")
    name: str = Field(default="", description="Free-form label")
    last_edited_ts: datetime = Field(
        alias="lastEditedTs",
        description="When the note was created or last edited (UTC, RFC 3339)",
    )
    text: str = Field(default="", description="Free-form body")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Note":
        """Builds a Note from a raw MongoDB document; missing or null strings read as ""."""
        last_edited = document.get("lastEditedTs")
        if last_edited is not None and last_edited.tzinfo is None:
            # Clients created without tz_aware=True hand back naive UTC values
            last_edited = last_edited.replace(tzinfo=timezone.utc)
        return cls(
            id=str(document[PRIMARY_KEY]),
            name=document.get("name") or "",
            last_edited_ts=last_edited or datetime.fromtimestamp(0, timezone.utc),
            text=document.get("text") or "",
        )

    def to_document(self) -> Dict[str, Any]:
        """Renders the note as a MongoDB document keyed by its ObjectId."""
        return {
            PRIMARY_KEY: ObjectId(self.id),
            "name": self.name,
            "lastEditedTs": self.last_edited_ts,
            "text": self.text,
        }
