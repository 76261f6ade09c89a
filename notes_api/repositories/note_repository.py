"""
Notes API — Note Repository (Data Access)
==========================================

What:  Thin adapter over the notes collection exposing note CRUD.
How:   Filters and update documents are opaque mappings built by NoteService;
       this layer only runs them against MongoDB and converts driver results
       and driver exceptions into application ones.
Who:   Used by NoteService; one instance per process, shared by all requests.

Operation mapping:
    ping()                  → admin.command("ping") against the primary
    get_notes(filter)       → find(filter)
    create_note(note)       → insert_one(document)
    update_note(filter, u)  → find_one_and_update(filter, u)
    delete_note(filter)     → delete_one(filter)

Every call is awaited inside the request task, so cancelling the request
(client disconnect or deadline expiry) cancels the in-flight driver call.
"""

import logging
from typing import Any, Dict, List, Mapping

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReadPreference
from pymongo.errors import PyMongoError

from notes_api.exceptions import NotFoundError, StoreError, StoreUnavailableError
from notes_api.models.note import Note

logger = logging.getLogger(__name__)

Filter = Dict[str, Any]


class NoteRepository:
    """
    Note CRUD over a single MongoDB collection.

    Error Handling Strategy:
        PyMongoError (any driver failure)   → StoreError(<driver message>)
        ping failure                        → StoreUnavailableError
        update/delete matching no document  → NotFoundError
    """

    def __init__(self, client: AsyncIOMotorClient, database: str, collection: str):
        self._client = client
        self.database = database
        self.collection_name = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self._client[self.database][self.collection_name]

    async def ping(self) -> None:
        """
        Liveness probe against the primary.

        Raises:
            StoreUnavailableError: no primary could be reached
        """
        try:
            await self._client.admin.command("ping", read_preference=ReadPreference.PRIMARY)
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", e)
            raise StoreUnavailableError(
                message=str(e) or "database is unavailable",
                context={"error_type": type(e).__name__},
            )

    async def get_notes(self, filter: Filter) -> List[Note]:
        """
        Returns every note matching `filter`, in natural order.

        An empty filter matches the whole collection.
        """
        try:
            cursor = self.collection.find(filter)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise _store_error(e, "find")
        return [Note.from_document(doc) for doc in documents]

    async def create_note(self, note: Note) -> None:
        """Inserts exactly one note; a duplicate `_id` surfaces as StoreError."""
        try:
            await self.collection.insert_one(note.to_document())
        except PyMongoError as e:
            raise _store_error(e, "insert_one")

    async def update_note(self, filter: Filter, updates: Mapping[str, Any]) -> None:
        """
        Atomically applies `updates` to the first note matching `filter`.

        Raises:
            NotFoundError: nothing matched
            StoreError:    the driver reported a failure
        """
        try:
            previous = await self.collection.find_one_and_update(filter, updates)
        except PyMongoError as e:
            raise _store_error(e, "find_one_and_update")
        if previous is None:
            raise NotFoundError(message="no notes were updated", context={"filter": str(filter)})

    async def delete_note(self, filter: Filter) -> None:
        """
        Deletes at most one note matching `filter`.

        Raises:
            NotFoundError: nothing was deleted
            StoreError:    the driver reported a failure
        """
        try:
            result = await self.collection.delete_one(filter)
        except PyMongoError as e:
            raise _store_error(e, "delete_one")
        if result.deleted_count == 0:
            raise NotFoundError(message="no notes were deleted", context={"filter": str(filter)})


def _store_error(exc: PyMongoError, operation: str) -> StoreError:
    logger.error("MongoDB %s failed: %s", operation, exc)
    return StoreError(
        message=str(exc) or f"{operation} failed",
        context={"operation": operation, "error_type": type(exc).__name__},
    )
