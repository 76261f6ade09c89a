"""
Notes API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── in_memory_repository: NoteRepository stand-in backed by a dict
    ├── login_service / content_service: httpx.MockTransport recorders
    ├── token_validator / content_uploader: real clients on mock transports
    ├── note_service: NoteService wired to the fixtures above
    ├── test_app: the FastAPI app with get_note_service overridden
    └── test_client: HTTPX AsyncClient talking to test_app
"""

import os
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["LOGIN_SERVICE_URL"] = "http://login.test"
os.environ["CONTENT_SERVICE_URL"] = "http://content.test"
os.environ["LOG_LEVEL"] = "WARNING"

from notes_api.exceptions import NotFoundError  # noqa: E402
from notes_api.models.note import Note  # noqa: E402
from notes_api.services.content_uploader import ContentUploader  # noqa: E402
from notes_api.services.note_service import NoteService  # noqa: E402
from notes_api.services.token_validator import TokenValidator  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

class InMemoryNoteRepository:
    """
    Dict-backed stand-in for NoteRepository.

    Understands the only filters NoteService builds ({} and {"_id": oid}) and
    the `$set` update operator. Records every filter it receives.
    """

    def __init__(self) -> None:
        self.documents: Dict[Any, Dict[str, Any]] = {}
        self.calls: List[str] = []

    def _matches(self, filter: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return [
            doc for doc in self.documents.values()
            if all(doc.get(key) == value for key, value in filter.items())
        ]

    async def ping(self) -> None:
        self.calls.append("ping")

    async def get_notes(self, filter):
        self.calls.append("get_notes")
        return [Note.from_document(doc) for doc in self._matches(filter)]

    async def create_note(self, note: Note) -> None:
        self.calls.append("create_note")
        document = note.to_document()
        self.documents[document["_id"]] = document

    async def update_note(self, filter, updates) -> None:
        self.calls.append("update_note")
        matches = self._matches(filter)
        if not matches:
            raise NotFoundError(message="no notes were updated")
        matches[0].update(updates.get("$set", {}))

    async def delete_note(self, filter) -> None:
        self.calls.append("delete_note")
        matches = self._matches(filter)
        if not matches:
            raise NotFoundError(message="no notes were deleted")
        del self.documents[matches[0]["_id"]]


class RecordingService:
    """
    httpx.MockTransport handler that records requests and answers with a
    configurable status code.
    """

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: List[httpx.Request] = []
        self.bodies: List[bytes] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        return httpx.Response(self.status_code)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_note() -> Note:
    return Note(
        id="65a4f0c2e13b4a7d9c0f1a2b",
        name="my file.md",
        last_edited_ts=datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
        text="body",
    )


@pytest.fixture
def in_memory_repository() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture
def login_service() -> RecordingService:
    return RecordingService(status_code=200)


@pytest.fixture
def content_service() -> RecordingService:
    return RecordingService(status_code=200)


@pytest.fixture
def token_validator(login_service) -> TokenValidator:
    client = httpx.AsyncClient(transport=httpx.MockTransport(login_service))
    return TokenValidator(client, "http://login.test")


@pytest.fixture
def content_uploader(content_service) -> ContentUploader:
    client = httpx.AsyncClient(transport=httpx.MockTransport(content_service))
    return ContentUploader(client, "http://content.test")


@pytest.fixture
def note_service_factory(
    in_memory_repository, token_validator, content_uploader
) -> Callable[[], NoteService]:
    """Builds a fresh NoteService per call, as get_note_service does per request."""

    def factory() -> NoteService:
        return NoteService(
            repository=in_memory_repository,
            token_validator=token_validator,
            content_uploader=content_uploader,
        )

    return factory


@pytest.fixture
def note_service(note_service_factory) -> NoteService:
    return note_service_factory()


@pytest.fixture
def test_app(note_service_factory):
    """
    The application with its per-request NoteService wired to test doubles.

    ASGITransport does not run the lifespan, so app.state stays empty and
    every service comes from the override.
    """
    from notes_api.main import app
    from notes_api.routes.deps import get_note_service

    app.dependency_overrides[get_note_service] = note_service_factory
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
