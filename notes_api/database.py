"""
Notes API — MongoDB Client Management
======================================

What:  Builds and disposes the long-lived Motor client.
How:   One AsyncIOMotorClient is created at startup (lifespan) and shared by
       every request through NoteRepository. The client owns a connection
       pool; nothing connects per request.
Who:   Called by the lifespan handler in main.py.

Client options:
    serverSelectionTimeoutMS: bounds how long an operation waits for a
        reachable server before failing (MONGO_SERVER_SELECTION_TIMEOUT_MS)
    tz_aware=True:            dates come back as timezone-aware UTC datetimes
    appname:                  shows up in server logs and currentOp output
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient

from notes_api.config import Settings

logger = logging.getLogger(__name__)


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """
    What:  Creates the Motor client for the configured deployment.
    When:  Once, during application startup.

    The driver connects lazily: a wrong URI or an unreachable server surfaces
    on the first operation (or on GET /health), not here.
    """
    client = AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        tz_aware=True,
        appname="notes-api",
    )
    logger.info(
        "MongoDB client created (database=%s, collection=%s)",
        settings.database,
        settings.collection,
    )
    return client


def close_mongo_client(client: AsyncIOMotorClient) -> None:
    """
    What:  Closes every pooled connection.
    When:  Called during application shutdown (lifespan handler).
    """
    client.close()
    logger.info("MongoDB client closed")
