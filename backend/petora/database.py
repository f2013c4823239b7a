"""
Petora Backend - MongoDB Connection Management
===============================================

What:  Owns the async MongoDB client and hands out collection handles.
How:   Wraps PyMongo's `AsyncMongoClient`. The client is created on
       `connect()` (application startup) and closed on `close()` (shutdown).
Who:   Constructed by the application factory; used by the entity store and
       the health check.
When:  One instance per process, kept on `app.state.database`.

Collections:
    shelters, users, pets, applications

Indexes:
    users.email (unique), created by `ensure_indexes()` at startup. It backs
    the DuplicateKey condition raised on duplicate registration.
"""

import logging
from typing import Any, Optional

from pymongo import AsyncMongoClient

logger = logging.getLogger(__name__)

SHELTERS = "shelters"
USERS = "users"
PETS = "pets"
APPLICATIONS = "applications"


class MongoDatabase:
    """
    Lifecycle wrapper around the MongoDB client.

    Args:
        uri:              MongoDB connection string (settings.mongo_uri)
        default_database: Database used when the URI has no path component
        client:           Pre-built client (tests pass an in-memory fake).
                          When given, the instance is usable immediately.
    """

    def __init__(
        self,
        uri: str,
        default_database: str = "Petora",
        client: Optional[Any] = None,
        server_selection_timeout_ms: int = 5000,
    ):
        self.uri = uri
        self.default_database = default_database
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client = client
        self._db = None
        if client is not None:
            self._db = client.get_default_database(default=default_database)

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        """Create the client. Connection itself is established lazily by the driver."""
        if self._client is not None:
            return
        # tz_aware: timestamps come back as UTC-aware datetimes
        self._client = AsyncMongoClient(
            self.uri,
            tz_aware=True,
            serverSelectionTimeoutMS=self.server_selection_timeout_ms,
        )
        self._db = self._client.get_default_database(default=self.default_database)
        logger.info("MongoDB client created for database '%s'", self._db.name)

    async def close(self) -> None:
        """Close all pooled connections."""
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        self._db = None
        logger.info("MongoDB client closed")

    def collection(self, name: str):
        if self._db is None:
            raise RuntimeError("MongoDB is not connected. Call connect() on startup.")
        return self._db[name]

    async def ensure_indexes(self) -> None:
        await self.collection(USERS).create_index("email", unique=True)
        logger.info("Ensured unique index on %s.email", USERS)

    async def ping(self) -> bool:
        """Round-trip to the server; False when it cannot be reached."""
        if self._db is None:
            return False
        try:
            await self._db.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
