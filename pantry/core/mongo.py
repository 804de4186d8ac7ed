"""MongoDB connection lifecycle shared by repositories."""

from __future__ import annotations

import logging
from typing import Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from pantry.core.config import DatabaseConfig

LOGGER = logging.getLogger(__name__)


class MongoConnection:
    """Lazily verified client handle; ``db`` is ``None`` when Mongo is unavailable."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._client: MongoClient | None = None
        self.db: Any = None

    def connect(self) -> Any:
        """Connect and ping the server, returning the database or ``None``."""
        if not self._config.mongodb_uri:
            LOGGER.warning("MONGODB_URI is empty, using file store fallback")
            return None

        client: MongoClient = MongoClient(
            self._config.mongodb_uri, serverSelectionTimeoutMS=3000
        )
        try:
            client.admin.command("ping")
        except PyMongoError:
            LOGGER.warning(
                "MongoDB is unreachable, using file store fallback", exc_info=True
            )
            client.close()
            return None

        LOGGER.info("Connected to MongoDB database %s", self._config.mongodb_db)
        self._client = client
        self.db = client[self._config.mongodb_db]
        return self.db

    def close(self) -> None:
        """Close the client if it was opened."""
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self.db = None
        LOGGER.info("MongoDB connection closed")
