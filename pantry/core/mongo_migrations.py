"""Versioned MongoDB index migrations for application collections."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from pymongo.errors import PyMongoError

from pantry.core.logging import CORRELATION_ID_CTX

LOGGER = logging.getLogger(__name__)

MigrationFn = Callable[[Any], None]


def _migration_01_user_indexes(db: Any) -> None:
    db["users"].create_index("user_id", unique=True)
    db["users"].create_index("username", unique=True)
    db["users"].create_index("email", unique=True)


def _migration_02_session_indexes(db: Any) -> None:
    db["sessions"].create_index("sid", unique=True)
    db["sessions"].create_index("user.id")
    db["sessions"].create_index(
        "expires_at_dt",
        expireAfterSeconds=0,
        name="idx_sessions_expires_at_ttl",
    )


MIGRATIONS: list[tuple[str, MigrationFn]] = [
    ("0001_user_indexes", _migration_01_user_indexes),
    ("0002_session_indexes", _migration_02_session_indexes),
]


def apply_mongo_migrations(db: Any) -> list[str]:
    """Apply pending migrations to ``db`` and return the ids applied now."""
    if db is None:
        return []

    applied: list[str] = []
    try:
        migration_collection = db["schema_migrations"]
        migration_collection.create_index("migration_id", unique=True)

        for migration_id, migration_fn in MIGRATIONS:
            if migration_collection.find_one({"migration_id": migration_id}):
                continue
            migration_fn(db)
            migration_collection.insert_one(
                {
                    "migration_id": migration_id,
                    "applied_at": datetime.now(timezone.utc),
                    "correlation_id": CORRELATION_ID_CTX.get(),
                }
            )
            applied.append(migration_id)
            LOGGER.info("Applied Mongo migration %s", migration_id)
    except PyMongoError:
        LOGGER.exception("Mongo migrations failed")
        raise
    return applied
