from __future__ import annotations

from typing import Any

import pytest
from pymongo.errors import OperationFailure

from pantry.core.mongo_migrations import MIGRATIONS, apply_mongo_migrations


class _Collection:
    def __init__(self) -> None:
        self.indexes: list[tuple[Any, dict[str, Any]]] = []
        self.docs: list[dict[str, Any]] = []

    def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append((keys, kwargs))
        return str(keys)

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if all(doc.get(key) == value for key, value in query.items()):
                return doc
        return None

    def insert_one(self, doc: dict[str, Any]) -> None:
        self.docs.append(doc)


class _Db:
    def __init__(self) -> None:
        self.collections: dict[str, _Collection] = {}

    def __getitem__(self, name: str) -> _Collection:
        return self.collections.setdefault(name, _Collection())


def test_apply_mongo_migrations_without_db() -> None:
    assert apply_mongo_migrations(None) == []


def test_apply_mongo_migrations_runs_each_once() -> None:
    db = _Db()

    first = apply_mongo_migrations(db)
    second = apply_mongo_migrations(db)

    assert first == [migration_id for migration_id, _ in MIGRATIONS]
    assert second == []
    user_index_keys = [keys for keys, _ in db["users"].indexes]
    assert user_index_keys == ["user_id", "username", "email"]
    ttl = [opts for keys, opts in db["sessions"].indexes if keys == "expires_at_dt"]
    assert ttl == [{"expireAfterSeconds": 0, "name": "idx_sessions_expires_at_ttl"}]


def test_apply_mongo_migrations_reraises_driver_errors() -> None:
    class _FailingDb(_Db):
        def __getitem__(self, name: str) -> _Collection:
            if name == "users":
                raise OperationFailure("not authorized")
            return super().__getitem__(name)

    with pytest.raises(OperationFailure):
        apply_mongo_migrations(_FailingDb())
