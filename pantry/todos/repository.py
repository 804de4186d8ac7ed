"""Repository for todo items."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from bson import ObjectId

from pantry.core.json_store import JsonListFile
from pantry.todos.models import Todo


def _object_id(todo_id: str) -> ObjectId | None:
    return ObjectId(todo_id) if ObjectId.is_valid(todo_id) else None


def _from_mongo(doc: dict[str, Any]) -> Todo:
    return Todo(id=str(doc["_id"]), text=str(doc.get("text") or ""))


class TodoRepository:
    """Todo repository with MongoDB primary and file-store fallback."""

    def __init__(self, app_root: Path, db: Any = None) -> None:
        self._file = JsonListFile(app_root / "runtime" / "todo_store" / "todos.json")
        self._mongo_todos = db["todos"] if db is not None else None

    def list_todos(self) -> list[Todo]:
        if self._mongo_todos is not None:
            return [_from_mongo(doc) for doc in self._mongo_todos.find()]
        return [Todo.model_validate(row) for row in self._file.read()]

    def create_todo(self, text: str) -> Todo:
        todo = Todo(id=str(ObjectId()), text=text)
        if self._mongo_todos is not None:
            self._mongo_todos.insert_one({"_id": ObjectId(todo.id), "text": todo.text})
            return todo

        with self._file.lock:
            items = self._file.read()
            items.append(todo.model_dump())
            self._file.write(items)
        return todo

    def get_todo(self, todo_id: str) -> Todo | None:
        if self._mongo_todos is not None:
            oid = _object_id(todo_id)
            if oid is None:
                return None
            doc = self._mongo_todos.find_one({"_id": oid})
            return _from_mongo(doc) if doc else None

        for row in self._file.read():
            if row.get("id") == todo_id:
                return Todo.model_validate(row)
        return None

    def update_todo(self, todo_id: str, changes: dict[str, Any]) -> Todo | None:
        """Apply ``changes`` and return the updated item, or ``None`` if missing."""
        if self._mongo_todos is not None:
            oid = _object_id(todo_id)
            if oid is None:
                return None
            if changes:
                self._mongo_todos.update_one({"_id": oid}, {"$set": changes})
            doc = self._mongo_todos.find_one({"_id": oid})
            return _from_mongo(doc) if doc else None

        with self._file.lock:
            items = self._file.read()
            for row in items:
                if row.get("id") == todo_id:
                    row.update(changes)
                    self._file.write(items)
                    return Todo.model_validate(row)
        return None

    def delete_todo(self, todo_id: str) -> None:
        if self._mongo_todos is not None:
            oid = _object_id(todo_id)
            if oid is not None:
                self._mongo_todos.delete_one({"_id": oid})
            return

        with self._file.lock:
            items = self._file.read()
            self._file.write([row for row in items if row.get("id") != todo_id])
