"""Repository for user accounts and server-side session persistence."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pymongo.errors import DuplicateKeyError

from pantry.auth.models import AuthUser, DuplicateUserError, SessionRecord
from pantry.core.json_store import JsonListFile

LOGGER = logging.getLogger(__name__)


class AuthRepository:
    """Auth repository with MongoDB primary and file-store fallback.

    Usernames and emails are stored lower-cased by the service; lookups here
    are exact matches against those stored values.
    """

    def __init__(self, app_root: Path, db: Any = None) -> None:
        """Initialize repository storage backends."""
        fallback_dir = app_root / "runtime" / "auth_store"
        self._users_file = JsonListFile(fallback_dir / "users.json")
        self._sessions_file = JsonListFile(fallback_dir / "sessions.json")

        self._mongo_users = None
        self._mongo_sessions = None
        if db is not None:
            self._mongo_users = db["users"]
            self._mongo_sessions = db["sessions"]

    def find_user(self, *, username: str, email: str) -> AuthUser | None:
        """Get the first user whose username or email matches."""
        if self._mongo_users is not None:
            doc = self._mongo_users.find_one(
                {"$or": [{"username": username}, {"email": email}]}, {"_id": 0}
            )
            return AuthUser.model_validate(doc) if doc else None

        for row in self._users_file.read():
            if row.get("username") == username or row.get("email") == email:
                return AuthUser.model_validate(row)
        return None

    def find_user_by_login(self, login_name: str) -> AuthUser | None:
        """Get user whose username or email equals ``login_name``."""
        return self.find_user(username=login_name, email=login_name)

    def get_user_by_username(self, username: str) -> AuthUser | None:
        """Get user by stored (lower-cased) username."""
        if self._mongo_users is not None:
            doc = self._mongo_users.find_one({"username": username}, {"_id": 0})
            return AuthUser.model_validate(doc) if doc else None

        for row in self._users_file.read():
            if row.get("username") == username:
                return AuthUser.model_validate(row)
        return None

    def insert_user(self, user: AuthUser) -> None:
        """Insert a new user, raising ``DuplicateUserError`` on unique clash."""
        doc = user.model_dump()
        if self._mongo_users is not None:
            try:
                self._mongo_users.insert_one(doc)
            except DuplicateKeyError as exc:
                raise DuplicateUserError(str(exc)) from exc
            return

        with self._users_file.lock:
            items = self._users_file.read()
            for row in items:
                if row.get("username") == user.username or row.get("email") == user.email:
                    raise DuplicateUserError(
                        f"username/email already stored: {user.username}"
                    )
            items.append(doc)
            self._users_file.write(items)

    def delete_users(self, uid: str) -> list[str]:
        """Delete users matching ``uid`` by username, email or id.

        Returns the ids of the removed users.
        """
        key = uid.strip()
        lowered = key.lower()
        if self._mongo_users is not None:
            query = {
                "$or": [
                    {"username": lowered},
                    {"email": lowered},
                    {"user_id": key},
                ]
            }
            user_ids = [
                str(doc["user_id"])
                for doc in self._mongo_users.find(query, {"_id": 0, "user_id": 1})
            ]
            if user_ids:
                self._mongo_users.delete_many({"user_id": {"$in": user_ids}})
            return user_ids

        with self._users_file.lock:
            items = self._users_file.read()
            removed = [
                row
                for row in items
                if row.get("username") == lowered
                or row.get("email") == lowered
                or row.get("user_id") == key
            ]
            if removed:
                self._users_file.write([row for row in items if row not in removed])
        return [str(row.get("user_id", "")) for row in removed]

    def save_session(self, record: SessionRecord) -> None:
        """Create or replace a session record."""
        doc = record.model_dump()
        if self._mongo_sessions is not None:
            doc["expires_at_dt"] = datetime.fromtimestamp(
                record.expires_at, tz=timezone.utc
            )
            self._mongo_sessions.update_one(
                {"sid": record.sid}, {"$set": doc}, upsert=True
            )
            return

        with self._sessions_file.lock:
            items = self._sessions_file.read()
            next_items = [row for row in items if row.get("sid") != record.sid]
            next_items.append(doc)
            self._sessions_file.write(next_items)

    def get_session(self, sid: str) -> SessionRecord | None:
        """Get session record by session id."""
        if self._mongo_sessions is not None:
            doc = self._mongo_sessions.find_one(
                {"sid": sid}, {"_id": 0, "expires_at_dt": 0}
            )
            return SessionRecord.model_validate(doc) if doc else None

        for row in self._sessions_file.read():
            if row.get("sid") == sid:
                return SessionRecord.model_validate(row)
        return None

    def delete_session(self, sid: str) -> None:
        """Remove a session record if present."""
        if self._mongo_sessions is not None:
            self._mongo_sessions.delete_one({"sid": sid})
            return

        with self._sessions_file.lock:
            items = self._sessions_file.read()
            self._sessions_file.write([row for row in items if row.get("sid") != sid])

    def delete_sessions_for_users(self, user_ids: list[str]) -> int:
        """Remove every session owned by the given users."""
        if not user_ids:
            return 0
        if self._mongo_sessions is not None:
            result = self._mongo_sessions.delete_many({"user.id": {"$in": user_ids}})
            return int(result.deleted_count)

        owners = set(user_ids)
        with self._sessions_file.lock:
            items = self._sessions_file.read()
            kept = [
                row
                for row in items
                if str((row.get("user") or {}).get("id", "")) not in owners
            ]
            self._sessions_file.write(kept)
        return len(items) - len(kept)
