"""Authentication service for signup, login and session lifecycle."""

from __future__ import annotations

import logging
import time
from typing import Protocol

from bson import ObjectId

from pantry.auth.models import (
    ADMIN_ROLE,
    DEFAULT_ROLE,
    AuthFailure,
    AuthResult,
    AuthSuccess,
    AuthUser,
    CredentialFailure,
    DuplicateUserError,
    SessionRecord,
    SessionUser,
)
from pantry.auth.validation import validate_login, validate_signup
from pantry.core.config import AuthConfig, SessionConfig
from pantry.core.security import (
    hash_password,
    new_session_id,
    sign_session_id,
    unsign_session_id,
    verify_password,
)

LOGGER = logging.getLogger(__name__)


class UserStore(Protocol):
    def find_user(self, *, username: str, email: str) -> AuthUser | None: ...

    def find_user_by_login(self, login_name: str) -> AuthUser | None: ...

    def get_user_by_username(self, username: str) -> AuthUser | None: ...

    def insert_user(self, user: AuthUser) -> None: ...

    def delete_users(self, uid: str) -> list[str]: ...

    def save_session(self, record: SessionRecord) -> None: ...

    def get_session(self, sid: str) -> SessionRecord | None: ...

    def delete_session(self, sid: str) -> None: ...

    def delete_sessions_for_users(self, user_ids: list[str]) -> int: ...


class AuthService:
    """Authentication domain service.

    ``signup`` and ``login`` return an ``AuthSuccess`` or ``AuthFailure``
    value for user-correctable problems; storage errors raised by the
    repository propagate unchanged.
    """

    def __init__(
        self, repo: UserStore, session_config: SessionConfig, auth_config: AuthConfig
    ) -> None:
        self._repo = repo
        self._session_config = session_config
        self._auth_config = auth_config

    @property
    def cookie_name(self) -> str:
        return self._session_config.cookie_name

    @property
    def session_ttl_seconds(self) -> int:
        return self._session_config.ttl_seconds

    @property
    def cookie_secure(self) -> bool:
        return self._session_config.cookie_secure

    def signup(
        self, username: str, password: str, email: str, *, role: str = DEFAULT_ROLE
    ) -> AuthResult:
        """Validate credentials and create a new user account."""
        failure = validate_signup(username, password, email)
        if failure is not None:
            return AuthFailure(failure)

        username_key = username.lower()
        email_key = email.lower()
        if self._repo.find_user(username=username_key, email=email_key) is not None:
            return AuthFailure(CredentialFailure.TAKEN)

        user = AuthUser(
            user_id=str(ObjectId()),
            username=username_key,
            email=email_key,
            password_hash=hash_password(password),
            role=role,
        )
        try:
            self._repo.insert_user(user)
        except DuplicateUserError:
            # Lost a concurrent signup race to the unique index.
            return AuthFailure(CredentialFailure.TAKEN)

        LOGGER.info(
            "user_registered",
            extra={"user_id": user.user_id, "username": user.username, "role": role},
        )
        return AuthSuccess(user)

    def login(self, login_name: str, password: str) -> AuthResult:
        """Check credentials; ``login_name`` may be a username or an email."""
        failure = validate_login(login_name, password)
        if failure is not None:
            return AuthFailure(failure)

        user = self._repo.find_user_by_login(login_name.lower())
        if user is None:
            return AuthFailure(CredentialFailure.USER_NOT_FOUND)
        if not verify_password(password, user.password_hash):
            return AuthFailure(CredentialFailure.INVALID_PASSWORD)
        return AuthSuccess(user)

    def bootstrap_admin_user(self) -> None:
        """Ensure the configured admin account exists."""
        if not self._auth_config.admin_password:
            return
        result = self.signup(
            self._auth_config.admin_username,
            self._auth_config.admin_password,
            self._auth_config.admin_email,
            role=ADMIN_ROLE,
        )
        if isinstance(result, AuthFailure) and result.reason != CredentialFailure.TAKEN:
            LOGGER.warning("Admin bootstrap skipped: %s", result.reason.value)

    def open_session(
        self, user: AuthUser, *, previous_cookie: str | None = None
    ) -> tuple[str, SessionUser]:
        """Persist a session for ``user`` and return ``(cookie_value, payload)``."""
        if previous_cookie:
            self.close_session(previous_cookie)

        session_user = SessionUser.from_user(user)
        sid = new_session_id()
        self._repo.save_session(
            SessionRecord(
                sid=sid,
                user=session_user,
                expires_at=int(time.time()) + self._session_config.ttl_seconds,
            )
        )
        LOGGER.info(
            "session_opened",
            extra={"user_id": session_user.id, "username": session_user.username},
        )
        return sign_session_id(sid, self._session_config.secret_key), session_user

    def restore_session(self, cookie_value: str | None) -> SessionUser | None:
        """Return the session identity for a cookie, without touching users."""
        sid = self._session_id_from_cookie(cookie_value)
        if not sid:
            return None
        record = self._repo.get_session(sid)
        if record is None:
            return None
        if record.expires_at <= int(time.time()):
            self._repo.delete_session(sid)
            return None
        return record.user

    def close_session(self, cookie_value: str | None) -> None:
        """Destroy the session referenced by a cookie, if any."""
        sid = self._session_id_from_cookie(cookie_value)
        if sid:
            self._repo.delete_session(sid)
            LOGGER.info("session_closed")

    def delete_user(self, uid: str) -> list[str]:
        """Delete users matching ``uid`` and revoke their sessions."""
        deleted_ids = self._repo.delete_users(uid)
        self._repo.delete_sessions_for_users(deleted_ids)
        LOGGER.info(
            "users_deleted",
            extra={"resource_id": uid, "deleted_count": len(deleted_ids)},
        )
        return deleted_ids

    def username_taken(self, username: str) -> bool:
        key = username.strip().lower()
        return self._repo.get_user_by_username(key) is not None

    def _session_id_from_cookie(self, cookie_value: str | None) -> str:
        if not cookie_value:
            return ""
        try:
            return unsign_session_id(cookie_value, self._session_config.secret_key)
        except ValueError:
            return ""
