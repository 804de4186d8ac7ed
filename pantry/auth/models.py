"""Pydantic models and result types for the authentication domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel

ADMIN_ROLE = "admin"
DEFAULT_ROLE = ""


class AuthUser(BaseModel):
    """Persisted user account."""

    user_id: str
    username: str
    email: str
    password_hash: str
    role: str = DEFAULT_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class SessionUser(BaseModel):
    """Minimal identity kept in the session store; never carries the hash."""

    id: str
    username: str
    role: str = DEFAULT_ROLE

    @classmethod
    def from_user(cls, user: AuthUser) -> "SessionUser":
        return cls(id=user.user_id, username=user.username, role=user.role)


class SessionRecord(BaseModel):
    """Session store persistence record."""

    sid: str
    user: SessionUser
    expires_at: int


class LoginRequest(BaseModel):
    """Login request payload; ``username`` may also hold an email."""

    username: str
    password: str


class RegisterRequest(BaseModel):
    """Signup request payload."""

    username: str
    password: str
    email: str


class CredentialFailure(StrEnum):
    """Business reasons a signup or login attempt is rejected."""

    USERNAME_LENGTH = "Invalid username length."
    LOGIN_NAME_LENGTH = "Invalid username/email length."
    PASSWORD_LENGTH = "Invalid password length."
    EMAIL_LENGTH = "Invalid email length."
    EMAIL_FORMAT = "Invalid email address."
    TAKEN = "That username/email is already taken."
    USER_NOT_FOUND = (
        "That user was not found. Please enter valid user credentials."
    )
    INVALID_PASSWORD = "Invalid password entered."


@dataclass(frozen=True)
class AuthSuccess:
    user: AuthUser


@dataclass(frozen=True)
class AuthFailure:
    reason: CredentialFailure


AuthResult = AuthSuccess | AuthFailure


class DuplicateUserError(Exception):
    """Raised by the repository when a unique username/email is violated."""
