"""Route guards for session-authenticated and admin-only endpoints."""

from __future__ import annotations

from fastapi import Depends, Request

from pantry.api.errors import unauthorized
from pantry.auth.models import ADMIN_ROLE, SessionUser


def current_session_user(request: Request) -> SessionUser | None:
    return getattr(request.state, "user", None)


def requires_auth(
    user: SessionUser | None = Depends(current_session_user),
) -> SessionUser:
    if user is None:
        raise unauthorized()
    return user


def requires_admin(user: SessionUser = Depends(requires_auth)) -> SessionUser:
    # Same denial as a missing session.
    if user.role != ADMIN_ROLE:
        raise unauthorized()
    return user
