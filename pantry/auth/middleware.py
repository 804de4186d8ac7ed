"""HTTP middleware that restores the session identity onto each request."""

from __future__ import annotations

from typing import Callable

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from pantry.auth.service import AuthService


def create_session_middleware(service: AuthService) -> Callable:
    """Create middleware that attaches ``request.state.user`` from the session cookie."""

    async def session_middleware(request: Request, call_next: Callable):
        """Look up the session record for the cookie; no user-store query."""
        request.state.user = None
        cookie_value = request.cookies.get(service.cookie_name)
        if cookie_value:
            request.state.user = await run_in_threadpool(
                service.restore_session, cookie_value
            )
        return await call_next(request)

    return session_middleware
