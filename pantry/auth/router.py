"""Authentication API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from pantry.api.contracts import (
    ApiErrorResponse,
    SessionUserResponse,
    UsernameAvailabilityResponse,
)
from pantry.api.errors import ApiError, ApiErrorCode
from pantry.auth.deps import current_session_user, requires_admin, requires_auth
from pantry.auth.models import AuthFailure, LoginRequest, RegisterRequest, SessionUser
from pantry.auth.service import AuthService


def _set_session_cookie(response: Response, service: AuthService, value: str) -> None:
    response.set_cookie(
        key=service.cookie_name,
        value=value,
        max_age=service.session_ttl_seconds,
        httponly=True,
        secure=service.cookie_secure,
        samesite="lax",
        path="/",
    )


def create_auth_router(service: AuthService) -> APIRouter:
    """Build authentication router with login/logout/register/session endpoints."""
    router = APIRouter(tags=["auth"])

    @router.get(
        "/api/auth/authenticate",
        response_model=None,
        responses={200: {"model": SessionUserResponse}},
    )
    def authenticate(
        user: SessionUser | None = Depends(current_session_user),
    ) -> Response:
        """Return the session identity, or a literal ``0`` when anonymous."""
        if user is None:
            return PlainTextResponse("0")
        return JSONResponse(SessionUserResponse(**user.model_dump()).model_dump())

    @router.post(
        "/api/auth/login",
        response_model=SessionUserResponse,
        responses={401: {"model": ApiErrorResponse}},
    )
    def login(
        req: LoginRequest, request: Request, response: Response
    ) -> SessionUserResponse:
        """Check credentials and open a server-side session."""
        result = service.login(req.username, req.password)
        if isinstance(result, AuthFailure):
            raise ApiError(
                status_code=401,
                error_code=ApiErrorCode.AUTH_INVALID_CREDENTIALS,
                message=result.reason.value,
            )
        cookie_value, session_user = service.open_session(
            result.user, previous_cookie=request.cookies.get(service.cookie_name)
        )
        _set_session_cookie(response, service, cookie_value)
        return SessionUserResponse(**session_user.model_dump())

    @router.post(
        "/api/auth/logout",
        status_code=401,
        responses={401: {"model": ApiErrorResponse}},
    )
    def logout(request: Request) -> JSONResponse:
        """Destroy the session; always answers 401 as the signed-out signal."""
        service.close_session(request.cookies.get(service.cookie_name))
        response = JSONResponse(
            status_code=401,
            content=ApiErrorResponse(
                error_code=ApiErrorCode.AUTH_UNAUTHORIZED,
                message="Unauthorized",
            ).model_dump(),
        )
        response.delete_cookie(service.cookie_name, path="/")
        return response

    @router.post(
        "/api/auth/register",
        status_code=204,
        response_class=Response,
        responses={409: {"model": ApiErrorResponse}},
    )
    def register(req: RegisterRequest) -> Response:
        """Create a user account; does not sign the user in."""
        result = service.signup(req.username, req.password, req.email)
        if isinstance(result, AuthFailure):
            raise ApiError(
                status_code=409,
                error_code=ApiErrorCode.AUTH_CONFLICT,
                message=result.reason.value,
            )
        return Response(status_code=204)

    @router.delete(
        "/api/auth/delete/{uid}",
        status_code=204,
        response_class=Response,
        dependencies=[Depends(requires_admin)],
        responses={401: {"model": ApiErrorResponse}},
    )
    def delete_user(uid: str) -> Response:
        """Delete users matching username, email or id."""
        service.delete_user(uid)
        return Response(status_code=204)

    @router.get(
        "/api/auth/session",
        response_model=SessionUserResponse,
        responses={401: {"model": ApiErrorResponse}},
    )
    def session(user: SessionUser = Depends(requires_auth)) -> SessionUserResponse:
        """Return the raw session identity."""
        return SessionUserResponse(**user.model_dump())

    return router


def create_validation_router(service: AuthService) -> APIRouter:
    """Build router for client-side form validation lookups."""
    router = APIRouter(tags=["validation"])

    @router.get(
        "/api/validate/username/{username}",
        response_model=None,
        responses={
            404: {"model": UsernameAvailabilityResponse},
            409: {"model": UsernameAvailabilityResponse},
        },
    )
    def validate_username(username: str) -> JSONResponse:
        """Answer 409 when the username is taken and 404 when it is free."""
        taken = service.username_taken(username)
        return JSONResponse(
            status_code=409 if taken else 404,
            content=UsernameAvailabilityResponse(username_taken=taken).model_dump(
                by_alias=True
            ),
        )

    return router
