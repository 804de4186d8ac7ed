"""API error codes and the exception that carries them."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from fastapi import HTTPException


class ApiErrorCode(StrEnum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_UNAUTHORIZED = "AUTH_UNAUTHORIZED"
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_CONFLICT = "AUTH_CONFLICT"
    TODO_NOT_FOUND = "TODO_NOT_FOUND"
    RECIPE_NOT_FOUND = "RECIPE_NOT_FOUND"
    REQUEST_TOO_LARGE = "REQUEST_TOO_LARGE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ApiError(HTTPException):
    """``HTTPException`` whose detail is already an ``{error_code, message}`` body."""

    def __init__(
        self, *, status_code: int, error_code: ApiErrorCode, message: str
    ) -> None:
        super().__init__(
            status_code=status_code,
            detail={"error_code": str(error_code), "message": message},
        )


def unauthorized() -> ApiError:
    """Single denial used for both missing sessions and insufficient role."""
    return ApiError(
        status_code=401,
        error_code=ApiErrorCode.AUTH_UNAUTHORIZED,
        message="Unauthorized",
    )


def to_error_payload(detail: Any, status_code: int) -> dict[str, str]:
    """Coerce any ``HTTPException.detail`` into the error body shape."""
    fallback_code = f"HTTP_{status_code}"
    if not isinstance(detail, dict):
        return {"error_code": fallback_code, "message": str(detail or "HTTP error")}
    return {
        "error_code": str(detail.get("error_code") or fallback_code),
        "message": str(detail.get("message") or detail.get("detail") or "HTTP error"),
    }
