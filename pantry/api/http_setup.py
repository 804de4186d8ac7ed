"""Request middleware and error handlers shared by the pantry API."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from pantry.api.contracts import ApiErrorResponse
from pantry.api.errors import ApiErrorCode, to_error_payload
from pantry.core.config import AppConfig
from pantry.core.logging import set_correlation_id

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

# Sent on /api/ responses only.
API_CONTENT_SECURITY_POLICY = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"


def _error_response(
    status_code: int,
    error_code: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ApiErrorResponse(error_code=error_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _log_fields(request: Request, status_code: int, **extra: Any) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "status_code": status_code,
        **extra,
    }


def _declared_length(request: Request) -> int:
    raw = request.headers.get("content-length") or "0"
    try:
        return int(raw)
    except ValueError:
        return 0


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request payload."
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = str(first.get("msg") or "Invalid value")
    return f"{field}: {reason}" if field else reason


def register_http_middleware(app: FastAPI, *, config: AppConfig, logger: Any) -> None:
    """Install body-size limiting plus request-id and response-header middleware."""
    limit = config.security.request_max_bytes

    @app.middleware("http")
    async def request_size_limit_middleware(request: Request, call_next):
        if _declared_length(request) > limit:
            logger.warning("request_too_large", extra=_log_fields(request, 413))
            return _error_response(
                413,
                ApiErrorCode.REQUEST_TOO_LARGE,
                f"Request size exceeds configured limit ({limit} bytes).",
            )
        return await call_next(request)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = (
            request.headers.get("x-request-id")
            or request.headers.get("x-correlation-id")
            or uuid.uuid4().hex
        )
        set_correlation_id(request_id)

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        response.headers.update(SECURITY_HEADERS)
        if request.url.path.startswith("/api/"):
            response.headers["Content-Security-Policy"] = API_CONTENT_SECURITY_POLICY
        logger.info(
            "request_completed", extra=_log_fields(request, response.status_code)
        )
        return response


def register_exception_handlers(app: FastAPI, *, logger: Any) -> None:
    """Map framework and unexpected errors onto the ``{error_code, message}`` body."""

    @app.exception_handler(HTTPException)
    async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
        payload = to_error_payload(exc.detail, exc.status_code)
        logger.warning(
            "http_exception",
            extra=_log_fields(request, exc.status_code, error_code=payload["error_code"]),
        )
        return _error_response(
            exc.status_code,
            payload["error_code"],
            payload["message"],
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_exception(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("validation_exception", extra=_log_fields(request, 422))
        return _error_response(
            422, ApiErrorCode.VALIDATION_ERROR, _validation_message(exc)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected_exception", extra=_log_fields(request, 500))
        return _error_response(
            500, ApiErrorCode.INTERNAL_SERVER_ERROR, "Internal server error"
        )
