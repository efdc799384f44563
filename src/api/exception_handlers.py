"""Exception handlers for the FastAPI application.

Every error leaves the API with the same body:
``{"error_code": ..., "message": ..., "details": ...}``.
"""

from typing import Any, Sequence

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()

# Token problems, as opposed to ownership failures that share status 401
_CHALLENGE_CODES = {ErrorCode.UNAUTHORIZED, ErrorCode.INVALID_TOKEN}

_HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}

_LOCATIONS = ("body", "path", "query", "header")


def _error_body(error_code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {"error_code": error_code, "message": message, "details": details}


def _field_details(loc: Sequence[Any]) -> tuple[str, str | None]:
    """Split a pydantic error location into (field, location)."""
    parts = [str(part) for part in loc]
    location = None
    if parts and parts[0] in _LOCATIONS:
        location = parts.pop(0)
    return ".".join(parts) or (location or ""), location


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
            request_id=getattr(request.state, "request_id", None),
        )

        headers = None
        if exc.error_code in _CHALLENGE_CODES:
            headers = {"WWW-Authenticate": "Bearer"}

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code.value, exc.message, exc.details),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle routing errors raised by Starlette (unknown path, wrong method)."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
                str(exc.detail),
            ),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report each invalid or missing field."""
        details = []
        for error in exc.errors():
            field, location = _field_details(error["loc"])
            details.append(
                {
                    "field": field,
                    "location": location,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )

        logger.info("validation_error", fields=[d["field"] for d in details])
        return JSONResponse(
            status_code=422,
            content=_error_body(
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                details,
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorCode.INTERNAL_ERROR.value,
                message,
                {"request_id": request_id},
            ),
        )
