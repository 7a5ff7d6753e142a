"""HTTP rendering of errors.

Every error leaves the API as the same envelope:
``{error_code, message, details, request_id}``.
"""

import logging
import uuid
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from vocabkeep.core.app_exceptions import AppError

logger = logging.getLogger(__name__)

# HTTP status for each application error code
STATUS_BY_CODE: dict[str, int] = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_SERVER_MESSAGE = "An internal server error occurred"


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error_code: str
    message: str
    details: Any | None = None
    request_id: str | None = None


def get_request_id(request: Request) -> str:
    """Request ID set by the middleware, or a fresh one outside it."""
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        request_id=get_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map application errors onto their HTTP status.

    Server-side failures were logged where they were raised; only a generic
    message leaves the process.
    """
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        return error_response(request, status_code, exc.code, GENERIC_SERVER_MESSAGE)
    return error_response(request, status_code, exc.code, exc.message, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body, path or header failed schema validation (422)."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "issue": error.get("msg", "Validation error"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Invalid request data",
        details,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(request, exc.status_code, "HTTP_ERROR", message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything not raised as an AppError."""
    request_id = get_request_id(request)
    logger.error(
        "Unhandled exception",
        extra={"request_id": request_id, "error": str(exc)},
        exc_info=exc,
    )

    if request.app.state.settings.ENV == "prod":
        return error_response(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", GENERIC_SERVER_MESSAGE
        )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        str(exc),
        {"type": type(exc).__name__},
    )
