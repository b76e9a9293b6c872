"""Error Handlers — every failure leaves the API in one JSON envelope.

Invariants:
    - Body is always {"error": {code, message, category, severity, ...}}
    - ClassroomError keeps its own status; 401 adds WWW-Authenticate: Bearer
    - Request body / path validation failures answer 400 (not FastAPI's 422)
      with one {field, message, type} entry per failing field
    - Unhandled exceptions answer 500 with a fixed message; details go to the log only

Design Decisions:
    - Handlers are plain module functions registered with add_exception_handler,
      so tests can call them without an app
    - Log level follows the status: WARNING below 500, ERROR from 500 up
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from classroom.core.errors import ClassroomError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def handle_classroom_error(request: Request, exc: ClassroomError) -> JSONResponse:
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.WARNING,
        "%s: %s", exc.code, exc.message,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "course_id": exc.context.course_id,
            "comment_id": exc.context.comment_id,
            "user_id": exc.context.user_id,
        },
    )
    headers = None
    if exc.http_status == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(exc.to_response(), status_code=exc.http_status, headers=headers)


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        "Request rejected: %d invalid field(s)", len(details),
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        _envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, details=details,
        ),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s", type(exc).__name__,
        extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
    )
    return JSONResponse(
        _envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClassroomError, handle_classroom_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
