"""Global error handling.

All exceptions are converted to a standardized JSON body with an
appropriate HTTP status code. Responses never include stack traces,
raw database errors or secrets.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from expense_tracker.core.errors import get_error
from expense_tracker.core.exceptions import ExpenseTrackerError, Unauthorized

logger = logging.getLogger(__name__)


def _is_debug(request: Request) -> bool:
    return bool(getattr(request.app.state, "debug", False))


def error_body(error_code: str, message: str | None = None) -> dict:
    """Build the error payload for a catalog code."""
    error_info = get_error(error_code)
    return {
        "success": False,
        "error_code": error_code,
        "message": message or error_info["user_message"],
        "user_message": error_info["user_message"],
        "suggestion": error_info["suggestion"],
    }


async def handle_domain_error(request: Request, exc: ExpenseTrackerError) -> JSONResponse:
    """Handle typed domain exceptions raised by services and dependencies.

    Args:
        request: The incoming request
        exc: The domain exception

    Returns:
        JSONResponse with error details from catalog
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if _is_debug(request):
        extra["details"] = exc.details

    log = logger.error if exc.http_status >= 500 else logger.info
    log(f"Request rejected: {exc.error_code}", extra=extra)

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.error_code),
        headers=headers,
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with field-level error details
    """
    errors = exc.errors()
    error_messages = []
    fields = []

    for error in errors:
        loc = [str(x) for x in error.get("loc", []) if x not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}" if field else msg)
        fields.append({"field": field, "message": msg})

    # Field names and messages only; input values may contain passwords.
    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    content = error_body("VAL_001", " | ".join(error_messages))
    content["errors"] = fields
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors.

    A unique violation here means two registrations (or profile updates)
    raced past the pre-insert email check.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        JSONResponse with error details
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    extra = {"path": request.url.path, "method": request.method}
    if _is_debug(request):
        logger.exception(f"Database integrity error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=extra)

    error_msg = str(exc.orig).lower() if exc.orig is not None else ""
    if "unique" in error_msg or "duplicate" in error_msg:
        # Same answer as the pre-insert check in AccountService.
        if "email" in error_msg:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_body("AUTH_001"),
            )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("DB_002"),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("DB_001"),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    # In non-debug: do not log str(exc) or traceback (may include sensitive data).
    if _is_debug(request):
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("SYS_001"),
    )
