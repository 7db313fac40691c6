"""
Exception handlers.

Renders PhoneAuthError subclasses as JSON using each exception's
status_code and to_dict() envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.exceptions import InternalError, PhoneAuthError

from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(exc: PhoneAuthError) -> JSONResponse:
    """Build the JSON response for a domain error."""
    if isinstance(exc, InternalError):
        # Internal failures are logged, not shown
        body = ErrorResponse(error=exc.code, message="Internal server error")
    else:
        body = ErrorResponse(**exc.to_dict())

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handler for all PhoneAuthError subclasses."""

    @app.exception_handler(PhoneAuthError)
    async def handle_phone_auth_error(request: Request, exc: PhoneAuthError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed with %s: %s",
                request.method,
                request.url.path,
                exc.code,
                exc.message,
                exc_info=exc,
            )
        else:
            logger.info(
                "%s %s rejected with %s",
                request.method,
                request.url.path,
                exc.code,
            )
        return error_response(exc)
