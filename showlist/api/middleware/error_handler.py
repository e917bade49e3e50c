"""
Error Handling
==============

Every failure leaves the API in the same envelope:

    {"success": false, "error": "<message>", ...}

Three layers produce it:

1. `ShowlistError` handler: domain and upstream errors raised by services
   and dependencies carry their own HTTP status (`status_code`)
2. `RequestValidationError` handler: malformed bodies, paths and query
   strings become 400 "Invalid input" with per-field details
3. `ErrorHandlingMiddleware`: last line of defense for anything else;
   logs the traceback and answers 500 without leaking internals
"""

import traceback
from collections.abc import Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from showlist.core.config.constants import HEADER_REQUEST_ID
from showlist.core.exceptions import ShowlistError
from showlist.core.logging import get_logger, get_request_id

logger = get_logger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch-all for exceptions no exception handler claimed."""

    def __init__(self, app, include_traceback: bool = False):
        """
        Args:
            app: The ASGI application
            include_traceback: Include stack traces in responses (development only)
        """
        super().__init__(app)
        self.include_traceback = include_traceback

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            error_type = type(e).__name__
            logger.error(
                f"Unhandled exception in request: {request.method} {request.url.path}",
                method=request.method,
                path=request.url.path,
                error_type=error_type,
                error_message=str(e),
                exc_info=True,
            )

            content = {
                "success": False,
                "error": "Internal Server Error",
                "error_type": error_type,
            }
            if self.include_traceback:
                content["traceback"] = traceback.format_exc()
                content["detail"] = str(e)

            return JSONResponse(status_code=500, content=content)


async def showlist_error_handler(request: Request, exc: ShowlistError) -> JSONResponse:
    """Map a ShowlistError to its status code and the error envelope."""
    request_id = exc.request_id or get_request_id()
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"Request failed: {exc.message}",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        details=exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
        headers={HEADER_REQUEST_ID: request_id} if request_id else None,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, errors=details, stage="1.0")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid input", "details": details},
    )


def register_error_handlers(app: FastAPI, include_traceback: bool = False) -> None:
    """
    Install the exception handlers and the catch-all middleware.

    Call this before adding other middleware so the catch-all wraps them.
    """
    app.add_exception_handler(ShowlistError, showlist_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_middleware(ErrorHandlingMiddleware, include_traceback=include_traceback)
    logger.debug("Error handlers registered", include_traceback=include_traceback)
