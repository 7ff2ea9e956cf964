"""
Global Error Handling

This module defines the service's exception hierarchy and the application-wide
exception handlers that turn failures into the public error envelope.

Design Goals
------------
- Every failure leaves the API as ``{"error": "<message>"}``
- Validation problems map to 400, everything else to 500
- Log full stack traces internally for unexpected failures
- Keep component code free of HTTP concerns (errors only carry a status)
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("linksuggest.errors")


# ---------------------------------------------------------------------
# Exception Hierarchy
# ---------------------------------------------------------------------

class LinkSuggesterError(RuntimeError):
    """Base error for all pipeline failures."""

    status_code: int = 500


class InvalidRequestError(LinkSuggesterError):
    """Raised when request input is rejected before any I/O."""

    status_code = 400


class ContentExtractionError(LinkSuggesterError):
    """Raised when a fetched page yields no usable content."""

    status_code = 400


class UpstreamFetchError(LinkSuggesterError):
    """Raised when a page fetch times out, fails, or returns a non-2xx status."""


class ModelCallError(LinkSuggesterError):
    """Raised when an embedding or completion request fails."""


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def error_payload(message: str) -> Dict[str, str]:
    return {"error": message}


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def link_suggester_error_handler(
    request: Request,
    exc: LinkSuggesterError,
) -> JSONResponse:
    """
    Handle known pipeline errors.

    Client errors (4xx) are logged at info level; server-side failures are
    logged with their traceback.
    """
    message = str(exc) or "Server error"

    if exc.status_code >= 500:
        logger.error(
            "Request failed: %s %s (%s: %s)",
            request.method,
            request.url.path,
            type(exc).__name__,
            message,
            exc_info=exc,
        )
    else:
        logger.info(
            "Request rejected: %s %s (%s)",
            request.method,
            request.url.path,
            message,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(message),
    )


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Replace FastAPI's default 422 body with the service's 400 envelope.
    """
    logger.info(
        "Invalid request body: %s %s (%d errors)",
        request.method,
        request.url.path,
        len(exc.errors()),
    )
    return JSONResponse(
        status_code=400,
        content=error_payload("Invalid request body"),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    This handler should be registered with FastAPI as the final safety net
    for any exception not otherwise handled by the handlers above.

    Behavior
    --------
    - Logs the full exception stack trace for internal diagnostics.
    - Returns a 500 response carrying the exception message.

    Parameters
    ----------
    request : Request
        The incoming HTTP request that triggered the exception.

    exc : Exception
        The uncaught exception instance.

    Returns
    -------
    JSONResponse
        A JSON 500 response with an ``error`` field.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content=error_payload(str(exc) or "Server error"),
    )
