"""
Link Suggester Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures exception handling, and provides a test-friendly application
factory.

Design Goals
------------
- Deterministic startup
- Centralized router registration
- One JSON error envelope for every failure
- Test-friendly via create_app()
"""

from __future__ import annotations

import contextlib
import logging
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .config import settings
from .core.errors import (
    LinkSuggesterError,
    link_suggester_error_handler,
    request_validation_error_handler,
    unhandled_exception_handler,
)

from .api import (
    generate_routes,
    health_routes,
)


logger = logging.getLogger("linksuggest.app")


# ---------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------

@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Fail-fast validation at application startup.

    This ensures that the model credential is present before the first
    request is ever served.
    """
    logger.info("Starting link-suggester")

    if not settings.openai_api_key.get_secret_value():
        raise RuntimeError("OPENAI_API_KEY is empty")

    logger.info(
        "Configuration validated (completion=%s, embedding=%s)",
        settings.completion_model,
        settings.embedding_model,
    )

    yield

    logger.info("Shutting down link-suggester")


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    logging.getLogger("linksuggest").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="link-suggester",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # --------------------------------------------------------------
    # Exception Handling
    # --------------------------------------------------------------

    app.add_exception_handler(LinkSuggesterError, link_suggester_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(generate_routes.router)

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
