"""
Main entrypoint for the Todo API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, so it can be served
directly, e.g.::

    uvicorn todo_api.app.main:app --reload

Interactive documentation is served under ``/doc``.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import OPENAPI_TAGS, router
from .core.config import settings
from .core.db import StoreError, close_db, init_db
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Render HTTP errors (e.g. missing todos) as plain-text messages."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed requests with a generic 400."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"statusCode": 400, "error": "Bad Request", "message": message},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the database file and schema on startup; release it on shutdown."""
    init_db()
    try:
        yield
    finally:
        close_db()


async def store_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Report document-store failures with the raw error message."""
    logger.error("Store operation failed on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers the exception handlers and includes
    the API router.  The document store is initialised on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=settings.description,
        debug=settings.debug,
        docs_url="/doc",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(sqlite3.Error, store_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)

    app.include_router(router)

    return app


app = create_app()
