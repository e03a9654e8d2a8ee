from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import Database, StoreError
from .logging_setup import ensure_logging
from .routers import tasks as tasks_router
from .schema import ensure_schema
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

openapi_tags = [
    {"name": "health", "description": "Service health and discovery endpoints."},
    {"name": "tasks", "description": "CRUD operations for tasks."},
]

DISCOVERY = {
    "message": "Welcome to Secure-CRUD API",
    "version": API_VERSION,
    "endpoints": {
        "health": "/health",
        "tasks": "/api/tasks",
        "create_task": "POST /api/tasks",
        "get_task": "GET /api/tasks/:id",
        "update_task": "PUT /api/tasks/:id",
        "delete_task": "DELETE /api/tasks/:id",
    },
}


def _lifespan(settings: Settings, database: Optional[Database]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ensure_logging(settings.log_level)
        db = database if database is not None else Database.from_settings(settings)
        app.state.database = db
        await db.open()
        try:
            await ensure_schema(db)
        except StoreError:
            logger.exception("Database initialization error")
            if settings.schema_init_fatal:
                await db.close()
                raise
        try:
            yield
        finally:
            logger.info("Shutting down, closing database pool")
            await db.close()

    return lifespan


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The pool is created (or taken from ``database``) when the application
    starts and closed when it stops; handlers reach it through the
    ``get_repository`` dependency.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Tasks API",
        description="Task tracking service backed by PostgreSQL.",
        version=API_VERSION,
        openapi_tags=openapi_tags,
        lifespan=_lifespan(settings, database),
    )

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Render HTTP errors as ``{"error": <detail>}``."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
        """Log the database failure and answer with a generic 500."""
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # PUBLIC_INTERFACE
    @app.get("/health", summary="Health Check", tags=["health"])
    async def health_check():
        """
        Liveness probe. Does not touch the database.
        """
        return {"status": "OK", "message": "Application is healthy"}

    # PUBLIC_INTERFACE
    @app.get("/", summary="API Discovery", tags=["health"])
    async def root():
        """
        Describe the available endpoints.
        """
        return DISCOVERY

    app.include_router(tasks_router.router)
    return app


app = create_app()
