"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from liftlog.api.v1 import api_router
from liftlog.core.config import get_settings
from liftlog.core.exceptions import (
    DuplicateRecordError,
    MalformedSeriesError,
    NotAuthenticatedError,
    OwnershipError,
    RecordNotFoundError,
    RemoteError,
    ValidationError,
)
from liftlog.db.session import engine

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: nothing to warm up (schema is managed by Alembic); shutdown: dispose pool."""
    yield
    await engine.dispose()


def _error(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message, "kind": kind})


def register_exception_handlers(app: FastAPI) -> None:
    """Map the tracking error taxonomy onto HTTP responses, keeping the error kind."""

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated(request: Request, exc: NotAuthenticatedError):
        return _error(401, "not_authenticated", str(exc))

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError):
        return _error(422, exc.field or "validation", exc.message)

    @app.exception_handler(MalformedSeriesError)
    async def malformed_series(request: Request, exc: MalformedSeriesError):
        return _error(422, "malformed_series", str(exc))

    @app.exception_handler(RemoteError)
    async def remote_failed(request: Request, exc: RemoteError):
        if isinstance(exc, RecordNotFoundError):
            return _error(404, exc.kind, str(exc))
        if isinstance(exc, OwnershipError):
            return _error(403, exc.kind, str(exc))
        if isinstance(exc, DuplicateRecordError):
            return _error(409, exc.kind, str(exc))
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return _error(503, exc.kind, str(exc))


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in development, CORS_ORIGINS otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8081"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Liftlog Tracking API"}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
