"""FastAPI application factory and main entry point.

Run with ``uvicorn vocabkeep.main:create_app --factory``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from vocabkeep.api.v1.router import api_router
from vocabkeep.common.request_id import RequestIDMiddleware
from vocabkeep.core.app_exceptions import AppError
from vocabkeep.core.config import Settings, get_settings
from vocabkeep.core.errors import (
    app_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from vocabkeep.core.logging import setup_logging
from vocabkeep.db.base import Base
from vocabkeep.db.engine import engine_from_settings
from vocabkeep.db.session import configure_session
from vocabkeep.learning_engine.srs.service import SchedulingEngine


def create_app(settings: Settings | None = None, db_engine: Engine | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    db_engine = db_engine or engine_from_settings(settings)
    configure_session(db_engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        if settings.ENV != "test":
            # pytest installs its own capture handlers
            setup_logging(settings.LOG_LEVEL)
        # Create tables outside production (in production, use migrations)
        if settings.ENV in ("dev", "test"):
            import vocabkeep.models  # noqa: F401

            Base.metadata.create_all(bind=db_engine)
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Vocabulary spaced-repetition API",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.scheduling_engine = SchedulingEngine(review_limit=settings.REVIEW_LIMIT)

    # Add middleware (order matters - first added is outermost)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add exception handlers
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    return app
