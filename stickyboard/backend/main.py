"""
FastAPI Application Entry Point.

Serves the sticky store: the HTTP API the board's persistence client talks to.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stickyboard.backend.api import health
from stickyboard.backend.api.v1 import router as api_v1_router
from stickyboard.backend.core.config import get_app_config
from stickyboard.backend.core.database import create_tables, dispose_engine
from stickyboard.backend.core.exception_handlers import register_exception_handlers
from stickyboard.backend.core.logging import get_logger, setup_logging
from stickyboard.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Set up logging and tables on start; dispose of the engine on exit."""
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    if app_config.database.create_tables_on_startup:
        await create_tables()

    logger.info(
        "Sticky store starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "driver": app_config.database.driver,
        },
    )
    yield
    await dispose_engine()
    logger.info("Sticky store stopped")


def create_app() -> FastAPI:
    """Build the sticky store app."""
    app_settings = get_app_config().application
    docs_enabled = app_settings.debug and app_settings.docs_enabled

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """Return the process-wide app, creating it on first use."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn stickyboard.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
