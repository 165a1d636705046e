"""
FastAPI Application Entry Point.

This is the main entry point for the Blogpad backend application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogpad.backend.api import health
from blogpad.backend.api.v1 import router as api_v1_router
from blogpad.backend.context import AppContext, create_context
from blogpad.backend.core.config import get_app_config, get_settings
from blogpad.backend.core.exception_handlers import register_exception_handlers
from blogpad.backend.core.logging import get_logger, setup_logging
from blogpad.backend.core.middleware import RequestContextMiddleware
from blogpad.backend.web import routes as web_routes

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging(level=get_settings().log_level or app_config.logging.level)

    # Store errors here abort startup
    if getattr(app.state, "context", None) is None:
        app.state.context = create_context()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    yield
    logger.info("Application shutting down")


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: Prebuilt application context. When omitted the context is
            built from configuration during startup.
    """
    app_config = get_app_config()
    app_settings = app_config.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.context = context

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
    app.include_router(api_v1_router, prefix="/api/v1")
    app.include_router(web_routes.router, tags=["web"], include_in_schema=False)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    This function creates the app on first call and caches it.
    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn blogpad.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
