"""
Main FastAPI application entry point.

Builds the application: session middleware, RFC 9457 exception handlers,
and the recovery router mounted under settings.mount_path.

Run with:
    uvicorn recoverkit.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from recoverkit.core.config import Settings, get_settings
from recoverkit.core.container import get_database, get_logger, get_task_runner
from recoverkit.presentation.errors import register_exception_handlers
from recoverkit.presentation.routers import recover_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    - Startup: create tables outside production (no migrations yet)
    - Shutdown: wait for pending recovery emails, close the database
    """
    settings = get_settings()
    logger = get_logger()
    database = get_database()

    if not settings.is_production:
        await database.create_all()

    logger.info(
        "application_started",
        app_name=settings.app_name,
        environment=settings.environment.value,
        mount_path=settings.mount_path,
    )

    yield

    await get_task_runner().drain()
    await database.close()
    logger.info("application_stopped", app_name=settings.app_name)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to build from (defaults to get_settings()).

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Password recovery service",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Signed cookie session; a completed recovery signs the user in
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        https_only=settings.is_production,
    )

    register_exception_handlers(app)

    app.include_router(recover_router, prefix=settings.mount_path)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    return app


app = create_app()
