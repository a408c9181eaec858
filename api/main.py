"""
eShop - FastAPI API Service Entry Point

The catalog database is seeded during application startup. If seeding fails
the lifespan raises, the server aborts startup and never accepts requests.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from database.connection import close_db, create_engine_from_settings
from database.seeds.run_all_seeds import load_configured_dataset
from database.seeds.startup import RetryPolicy, ensure_seeded
from shared.config import Settings, get_settings
from shared.errors import ErrorCategory, get_error_logger
from shared.logging_config import configure_logging, mask_database_url

logger = logging.getLogger(__name__)
error_logger = get_error_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application for the given settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Seed the database before serving; dispose the engine on shutdown."""
        logger.info(f"Starting {settings.PROJECT_NAME} API...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Database: {mask_database_url(settings.DATABASE_URL)}")

        engine = create_engine_from_settings(settings)
        app.state.engine = engine
        app.state.seed_report = None

        try:
            if settings.SEED_ON_STARTUP:
                # SeedError propagates: the server must not start unseeded
                app.state.seed_report = await ensure_seeded(
                    engine,
                    load_configured_dataset(settings),
                    RetryPolicy.from_settings(settings),
                    create_schema=settings.SEED_CREATE_SCHEMA,
                )
            else:
                logger.warning("SEED_ON_STARTUP disabled, skipping database seeding")
        except BaseException:
            await close_db(engine)
            raise

        try:
            yield
        finally:
            await close_db(engine)
            logger.info(f"{settings.PROJECT_NAME} API stopped")

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        description="Catalog API for the eShop reference application",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log unhandled errors with a reference id and return a generic 500."""
        log_ref = error_logger.log_error(
            error=exc,
            category=ErrorCategory.UNEXPECTED_ERROR,
            context={"endpoint": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "log_ref": log_ref},
        )

    @app.get("/health")
    async def health_check(request: Request) -> JSONResponse:
        """
        Health check endpoint for Docker health checks and monitoring.

        Returns:
            200 OK if the database answers
            503 Service Unavailable otherwise
        """
        report = request.app.state.seed_report
        health_status = {
            "status": "ok",
            "service": settings.PROJECT_NAME,
            "database": "unknown",
            "seeded": report is not None,
            "connection_attempts": report.connection_attempts if report else 0,
            "inserted": dict(report.inserted) if report else {},
        }
        status_code = 200

        try:
            async with request.app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            health_status["database"] = "connected"
        except Exception as e:
            logger.warning(f"Health check database probe failed: {e}")
            health_status["database"] = "disconnected"
            health_status["status"] = "degraded"
            status_code = 503

        return JSONResponse(status_code=status_code, content=health_status)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint"""
        return {
            "message": f"{settings.PROJECT_NAME} API",
            "version": "1.0.0",
            "health": "/health",
        }

    return app


def get_app() -> FastAPI:
    """ASGI factory: ``uvicorn api.main:get_app --factory``."""
    configure_logging()
    return create_app()
