"""Main FastAPI application for the Animal Adoption API."""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import structlog
from prometheus_fastapi_instrumentator import Instrumentator

from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.gamification.scoring import PASSING_SCORE
from app.routers import animals, courses, progress, quizzes
from app.schemas.progress import DEFAULT_USER_ID

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle manager."""
    settings: Settings = app.state.settings
    logger.info("Starting Animal Adoption API", version=settings.APP_VERSION)

    # A database handed to create_app belongs to the caller
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_settings(settings)

    if settings.DATABASE_AUTO_CREATE:
        await app.state.database.create_all()

    logger.info("Adoption API initialized successfully")

    yield

    # Shutdown
    logger.info("Shutting down Animal Adoption API")
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None


def _has_static_index(settings: Settings) -> bool:
    return bool(settings.STATIC_DIR) and os.path.isfile(os.path.join(settings.STATIC_DIR, "index.html"))


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application around an explicit settings object and database."""
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Animal listings, courses, quizzes and badges for the adoption site",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
    )
    app.state.settings = settings
    app.state.database = database

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(animals.router, prefix="/api")
    app.include_router(courses.router, prefix="/api")
    app.include_router(progress.router, prefix="/api")
    app.include_router(quizzes.router, prefix="/api")

    # Setup Prometheus metrics
    if settings.ENABLE_METRICS:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    # A front-end index page owns "/"; the JSON root only answers without one
    if not _has_static_index(settings):
        @app.get("/", tags=["root"])
        async def root():
            """Root endpoint."""
            return {
                "service": settings.APP_NAME,
                "message": "Animal Adoption API running",
                "version": settings.APP_VERSION,
                "environment": settings.ENVIRONMENT,
                "status": "operational"
            }

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Health check endpoint."""
        health_status = {
            "status": "healthy",
            "service": settings.SERVICE_NAME,
            "version": settings.APP_VERSION,
            "checks": {}
        }

        try:
            await request.app.state.database.ping()
            health_status["checks"]["database"] = "healthy"
        except Exception as e:
            health_status["checks"]["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "degraded"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    @app.get("/config", tags=["debug"])
    async def get_config():
        """Get current configuration (development only)."""
        if settings.is_production():
            return JSONResponse(
                content={"message": "Not available in production"},
                status_code=403
            )

        return {
            "environment": settings.ENVIRONMENT,
            "quizzes": {
                "passing_score": PASSING_SCORE,
                "default_user_id": DEFAULT_USER_ID
            },
            "metrics_enabled": settings.ENABLE_METRICS,
            "static_dir": settings.STATIC_DIR
        }

    # Mounted last so API routes take precedence
    if settings.STATIC_DIR:
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=default_settings.SERVICE_PORT,
        reload=default_settings.ENVIRONMENT == "development",
        log_config=None  # Use structlog instead
    )
