"""
Phaseflow - Main Application Entry Point

Phase-based daily routine planner with streak tracking.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info("Starting Phaseflow (database: %s)...", settings.DATABASE_URL)

    from app.infrastructure.local.database import init_db

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Phaseflow...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # Engine echo goes through DEBUG; keep the library loggers quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    app = FastAPI(
        title="Phaseflow",
        description="Phase-based daily routine planner",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from app.api import dashboard, phases, routine_blocks, timesheet, today

    app.include_router(phases.router, prefix="/api")
    app.include_router(routine_blocks.router, prefix="/api")
    app.include_router(today.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(timesheet.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
