"""
Chatbot backend: accounts, sessions, chats, votes and documents.

Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import create_api_router, setup_exception_handlers, setup_middleware
from app.core import get_settings, setup_logging
from app.core.logging import get_logger
from app.db import close_db, init_db, init_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Handles startup and shutdown events:
    - Startup: Initialize the database and create tables
    - Shutdown: Dispose the connection pool
    """
    setup_logging()

    logger.info("Starting chatbot application")

    await init_db()
    await init_database()

    logger.info("Chatbot application started")

    yield

    logger.info("Shutting down chatbot application")

    await close_db()

    logger.info("Chatbot application stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Chatbot backend with guest and credential sessions",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # Setup custom middleware
    setup_middleware(app)

    # CORS outermost so preflight requests never reach the gate
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include API routes
    app.include_router(create_api_router())

    # Root endpoint, gated: visitors without a session get a guest session first
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/api/health"
        }

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.debug,
        log_level="info"
    )
