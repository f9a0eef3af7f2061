"""
API module for FastAPI routes and middleware.
"""

from app.api.dependencies import get_db, get_session_user, require_user
from app.api.middleware import (
    AuthGateMiddleware,
    RequestLoggingMiddleware,
    setup_exception_handlers,
    setup_middleware,
)
from app.api.routes import create_api_router

__all__ = [
    # Dependencies
    "get_db",
    "get_session_user",
    "require_user",
    # Middleware
    "AuthGateMiddleware",
    "RequestLoggingMiddleware",
    "setup_middleware",
    "setup_exception_handlers",
    # Routes
    "create_api_router",
]
