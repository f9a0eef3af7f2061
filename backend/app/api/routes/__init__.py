"""
API routes module.
"""

from fastapi import APIRouter

from app.api.routes.actions import router as actions_router
from app.api.routes.auth import router as auth_router
from app.api.routes.chat import router as chat_router
from app.api.routes.document import router as document_router
from app.api.routes.health import router as health_router
from app.api.routes.history import router as history_router
from app.api.routes.vote import router as vote_router
from app.core.constants import APIConstants


def create_api_router() -> APIRouter:
    """Create the main API router with all sub-routers."""
    api_router = APIRouter(prefix=APIConstants.PREFIX)

    api_router.include_router(health_router)
    api_router.include_router(auth_router)
    api_router.include_router(actions_router)
    api_router.include_router(chat_router)
    api_router.include_router(history_router)
    api_router.include_router(vote_router)
    api_router.include_router(document_router)

    return api_router


__all__ = [
    "create_api_router",
    "actions_router",
    "auth_router",
    "chat_router",
    "document_router",
    "health_router",
    "history_router",
    "vote_router",
]
