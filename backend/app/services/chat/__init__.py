"""
Chat services for conversation management.
"""

from app.services.chat.service import ChatService, chat_service, derive_title

__all__ = [
    "ChatService",
    "chat_service",
    "derive_title",
]
