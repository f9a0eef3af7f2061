"""
Services module providing business logic layer.
"""

from app.services.chat import ChatService, chat_service, derive_title
from app.services.document import DocumentService, document_service

__all__ = [
    # Chat
    "ChatService",
    "chat_service",
    "derive_title",
    # Document
    "DocumentService",
    "document_service",
]
