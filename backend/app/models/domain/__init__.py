"""
Domain models (SQLAlchemy ORM models).
"""

from app.models.domain.base import Base, TimestampMixin, UUIDMixin, generate_uuid, utcnow
from app.models.domain.chat import Chat, Visibility
from app.models.domain.document import Document, DocumentKind, Suggestion
from app.models.domain.message import Message, MessageRole
from app.models.domain.user import User, UserType
from app.models.domain.vote import Vote

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "generate_uuid",
    "utcnow",
    # User
    "User",
    "UserType",
    # Chat
    "Chat",
    "Visibility",
    # Message
    "Message",
    "MessageRole",
    # Vote
    "Vote",
    # Document
    "Document",
    "DocumentKind",
    "Suggestion",
]
