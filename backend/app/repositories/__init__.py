"""
Repository module for database access patterns.

Repositories provide a clean abstraction over database operations,
encapsulating queries and making them reusable across the query functions.
"""

from app.repositories.base import BaseRepository
from app.repositories.chat import ChatRepository, MessageRepository, VoteRepository
from app.repositories.document import DocumentRepository, SuggestionRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ChatRepository",
    "MessageRepository",
    "VoteRepository",
    "DocumentRepository",
    "SuggestionRepository",
]
