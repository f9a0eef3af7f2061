"""
Message domain model.
"""

from enum import Enum
from typing import Any, Dict, List

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import ChatConstants, DatabaseConstants
from app.models.domain.base import Base, JSONType, TimestampMixin, UUIDMixin


class MessageRole(str, Enum):
    """Message role in conversation."""

    USER = ChatConstants.ROLE_USER
    ASSISTANT = ChatConstants.ROLE_ASSISTANT
    SYSTEM = ChatConstants.ROLE_SYSTEM


class Message(Base, UUIDMixin, TimestampMixin):
    """
    Represents a message in a chat conversation.

    Content is a list of parts, e.g. ``[{"type": "text", "text": "hi"}]``.
    """

    __tablename__ = "messages"

    chat_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    role: Mapped[str] = mapped_column(String(20), nullable=False)

    parts: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONType,
        default=list,
        nullable=False
    )

    attachments: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONType,
        default=list,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, chat_id={self.chat_id}, role={self.role})>"

    @property
    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(
            part.get("text", "")
            for part in self.parts or []
            if part.get("type") == ChatConstants.PART_TYPE_TEXT
        )
