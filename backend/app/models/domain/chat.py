"""
Chat domain model.
"""

from enum import Enum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import ChatConstants, DatabaseConstants
from app.models.domain.base import Base, TimestampMixin, UUIDMixin


class Visibility(str, Enum):
    """Who may view a chat."""

    PUBLIC = ChatConstants.VISIBILITY_PUBLIC
    PRIVATE = ChatConstants.VISIBILITY_PRIVATE


class Chat(Base, UUIDMixin, TimestampMixin):
    """
    Represents a chat conversation owned by a user.

    The id is usually generated by the client before the first message is
    sent, so the same id is used for the page URL and the stored row.
    """

    __tablename__ = "chats"

    user_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    title: Mapped[str] = mapped_column(
        String(DatabaseConstants.TITLE_LENGTH),
        nullable=False
    )

    # Stored as the enum value
    visibility: Mapped[str] = mapped_column(
        String(20),
        default=Visibility.PRIVATE.value,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Chat(id={self.id}, title={self.title})>"

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def is_visible_to(self, user_id: str | None) -> bool:
        """Public chats are visible to anyone, private ones to their owner."""
        if self.visibility == Visibility.PUBLIC.value:
            return True
        return user_id is not None and self.is_owned_by(user_id)
