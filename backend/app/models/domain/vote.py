"""
Vote domain model.
"""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DatabaseConstants
from app.models.domain.base import Base


class Vote(Base):
    """A user's up/down vote on one assistant message. One per message."""

    __tablename__ = "votes"

    chat_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("chats.id", ondelete="CASCADE"),
        primary_key=True
    )

    message_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("messages.id", ondelete="CASCADE"),
        primary_key=True
    )

    is_upvoted: Mapped[bool] = mapped_column(Boolean, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Vote(chat_id={self.chat_id}, message_id={self.message_id}, "
            f"is_upvoted={self.is_upvoted})>"
        )
