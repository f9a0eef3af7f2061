"""
Document and suggestion domain models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DatabaseConstants, DocumentConstants
from app.models.domain.base import Base, UUIDMixin, generate_uuid, utcnow


class DocumentKind(str, Enum):
    """Kind of document content."""

    TEXT = DocumentConstants.KIND_TEXT
    CODE = DocumentConstants.KIND_CODE
    IMAGE = DocumentConstants.KIND_IMAGE
    SHEET = DocumentConstants.KIND_SHEET


class Document(Base):
    """
    Represents one version of a document.

    Documents are versioned by creation time: saving a document with an
    existing id inserts a new row, and (id, created_at) is the primary key.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        primary_key=True,
        default=generate_uuid
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        primary_key=True,
        default=utcnow
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    kind: Mapped[str] = mapped_column(
        String(20),
        default=DocumentKind.TEXT.value,
        nullable=False
    )

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, created_at={self.created_at}, kind={self.kind})>"


class Suggestion(Base, UUIDMixin):
    """An edit suggested against a specific document version."""

    __tablename__ = "suggestions"
    __table_args__ = (
        ForeignKeyConstraint(
            ["document_id", "document_created_at"],
            ["documents.id", "documents.created_at"],
            ondelete="CASCADE"
        ),
    )

    document_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        nullable=False,
        index=True
    )

    document_created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False
    )

    original_text: Mapped[str] = mapped_column(Text, nullable=False)
    suggested_text: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_resolved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user_id: Mapped[str] = mapped_column(
        String(DatabaseConstants.ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Suggestion(id={self.id}, document_id={self.document_id})>"
