"""
User domain model.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import AuthConstants, DatabaseConstants
from app.models.domain.base import Base, UUIDMixin, utcnow

_GUEST_EMAIL_RE = re.compile(AuthConstants.GUEST_EMAIL_PATTERN)


class UserType(str, Enum):
    """Kind of account, derived from the email."""

    GUEST = AuthConstants.USER_TYPE_GUEST
    REGULAR = AuthConstants.USER_TYPE_REGULAR


class User(Base, UUIDMixin):
    """
    Represents an account.

    The password column holds a salted hash, never the plaintext. Guest
    accounts get a random password nobody knows.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(DatabaseConstants.EMAIL_LENGTH),
        unique=True,
        nullable=False
    )

    password: Mapped[Optional[str]] = mapped_column(
        String(DatabaseConstants.PASSWORD_HASH_LENGTH),
        nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

    @property
    def user_type(self) -> UserType:
        return user_type_for_email(self.email)


def user_type_for_email(email: str) -> UserType:
    """Guest accounts are recognised by their generated email."""
    if _GUEST_EMAIL_RE.match(email):
        return UserType.GUEST
    return UserType.REGULAR
