"""
Signed session tokens.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from app.core.config import get_settings
from app.core.constants import AuthConstants
from app.core.logging import get_logger
from app.models.domain import UserType

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """Identity carried by a session token."""

    id: str
    email: str
    type: UserType

    @property
    def is_guest(self) -> bool:
        return self.type == UserType.GUEST

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "type": self.type.value}


def create_session_token(
    user: SessionUser,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed session token for a user.

    Args:
        user: Identity to encode
        expires_delta: Lifetime, defaults to the configured session age

    Returns:
        Encoded JWT
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.auth.session_max_age_seconds)

    claims = {
        "sub": user.id,
        "email": user.email,
        "type": user.type.value,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(claims, settings.auth.secret, algorithm=AuthConstants.JWT_ALGORITHM)


def decode_session_token(token: str) -> Optional[SessionUser]:
    """
    Verify a session token and extract the identity.

    Returns:
        SessionUser, or None when the token is invalid, expired or tampered
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.auth.secret,
            algorithms=[AuthConstants.JWT_ALGORITHM]
        )
    except JWTError as e:
        logger.debug("Rejected session token", reason=str(e))
        return None

    try:
        return SessionUser(
            id=payload["sub"],
            email=payload["email"],
            type=UserType(payload["type"]),
        )
    except (KeyError, ValueError):
        logger.warning("Session token is missing claims")
        return None
