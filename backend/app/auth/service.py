"""
Authentication service: credential exchange and session issuance.
"""

from dataclasses import dataclass
from typing import Optional

from app.auth.cookies import CookieJar, get_cookie_jar
from app.auth.passwords import dummy_password_hash, verify_password
from app.auth.tokens import SessionUser, create_session_token, decode_session_token
from app.core.config import get_settings
from app.core.logging import get_logger
from app.db import queries
from app.models.domain import User, UserType, generate_uuid
from app.models.domain.user import user_type_for_email

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """
    Outcome of a credential exchange.

    The session token itself never leaves the auth layer; it is written to
    the request's cookie jar.
    """

    authenticated: bool
    user_id: Optional[str] = None
    user_type: Optional[UserType] = None

    @classmethod
    def failed(cls) -> "AuthResult":
        return cls(authenticated=False)


class AuthService:
    """Exchanges credentials for sessions."""

    @property
    def _settings(self):
        return get_settings()

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check an email/password pair against the stored hash.

        Returns:
            The user on a match, otherwise None
        """
        user = await queries.get_user(email)

        if user is None or not user.password:
            # Keep timing independent of whether the account exists
            verify_password(password, dummy_password_hash())
            return None

        if not verify_password(password, user.password):
            return None

        return user

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """
        Authenticate and, on success, issue a session.

        Returns:
            AuthResult; no session is issued when authenticated is False
        """
        user = await self.authenticate(email, password)

        if user is None:
            logger.info("Sign-in rejected")
            return AuthResult.failed()

        self.issue_session(user)
        logger.info("User signed in", user_id=user.id)
        return AuthResult(authenticated=True, user_id=user.id, user_type=user.user_type)

    async def sign_in_guest(self) -> AuthResult:
        """Create a guest account and issue a session for it."""
        user = await queries.create_guest_user()
        self.issue_session(user)
        logger.info("Guest signed in", user_id=user.id)
        return AuthResult(authenticated=True, user_id=user.id, user_type=user.user_type)

    async def register(self, email: str, password: str) -> AuthResult:
        """
        Create an account and sign it in.

        The cookie jar and session token are prepared before the insert, so
        nothing is left to fail once the user row is committed.

        Raises:
            ConflictError: If the email is already registered
        """
        jar = get_cookie_jar()
        session_user = SessionUser(
            id=generate_uuid(),
            email=email,
            type=user_type_for_email(email)
        )
        token = create_session_token(session_user)

        user = await queries.create_user(email, password, id=session_user.id)

        self._write_session_cookie(jar, token)
        logger.info("User registered", user_id=user.id)
        return AuthResult(authenticated=True, user_id=user.id, user_type=user.user_type)

    def issue_session(self, user: User) -> None:
        """Write a fresh session cookie for ``user``."""
        session_user = SessionUser(id=user.id, email=user.email, type=user.user_type)
        self._write_session_cookie(get_cookie_jar(), create_session_token(session_user))

    def _write_session_cookie(self, jar: CookieJar, token: str) -> None:
        auth = self._settings.auth
        jar.set(
            auth.cookie_name,
            token,
            max_age=auth.session_max_age_seconds,
            httponly=True,
            secure=auth.cookie_secure,
        )

    def sign_out(self) -> None:
        get_cookie_jar().delete(self._settings.auth.cookie_name)

    def read_session(self, token: Optional[str]) -> Optional[SessionUser]:
        """Decode a session cookie value; None when absent or invalid."""
        if not token:
            return None
        return decode_session_token(token)


auth_service = AuthService()
