"""
Salted password hashing.
"""

import uuid
from functools import lru_cache

from passlib.context import CryptContext

from app.core.constants import AuthConstants

pwd_context = CryptContext(schemes=AuthConstants.PASSWORD_SCHEMES, deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache
def dummy_password_hash() -> str:
    """
    Hash of a random password nobody knows.

    Verified against when the account does not exist, so a failed login
    costs the same whether or not the email is registered.
    """
    return hash_password(str(uuid.uuid4()))
