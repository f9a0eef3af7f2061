"""
Tests for password hashing and session tokens.
"""

from datetime import timedelta

from jose import jwt

from app.auth.passwords import hash_password, verify_password
from app.auth.tokens import SessionUser, create_session_token, decode_session_token
from app.models.domain import UserType


def make_user(user_type: UserType = UserType.REGULAR) -> SessionUser:
    return SessionUser(id="u1", email="alice@mail.com", type=user_type)


class TestPasswords:
    """Tests for salted hashing."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)

    def test_wrong_password_rejected(self):
        hashed = hash_password("secret123")

        assert not verify_password("secret124", hashed)

    def test_same_password_hashes_differently(self):
        assert hash_password("secret123") != hash_password("secret123")


class TestSessionTokens:
    """Tests for signed session tokens."""

    def test_round_trip_keeps_identity(self):
        user = make_user(UserType.GUEST)

        decoded = decode_session_token(create_session_token(user))

        assert decoded == user
        assert decoded.is_guest

    def test_expired_token_rejected(self):
        token = create_session_token(make_user(), expires_delta=timedelta(seconds=-1))

        assert decode_session_token(token) is None

    def test_token_signed_with_other_secret_rejected(self):
        forged = jwt.encode(
            {"sub": "u1", "email": "alice@mail.com", "type": "regular"},
            "another-secret",
            algorithm="HS256"
        )

        assert decode_session_token(forged) is None

    def test_tampered_token_rejected(self):
        header, payload, _ = create_session_token(make_user()).split(".")
        other_signature = create_session_token(make_user(UserType.GUEST)).split(".")[2]

        assert decode_session_token(f"{header}.{payload}.{other_signature}") is None

    def test_garbage_rejected(self):
        assert decode_session_token("not-a-token") is None
