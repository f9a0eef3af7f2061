"""
Tests for the login and register actions.
"""

from app.actions import LoginActionState, RegisterActionState, login, register
from app.auth.cookies import bind_cookie_jar
from app.auth.tokens import decode_session_token
from app.db import queries
from app.models.domain import UserType
from tests.conftest import count_users

CREDENTIALS = {"email": "alice@mail.com", "password": "secret123"}


class TestRegister:
    """Tests for the register action."""

    async def test_creates_user_and_session(self, db):
        with bind_cookie_jar() as jar:
            state = await register(RegisterActionState(), CREDENTIALS)

        assert state.status == "success"

        user = await queries.get_user("alice@mail.com")
        assert user is not None
        assert user.password != "secret123"
        assert user.user_type == UserType.REGULAR

        session_user = decode_session_token(jar.get("session"))
        assert session_user.id == user.id

    async def test_duplicate_email_reports_user_exists(self, db):
        with bind_cookie_jar():
            first = await register(RegisterActionState(), CREDENTIALS)
        with bind_cookie_jar() as jar:
            second = await register(RegisterActionState(), CREDENTIALS)

        assert first.status == "success"
        assert second.status == "user_exists"
        assert jar.get("session") is None
        assert await count_users() == 1

    async def test_invalid_email_is_invalid_data(self, db):
        with bind_cookie_jar():
            state = await register(
                RegisterActionState(),
                {"email": "not-an-email", "password": "secret123"}
            )

        assert state.status == "invalid_data"
        assert await count_users() == 0

    async def test_no_user_left_behind_when_session_cannot_be_issued(self, db):
        # No cookie jar bound: the session cannot be written
        state = await register(RegisterActionState(), CREDENTIALS)

        assert state.status == "failed"
        assert await count_users() == 0

        with bind_cookie_jar():
            retry = await register(RegisterActionState(), CREDENTIALS)
        assert retry.status == "success"

    async def test_password_whitespace_is_kept(self, db):
        with bind_cookie_jar():
            state = await register(
                RegisterActionState(),
                {"email": "  alice@mail.com ", "password": "  pass word  "}
            )
        assert state.status == "success"

        with bind_cookie_jar():
            trimmed = await login(
                LoginActionState(),
                {"email": "alice@mail.com", "password": "pass word"}
            )
        with bind_cookie_jar():
            exact = await login(
                LoginActionState(),
                {"email": "alice@mail.com", "password": "  pass word  "}
            )

        assert trimmed.status == "failed"
        assert exact.status == "success"

    async def test_password_length_counts_spaces(self, db):
        with bind_cookie_jar():
            state = await register(
                RegisterActionState(),
                {"email": "alice@mail.com", "password": " abcd "}
            )

        assert state.status == "success"


class TestLogin:
    """Tests for the login action."""

    async def test_short_password_is_invalid_data_without_writes(self, db):
        with bind_cookie_jar() as jar:
            state = await login(
                LoginActionState(),
                {"email": "a@b.com", "password": "short"}
            )

        assert state.status == "invalid_data"
        assert jar.pending == {}
        assert await count_users() == 0

    async def test_missing_fields_is_invalid_data(self, db):
        with bind_cookie_jar():
            state = await login(LoginActionState(), {})

        assert state.status == "invalid_data"

    async def test_valid_credentials_issue_session(self, db):
        await queries.create_user("alice@mail.com", "secret123")

        with bind_cookie_jar() as jar:
            state = await login(LoginActionState(), CREDENTIALS)

        assert state.status == "success"
        assert decode_session_token(jar.get("session")).email == "alice@mail.com"

    async def test_wrong_password_fails(self, db):
        await queries.create_user("alice@mail.com", "secret123")

        with bind_cookie_jar() as jar:
            state = await login(
                LoginActionState(),
                {"email": "alice@mail.com", "password": "wrong-password"}
            )

        assert state.status == "failed"
        assert jar.get("session") is None

    async def test_unknown_email_fails(self, db):
        with bind_cookie_jar():
            state = await login(LoginActionState(), CREDENTIALS)

        assert state.status == "failed"

    async def test_database_unavailable_fails_without_raising(self):
        # No db fixture: the engine was never initialized
        with bind_cookie_jar():
            state = await login(LoginActionState(), CREDENTIALS)

        assert state.status == "failed"
