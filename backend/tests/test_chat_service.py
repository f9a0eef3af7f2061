"""
Tests for the chat service.
"""

import pytest

from app.auth.tokens import SessionUser
from app.core.exceptions import ChatNotFoundError, ForbiddenError, RateLimitError
from app.db import queries
from app.models.domain import Message, UserType, Visibility
from app.models.schemas import ChatSubmission, UserMessageCreate
from app.services.chat import chat_service, derive_title


def submission(chat_id: str, message_id: str, text: str = "Hello there") -> ChatSubmission:
    return ChatSubmission.model_validate({
        "id": chat_id,
        "message": {"id": message_id, "parts": [{"type": "text", "text": text}]},
    })


@pytest.fixture
async def guest(db):
    user = await queries.create_guest_user()
    return SessionUser(id=user.id, email=user.email, type=UserType.GUEST)


class TestDeriveTitle:
    """Tests for chat titles."""

    def make(self, text: str) -> UserMessageCreate:
        return UserMessageCreate.model_validate(
            {"id": "m1", "parts": [{"type": "text", "text": text}]}
        )

    def test_uses_first_line(self):
        assert derive_title(self.make("\n  Plan a trip  \nto Rome")) == "Plan a trip"

    def test_truncates_long_text(self):
        title = derive_title(self.make("word " * 40))

        assert len(title) <= 80
        assert title.endswith("...")

    def test_blank_text_uses_default(self):
        assert derive_title(self.make("   ")) == "New chat"


class TestSubmitUserMessage:
    """Tests for storing user messages."""

    async def test_creates_chat_on_first_message(self, guest):
        message = await chat_service.submit_user_message(guest, submission("c1", "m1"))

        chat = await queries.get_chat_by_id("c1")
        assert chat.user_id == guest.id
        assert chat.title == "Hello there"
        assert chat.visibility == Visibility.PRIVATE.value
        assert message.chat_id == "c1"
        assert message.text == "Hello there"

    async def test_other_users_chat_is_forbidden(self, guest):
        await chat_service.submit_user_message(guest, submission("c1", "m1"))
        other = await queries.create_user("bob@mail.com", "secret123")
        bob = SessionUser(id=other.id, email=other.email, type=UserType.REGULAR)

        with pytest.raises(ForbiddenError):
            await chat_service.submit_user_message(bob, submission("c1", "m2"))

    async def test_guest_quota(self, guest):
        await queries.save_chat(id="c1", user_id=guest.id, title="Busy")
        await queries.save_messages([
            Message(id=f"m{i}", chat_id="c1", role="user", parts=[])
            for i in range(20)
        ])

        with pytest.raises(RateLimitError) as exc_info:
            await chat_service.submit_user_message(guest, submission("c1", "m-over"))

        assert exc_info.value.status_code == 429


class TestChatVisibility:
    """Tests for reading chats as another viewer."""

    async def test_private_chat_hidden_from_others(self, guest):
        await chat_service.submit_user_message(guest, submission("c1", "m1"))

        with pytest.raises(ChatNotFoundError):
            await chat_service.get_chat_for_viewer("c1", None)

    async def test_public_chat_readable_by_anyone(self, guest):
        await chat_service.submit_user_message(guest, submission("c1", "m1"))
        await queries.update_chat_visibility_by_id("c1", Visibility.PUBLIC)

        chat, messages = await chat_service.get_chat_for_viewer("c1", None)

        assert chat.id == "c1"
        assert [m.id for m in messages] == ["m1"]


class TestMessageTimestamps:
    """Tests for server-side message timestamps."""

    async def test_client_created_at_is_ignored(self, guest):
        payload = submission("c1", "m1").model_dump(by_alias=True)
        payload["message"]["createdAt"] = "2020-01-01T00:00:00Z"

        message = await chat_service.submit_user_message(
            guest,
            ChatSubmission.model_validate(payload)
        )

        assert message.created_at.year != 2020

    async def test_backdated_messages_still_count_toward_quota(self, guest):
        for i in range(20):
            payload = submission("c1", f"m{i}").model_dump(by_alias=True)
            payload["message"]["createdAt"] = "2020-01-01T00:00:00Z"
            await chat_service.submit_user_message(guest, ChatSubmission.model_validate(payload))

        payload = submission("c1", "m-over").model_dump(by_alias=True)
        payload["message"]["createdAt"] = "2020-01-01T00:00:00Z"

        with pytest.raises(RateLimitError):
            await chat_service.submit_user_message(guest, ChatSubmission.model_validate(payload))
