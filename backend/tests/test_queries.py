"""
Tests for the query functions.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import ChatNotFoundError, ConflictError, NotFoundError
from app.db import queries
from app.db.database import get_db_session
from app.models.domain import Chat, Message, Suggestion, UserType, Vote
from tests.conftest import at, count_rows, count_users


@pytest.fixture
async def user(db):
    return await queries.create_user("alice@mail.com", "secret123")


async def add_chats(user_id: str, count: int) -> None:
    """Insert chats c0..c{count-1}, one minute apart."""
    async with get_db_session() as session:
        session.add_all([
            Chat(id=f"c{i}", user_id=user_id, title=f"Chat {i}", created_at=at(i))
            for i in range(count)
        ])


class TestUsers:
    """Tests for user queries."""

    async def test_duplicate_email_conflicts(self, user):
        with pytest.raises(ConflictError) as exc_info:
            await queries.create_user("alice@mail.com", "another-password")

        assert exc_info.value.entity == "user"
        assert exc_info.value.field == "email"
        assert exc_info.value.status_code == 409
        assert await count_users() == 1

    async def test_guest_user(self, db):
        guest = await queries.create_guest_user()

        assert guest.email.startswith("guest-")
        assert guest.user_type == UserType.GUEST
        assert guest.password

    async def test_get_unknown_user(self, db):
        assert await queries.get_user("nobody@mail.com") is None


class TestChats:
    """Tests for chat queries."""

    async def test_save_chat_for_unknown_user_is_not_found(self, db):
        with pytest.raises(NotFoundError):
            await queries.save_chat(id="c1", user_id="missing", title="Hi")

    async def test_save_chat_twice_conflicts(self, user):
        await queries.save_chat(id="c1", user_id=user.id, title="Hi")

        with pytest.raises(ConflictError):
            await queries.save_chat(id="c1", user_id=user.id, title="Again")

    async def test_delete_chat_removes_messages_and_votes(self, user):
        await queries.save_chat(id="c1", user_id=user.id, title="Hi")
        await queries.save_messages([
            Message(id="m1", chat_id="c1", role="user", parts=[{"type": "text", "text": "hi"}]),
            Message(id="m2", chat_id="c1", role="assistant", parts=[{"type": "text", "text": "hello"}]),
        ])
        await queries.vote_message("c1", "m2", True)

        deleted = await queries.delete_chat_by_id("c1")

        assert deleted.id == "c1"
        assert await queries.get_chat_by_id("c1") is None
        assert await count_rows(Message) == 0
        assert await count_rows(Vote) == 0

    async def test_delete_missing_chat(self, db):
        with pytest.raises(ChatNotFoundError):
            await queries.delete_chat_by_id("missing")

    async def test_history_newest_first_with_has_more(self, user):
        await add_chats(user.id, 5)

        page = await queries.get_chats_by_user_id(user.id, limit=2)

        assert [c.id for c in page.chats] == ["c4", "c3"]
        assert page.has_more

    async def test_history_ending_before(self, user):
        await add_chats(user.id, 5)

        page = await queries.get_chats_by_user_id(user.id, limit=2, ending_before="c3")

        assert [c.id for c in page.chats] == ["c2", "c1"]
        assert page.has_more

        last = await queries.get_chats_by_user_id(user.id, limit=2, ending_before="c1")
        assert [c.id for c in last.chats] == ["c0"]
        assert not last.has_more

    async def test_history_starting_after(self, user):
        await add_chats(user.id, 5)

        page = await queries.get_chats_by_user_id(user.id, limit=10, starting_after="c2")

        assert [c.id for c in page.chats] == ["c4", "c3"]
        assert not page.has_more

    async def test_history_unknown_cursor(self, user):
        with pytest.raises(ChatNotFoundError):
            await queries.get_chats_by_user_id(user.id, limit=10, starting_after="missing")


class TestMessagesAndVotes:
    """Tests for message and vote queries."""

    async def test_message_count_only_counts_recent_user_messages(self, user):
        await queries.save_chat(id="c1", user_id=user.id, title="Hi")
        old = datetime.now(timezone.utc) - timedelta(hours=30)
        await queries.save_messages([
            Message(id="m1", chat_id="c1", role="user", parts=[]),
            Message(id="m2", chat_id="c1", role="assistant", parts=[]),
            Message(id="m3", chat_id="c1", role="user", parts=[], created_at=old),
        ])

        assert await queries.get_message_count_by_user_id(user.id, 24) == 1

    async def test_vote_replaces_polarity(self, user):
        await queries.save_chat(id="c1", user_id=user.id, title="Hi")
        await queries.save_messages([Message(id="m1", chat_id="c1", role="assistant", parts=[])])

        await queries.vote_message("c1", "m1", True)
        await queries.vote_message("c1", "m1", False)

        votes = await queries.get_votes_by_chat_id("c1")
        assert len(votes) == 1
        assert votes[0].is_upvoted is False


class TestDocuments:
    """Tests for versioned documents and suggestions."""

    async def test_versions_and_delete_after(self, user):
        first = await queries.save_document("d1", "Doc", "text", "v1", user.id)
        await queries.save_document("d1", "Doc", "text", "v2", user.id)
        await queries.save_document("d1", "Doc", "text", "v3", user.id)

        versions = await queries.get_documents_by_id("d1")
        assert [d.content for d in versions] == ["v1", "v2", "v3"]
        assert (await queries.get_document_by_id("d1")).content == "v3"

        deleted = await queries.delete_documents_by_id_after_timestamp("d1", first.created_at)

        assert [d.content for d in deleted] == ["v2", "v3"]
        assert [d.content for d in await queries.get_documents_by_id("d1")] == ["v1"]

    async def test_suggestions_follow_document_version(self, user):
        document = await queries.save_document("d1", "Doc", "text", "v1", user.id)

        await queries.save_suggestions([
            Suggestion(
                document_id="d1",
                document_created_at=document.created_at,
                original_text="teh",
                suggested_text="the",
                user_id=user.id,
            )
        ])

        suggestions = await queries.get_suggestions_by_document_id("d1")
        assert [s.suggested_text for s in suggestions] == ["the"]
        assert suggestions[0].is_resolved is False

    async def test_suggestion_for_missing_document_is_not_found(self, user):
        with pytest.raises(NotFoundError):
            await queries.save_suggestions([
                Suggestion(
                    document_id="missing",
                    document_created_at=at(0),
                    original_text="a",
                    suggested_text="b",
                    user_id=user.id,
                )
            ])
