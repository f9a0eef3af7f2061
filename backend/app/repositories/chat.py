"""
Chat repository for chat-related database operations.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ChatNotFoundError
from app.models.domain import Chat, Message, MessageRole, Vote
from app.repositories.base import BaseRepository


class ChatRepository(BaseRepository[Chat]):
    """Repository for Chat entities."""

    model = Chat

    async def list_by_user(
        self,
        user_id: str,
        limit: int,
        starting_after: Optional[str] = None,
        ending_before: Optional[str] = None
    ) -> tuple[List[Chat], bool]:
        """
        List a user's chats, newest first, using keyset pagination.

        Fetches one row more than requested to find out whether another
        page exists.

        Args:
            user_id: Owner ID
            limit: Page size
            starting_after: Only chats created after this chat
            ending_before: Only chats created before this chat

        Returns:
            Tuple of (chats, has_more)

        Raises:
            ChatNotFoundError: If the cursor chat does not exist
        """
        query = select(Chat).where(Chat.user_id == user_id)

        cursor_id = starting_after or ending_before
        if cursor_id:
            cursor = await self.get_by_id(cursor_id)
            if not cursor:
                raise ChatNotFoundError(cursor_id)

            if starting_after:
                query = query.where(Chat.created_at > cursor.created_at)
            else:
                query = query.where(Chat.created_at < cursor.created_at)

        query = query.order_by(Chat.created_at.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        chats = list(result.scalars().all())

        has_more = len(chats) > limit
        return chats[:limit], has_more

    async def update_visibility(
        self,
        chat_id: str,
        visibility: str
    ) -> Optional[Chat]:
        """
        Update chat visibility.

        Args:
            chat_id: Chat ID
            visibility: New visibility value

        Returns:
            Updated chat or None
        """
        chat = await self.get_by_id(chat_id)
        if not chat:
            return None

        chat.visibility = visibility
        await self.session.flush()
        await self.session.refresh(chat)
        return chat

    async def delete_with_children(self, chat_id: str) -> Optional[Chat]:
        """
        Delete a chat together with its votes and messages.

        Children are removed explicitly so the cleanup does not depend on
        the database honouring ON DELETE CASCADE.

        Args:
            chat_id: Chat ID

        Returns:
            The deleted chat, or None if it did not exist
        """
        chat = await self.get_by_id(chat_id)
        if not chat:
            return None

        await self.session.execute(delete(Vote).where(Vote.chat_id == chat_id))
        await self.session.execute(delete(Message).where(Message.chat_id == chat_id))
        await self.session.execute(delete(Chat).where(Chat.id == chat_id))
        return chat


class MessageRepository(BaseRepository[Message]):
    """Repository for Message entities."""

    model = Message

    async def get_chat_messages(self, chat_id: str) -> List[Message]:
        """
        Get all messages for a chat.

        Args:
            chat_id: Chat ID

        Returns:
            List of messages ordered by creation time
        """
        result = await self.session.execute(
            select(Message)
            .where(Message.chat_id == chat_id)
            .order_by(Message.created_at.asc())
        )
        return list(result.scalars().all())

    async def delete_after(self, chat_id: str, timestamp: datetime) -> int:
        """
        Delete messages created at or after a timestamp, with their votes.

        Args:
            chat_id: Chat ID
            timestamp: Inclusive lower bound

        Returns:
            Number of messages deleted
        """
        result = await self.session.execute(
            select(Message.id).where(
                Message.chat_id == chat_id,
                Message.created_at >= timestamp
            )
        )
        message_ids = list(result.scalars().all())
        if not message_ids:
            return 0

        await self.session.execute(
            delete(Vote).where(
                Vote.chat_id == chat_id,
                Vote.message_id.in_(message_ids)
            )
        )
        await self.session.execute(
            delete(Message).where(
                Message.chat_id == chat_id,
                Message.id.in_(message_ids)
            )
        )
        return len(message_ids)

    async def count_by_user(self, user_id: str, hours: int) -> int:
        """
        Count user-role messages sent by a user in the last ``hours``.

        Args:
            user_id: Chat owner ID
            hours: Size of the window

        Returns:
            Message count
        """
        since = datetime.now(timezone.utc) - timedelta(hours=hours)

        result = await self.session.execute(
            select(func.count(Message.id))
            .join(Chat, Message.chat_id == Chat.id)
            .where(
                Chat.user_id == user_id,
                Message.created_at >= since,
                Message.role == MessageRole.USER.value
            )
        )
        return result.scalar() or 0


class VoteRepository:
    """Repository for Vote entities, keyed by (chat_id, message_id)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, chat_id: str, message_id: str) -> Optional[Vote]:
        result = await self.session.execute(
            select(Vote).where(
                Vote.chat_id == chat_id,
                Vote.message_id == message_id
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self,
        chat_id: str,
        message_id: str,
        is_upvoted: bool
    ) -> Vote:
        """
        Record a vote, replacing the polarity of an existing one.

        Args:
            chat_id: Chat ID
            message_id: Voted message ID
            is_upvoted: Polarity

        Returns:
            The stored vote
        """
        vote = await self.get(chat_id, message_id)

        if vote:
            vote.is_upvoted = is_upvoted
        else:
            vote = Vote(chat_id=chat_id, message_id=message_id, is_upvoted=is_upvoted)
            self.session.add(vote)

        await self.session.flush()
        return vote

    async def get_chat_votes(self, chat_id: str) -> List[Vote]:
        result = await self.session.execute(
            select(Vote).where(Vote.chat_id == chat_id)
        )
        return list(result.scalars().all())
