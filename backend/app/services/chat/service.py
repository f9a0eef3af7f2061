"""
Chat service for conversation management.
"""

from typing import List, Tuple

from app.auth.tokens import SessionUser
from app.core.constants import ChatConstants, EntitlementConstants
from app.core.exceptions import ChatNotFoundError, ForbiddenError, RateLimitError
from app.core.logging import get_logger
from app.db import queries
from app.models.domain import Chat, Message, MessageRole, Vote
from app.models.schemas import ChatSubmission, UserMessageCreate

logger = get_logger(__name__)


def derive_title(message: UserMessageCreate) -> str:
    """
    Build a chat title from the first user message.

    Uses the first non-empty line of the text, truncated.
    """
    text = " ".join(part.text for part in message.parts).strip()
    first_line = next((line.strip() for line in text.splitlines() if line.strip()), "")

    if not first_line:
        return ChatConstants.DEFAULT_TITLE

    if len(first_line) > ChatConstants.MAX_TITLE_LENGTH:
        return first_line[:ChatConstants.MAX_TITLE_LENGTH - 3].rstrip() + "..."
    return first_line


class ChatService:
    """Service for managing chat conversations."""

    async def check_entitlement(self, user: SessionUser) -> None:
        """
        Enforce the daily message quota for the user's type.

        Raises:
            RateLimitError: If the quota is used up
        """
        limit = EntitlementConstants.MAX_MESSAGES_PER_DAY[user.type.value]
        window = EntitlementConstants.QUOTA_WINDOW_HOURS

        count = await queries.get_message_count_by_user_id(user.id, window)
        if count >= limit:
            logger.info("Message quota reached", user_id=user.id, count=count, limit=limit)
            raise RateLimitError(limit, window)

    async def submit_user_message(
        self,
        user: SessionUser,
        submission: ChatSubmission
    ) -> Message:
        """
        Store a user message, creating the chat on first use.

        Args:
            user: Sender
            submission: Chat id and message

        Returns:
            The stored message

        Raises:
            RateLimitError: If the sender is over quota
            ForbiddenError: If the chat belongs to someone else
        """
        await self.check_entitlement(user)

        chat = await queries.get_chat_by_id(submission.id)

        if chat is None:
            chat = await queries.save_chat(
                id=submission.id,
                user_id=user.id,
                title=derive_title(submission.message),
                visibility=submission.selected_visibility_type
            )
        elif not chat.is_owned_by(user.id):
            raise ForbiddenError()

        incoming = submission.message
        message = Message(
            id=incoming.id,
            chat_id=chat.id,
            role=MessageRole.USER.value,
            parts=[part.model_dump() for part in incoming.parts],
            attachments=[a.model_dump(by_alias=True) for a in incoming.attachments],
        )

        [saved] = await queries.save_messages([message])
        logger.info("User message stored", chat_id=chat.id, message_id=saved.id)
        return saved

    async def get_chat_for_viewer(
        self,
        chat_id: str,
        user: SessionUser | None
    ) -> Tuple[Chat, List[Message]]:
        """
        Load a chat and its messages if the viewer may see it.

        Private chats of other users are reported as missing.

        Raises:
            ChatNotFoundError: If missing or not visible
        """
        chat = await queries.get_chat_by_id(chat_id)

        if chat is None or not chat.is_visible_to(user.id if user else None):
            raise ChatNotFoundError(chat_id)

        messages = await queries.get_messages_by_chat_id(chat_id)
        return chat, messages

    async def get_owned_chat(self, chat_id: str, user: SessionUser) -> Chat:
        """
        Load a chat the user owns.

        Raises:
            ChatNotFoundError: If the chat does not exist
            ForbiddenError: If it belongs to someone else
        """
        chat = await queries.get_chat_by_id(chat_id)

        if chat is None:
            raise ChatNotFoundError(chat_id)
        if not chat.is_owned_by(user.id):
            raise ForbiddenError()
        return chat

    async def delete_chat(self, chat_id: str, user: SessionUser) -> Chat:
        await self.get_owned_chat(chat_id, user)
        return await queries.delete_chat_by_id(chat_id)

    async def vote(
        self,
        user: SessionUser,
        chat_id: str,
        message_id: str,
        is_upvoted: bool
    ) -> Vote:
        await self.get_owned_chat(chat_id, user)
        return await queries.vote_message(chat_id, message_id, is_upvoted)

    async def get_votes(self, user: SessionUser, chat_id: str) -> List[Vote]:
        await self.get_owned_chat(chat_id, user)
        return await queries.get_votes_by_chat_id(chat_id)


chat_service = ChatService()
