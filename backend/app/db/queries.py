"""
Query functions: the persistence boundary.

One function per access pattern. Each call opens its own short-lived
session, commits on success and rolls back on error. Storage errors are
translated into the application's exception taxonomy before they leave
this module.
"""

import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncGenerator, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.passwords import hash_password
from app.core.constants import DatabaseConstants
from app.core.exceptions import (
    ChatNotFoundError,
    ConflictError,
    DatabaseError,
    NotFoundError,
)
from app.core.logging import get_logger
from app.db.database import get_db_session
from app.models.domain import (
    Chat,
    Document,
    Message,
    Suggestion,
    User,
    Visibility,
    Vote,
    generate_uuid,
)
from app.repositories import (
    ChatRepository,
    DocumentRepository,
    MessageRepository,
    SuggestionRepository,
    UserRepository,
    VoteRepository,
)

logger = get_logger(__name__)


@dataclass
class ChatPage:
    """One page of a user's chat history."""

    chats: List[Chat]
    has_more: bool


# =============================================================================
# Error translation
# =============================================================================

def _integrity_kind(exc: IntegrityError) -> Optional[str]:
    """Classify an integrity error as 'unique', 'foreign_key' or None."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)

    if sqlstate == DatabaseConstants.SQLSTATE_UNIQUE_VIOLATION:
        return "unique"
    if sqlstate == DatabaseConstants.SQLSTATE_FOREIGN_KEY_VIOLATION:
        return "foreign_key"

    text = str(orig).lower()
    if "unique" in text or "duplicate key" in text:
        return "unique"
    if "foreign key" in text:
        return "foreign_key"
    return None


@asynccontextmanager
async def _transaction(
    operation: str,
    entity: str,
    unique_field: Optional[str] = None
) -> AsyncGenerator[AsyncSession, None]:
    """
    Session scope for one query function.

    Args:
        operation: Query function name, for logs and errors
        entity: Entity written by the operation
        unique_field: Field reported when a uniqueness constraint fails
    """
    try:
        async with get_db_session() as session:
            yield session
    except IntegrityError as e:
        kind = _integrity_kind(e)
        logger.warning(
            "Integrity violation",
            operation=operation,
            entity=entity,
            kind=kind
        )
        if kind == "unique":
            raise ConflictError(entity, unique_field) from e
        if kind == "foreign_key":
            raise NotFoundError(
                message=f"A record referenced by this {entity} does not exist",
                details={"entity": entity, "operation": operation}
            ) from e
        raise DatabaseError(operation) from e
    except SQLAlchemyError as e:
        logger.error(
            "Database operation failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__
        )
        raise DatabaseError(operation) from e


# =============================================================================
# Users
# =============================================================================

async def get_user(email: str) -> Optional[User]:
    """Look up a user by email."""
    async with _transaction("get_user", "user") as session:
        return await UserRepository(session).get_by_email(email)


async def create_user(email: str, password: str, id: Optional[str] = None) -> User:
    """
    Create a user with a hashed password.

    Args:
        email: Unique email
        password: Plaintext password, hashed before storage
        id: Pre-generated user ID, when the caller needs it before the insert

    Raises:
        ConflictError: If the email is already registered
    """
    async with _transaction("create_user", "user", unique_field="email") as session:
        user = await UserRepository(session).create(
            User(id=id or generate_uuid(), email=email, password=hash_password(password))
        )

    logger.info("User created", user_id=user.id)
    return user


async def create_guest_user() -> User:
    """Create a guest user with a random, unknown password."""
    email = f"guest-{int(time.time() * 1000)}"

    async with _transaction("create_guest_user", "user", unique_field="email") as session:
        user = await UserRepository(session).create(
            User(email=email, password=hash_password(generate_uuid()))
        )

    logger.info("Guest user created", user_id=user.id)
    return user


# =============================================================================
# Chats
# =============================================================================

async def save_chat(
    id: str,
    user_id: str,
    title: str,
    visibility: Visibility = Visibility.PRIVATE
) -> Chat:
    """
    Insert a chat.

    Raises:
        ConflictError: If a chat with this id exists
        NotFoundError: If the user does not exist
    """
    async with _transaction("save_chat", "chat", unique_field="id") as session:
        chat = await ChatRepository(session).create(
            Chat(
                id=id,
                user_id=user_id,
                title=title,
                visibility=Visibility(visibility).value
            )
        )

    logger.info("Chat created", chat_id=chat.id)
    return chat


async def get_chat_by_id(id: str) -> Optional[Chat]:
    async with _transaction("get_chat_by_id", "chat") as session:
        return await ChatRepository(session).get_by_id(id)


async def get_chats_by_user_id(
    user_id: str,
    limit: int,
    starting_after: Optional[str] = None,
    ending_before: Optional[str] = None
) -> ChatPage:
    """
    Page through a user's chats, newest first.

    Raises:
        ChatNotFoundError: If a cursor chat does not exist
    """
    async with _transaction("get_chats_by_user_id", "chat") as session:
        chats, has_more = await ChatRepository(session).list_by_user(
            user_id,
            limit,
            starting_after=starting_after,
            ending_before=ending_before
        )
    return ChatPage(chats=chats, has_more=has_more)


async def delete_chat_by_id(id: str) -> Chat:
    """
    Delete a chat with all its messages and votes.

    Raises:
        ChatNotFoundError: If the chat does not exist
    """
    async with _transaction("delete_chat_by_id", "chat") as session:
        chat = await ChatRepository(session).delete_with_children(id)
        if not chat:
            raise ChatNotFoundError(id)

    logger.info("Chat deleted", chat_id=id)
    return chat


async def update_chat_visibility_by_id(chat_id: str, visibility: Visibility) -> Chat:
    """
    Change who may view a chat.

    Raises:
        ChatNotFoundError: If the chat does not exist
    """
    async with _transaction("update_chat_visibility_by_id", "chat") as session:
        chat = await ChatRepository(session).update_visibility(
            chat_id,
            Visibility(visibility).value
        )
        if not chat:
            raise ChatNotFoundError(chat_id)

    logger.info("Chat visibility updated", chat_id=chat_id, visibility=chat.visibility)
    return chat


# =============================================================================
# Messages
# =============================================================================

async def save_messages(messages: Sequence[Message]) -> List[Message]:
    """
    Insert messages in one transaction.

    Raises:
        ConflictError: If a message id already exists
        NotFoundError: If a chat does not exist
    """
    async with _transaction("save_messages", "message", unique_field="id") as session:
        return await MessageRepository(session).create_many(list(messages))


async def get_messages_by_chat_id(id: str) -> List[Message]:
    async with _transaction("get_messages_by_chat_id", "message") as session:
        return await MessageRepository(session).get_chat_messages(id)


async def get_message_by_id(id: str) -> Optional[Message]:
    async with _transaction("get_message_by_id", "message") as session:
        return await MessageRepository(session).get_by_id(id)


async def delete_messages_by_chat_id_after_timestamp(
    chat_id: str,
    timestamp: datetime
) -> int:
    """Delete messages (and their votes) created at or after ``timestamp``."""
    async with _transaction("delete_messages_by_chat_id_after_timestamp", "message") as session:
        deleted = await MessageRepository(session).delete_after(chat_id, timestamp)

    logger.info("Trailing messages deleted", chat_id=chat_id, count=deleted)
    return deleted


async def get_message_count_by_user_id(user_id: str, difference_in_hours: int) -> int:
    async with _transaction("get_message_count_by_user_id", "message") as session:
        return await MessageRepository(session).count_by_user(user_id, difference_in_hours)


# =============================================================================
# Votes
# =============================================================================

async def vote_message(chat_id: str, message_id: str, is_upvoted: bool) -> Vote:
    """
    Record or replace a vote on a message.

    Raises:
        NotFoundError: If the chat or message does not exist
    """
    async with _transaction("vote_message", "vote") as session:
        return await VoteRepository(session).upsert(chat_id, message_id, is_upvoted)


async def get_votes_by_chat_id(id: str) -> List[Vote]:
    async with _transaction("get_votes_by_chat_id", "vote") as session:
        return await VoteRepository(session).get_chat_votes(id)


# =============================================================================
# Documents
# =============================================================================

async def save_document(
    id: str,
    title: str,
    kind: str,
    content: Optional[str],
    user_id: str
) -> Document:
    """Insert a new version of a document."""
    async with _transaction("save_document", "document") as session:
        document = await DocumentRepository(session).create(
            Document(
                id=id,
                title=title,
                kind=kind,
                content=content,
                user_id=user_id
            )
        )

    logger.info("Document saved", document_id=id)
    return document


async def get_documents_by_id(id: str) -> List[Document]:
    async with _transaction("get_documents_by_id", "document") as session:
        return await DocumentRepository(session).get_versions(id)


async def get_document_by_id(id: str) -> Optional[Document]:
    async with _transaction("get_document_by_id", "document") as session:
        return await DocumentRepository(session).get_latest(id)


async def delete_documents_by_id_after_timestamp(
    id: str,
    timestamp: datetime
) -> List[Document]:
    """Delete versions (and their suggestions) created after ``timestamp``."""
    async with _transaction("delete_documents_by_id_after_timestamp", "document") as session:
        documents = await DocumentRepository(session).delete_after(id, timestamp)

    logger.info("Document versions deleted", document_id=id, count=len(documents))
    return documents


# =============================================================================
# Suggestions
# =============================================================================

async def save_suggestions(suggestions: Sequence[Suggestion]) -> List[Suggestion]:
    """
    Insert suggestions in one transaction.

    Raises:
        NotFoundError: If a referenced document version does not exist
    """
    async with _transaction("save_suggestions", "suggestion", unique_field="id") as session:
        return await SuggestionRepository(session).create_many(list(suggestions))


async def get_suggestions_by_document_id(document_id: str) -> List[Suggestion]:
    async with _transaction("get_suggestions_by_document_id", "suggestion") as session:
        return await SuggestionRepository(session).get_document_suggestions(document_id)
