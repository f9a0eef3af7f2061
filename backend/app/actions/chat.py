"""
Chat actions: visibility, trailing message deletion, model selection.

When ``user`` is given, the chat must belong to that user; otherwise the
action answers ``forbidden`` without writing anything.
"""

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from app.actions.state import ChatActionState, ModelSelectionState
from app.auth.cookies import get_cookie_jar
from app.auth.tokens import SessionUser
from app.core.constants import ChatConstants
from app.core.exceptions import ChatbotError, MessageNotFoundError, NotFoundError
from app.core.logging import get_logger
from app.db import queries
from app.models.schemas import ChatModelSelection, TrailingMessagesDelete, VisibilityUpdate

logger = get_logger(__name__)


async def _owns_chat(chat_id: str, user: Optional[SessionUser]) -> bool:
    if user is None:
        return True
    chat = await queries.get_chat_by_id(chat_id)
    return chat is None or chat.is_owned_by(user.id)


async def update_chat_visibility(
    state: ChatActionState,
    payload: Mapping[str, Any],
    user: Optional[SessionUser] = None
) -> ChatActionState:
    """Set a chat's visibility to ``public`` or ``private``."""
    try:
        data = VisibilityUpdate.model_validate(dict(payload))
    except ValidationError:
        return ChatActionState(status="invalid_data")

    try:
        if not await _owns_chat(data.chat_id, user):
            return ChatActionState(status="forbidden")

        await queries.update_chat_visibility_by_id(data.chat_id, data.visibility)
    except NotFoundError as e:
        return ChatActionState(status="not_found", message=e.message)
    except ChatbotError as e:
        logger.warning("Visibility update failed", chat_id=data.chat_id, message=e.message)
        return ChatActionState(status="failed")
    except Exception:
        logger.exception("Visibility update failed unexpectedly", chat_id=data.chat_id)
        return ChatActionState(status="failed")

    return ChatActionState(status="success")


async def delete_trailing_messages(
    state: ChatActionState,
    payload: Mapping[str, Any],
    user: Optional[SessionUser] = None
) -> ChatActionState:
    """Delete a message and every later message in the same chat."""
    try:
        data = TrailingMessagesDelete.model_validate(dict(payload))
    except ValidationError:
        return ChatActionState(status="invalid_data")

    try:
        message = await queries.get_message_by_id(data.id)
        if message is None:
            raise MessageNotFoundError(data.id)

        if not await _owns_chat(message.chat_id, user):
            return ChatActionState(status="forbidden")

        await queries.delete_messages_by_chat_id_after_timestamp(
            message.chat_id,
            message.created_at
        )
    except NotFoundError as e:
        return ChatActionState(status="not_found", message=e.message)
    except ChatbotError as e:
        logger.warning("Trailing message deletion failed", message_id=data.id, message=e.message)
        return ChatActionState(status="failed")
    except Exception:
        logger.exception("Trailing message deletion failed unexpectedly", message_id=data.id)
        return ChatActionState(status="failed")

    return ChatActionState(status="success")


async def save_chat_model_as_cookie(
    state: ModelSelectionState,
    payload: Mapping[str, Any],
    user: Optional[SessionUser] = None
) -> ModelSelectionState:
    """Remember the selected chat model in a cookie."""
    try:
        data = ChatModelSelection.model_validate(dict(payload))
    except ValidationError:
        return ModelSelectionState(status="invalid_data")

    try:
        get_cookie_jar().set(
            ChatConstants.CHAT_MODEL_COOKIE_NAME,
            data.model,
            httponly=False
        )
    except Exception:
        logger.exception("Saving chat model failed", model=data.model)
        return ModelSelectionState(status="failed")

    return ModelSelectionState(status="success")
