"""
Chat API routes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_session_user, require_user
from app.auth.tokens import SessionUser
from app.core.logging import get_logger
from app.models.schemas import (
    ChatDetailResponse,
    ChatResponse,
    ChatSubmission,
    MessageResponse,
)
from app.services.chat import chat_service

logger = get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=MessageResponse, status_code=201)
async def submit_message(
    data: ChatSubmission,
    user: SessionUser = Depends(require_user)
):
    """
    Store a user message. Creates the chat, titled from the message, when
    it does not exist yet.
    """
    message = await chat_service.submit_user_message(user, data)
    return MessageResponse.model_validate(message)


@router.get("/{chat_id}", response_model=ChatDetailResponse)
async def get_chat(
    chat_id: str,
    user: Optional[SessionUser] = Depends(get_session_user)
):
    """Get a chat with its messages. Private chats are only shown to their owner."""
    chat, messages = await chat_service.get_chat_for_viewer(chat_id, user)

    return ChatDetailResponse(
        **ChatResponse.model_validate(chat).model_dump(),
        messages=[MessageResponse.model_validate(m) for m in messages],
        is_readonly=user is None or not chat.is_owned_by(user.id)
    )


@router.delete("", response_model=ChatResponse)
async def delete_chat(
    id: str = Query(..., min_length=1),
    user: SessionUser = Depends(require_user)
):
    """Delete a chat with its messages and votes."""
    chat = await chat_service.delete_chat(id, user)
    return ChatResponse.model_validate(chat)
