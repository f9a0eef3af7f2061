"""
Pydantic schemas for chat-related payloads and responses.

Request schemas accept both camelCase (``chatId``) and snake_case keys.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.constants import ChatConstants
from app.models.domain.chat import Visibility


class RequestModel(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore"
    )


# =============================================================================
# Action Payloads
# =============================================================================

class VisibilityUpdate(RequestModel):
    """Payload for changing a chat's visibility."""

    chat_id: str = Field(min_length=1)
    visibility: Visibility


class TrailingMessagesDelete(RequestModel):
    """Payload for deleting a message and everything after it."""

    id: str = Field(min_length=1)


class ChatModelSelection(RequestModel):
    """Payload for remembering the selected chat model."""

    model: str

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        if v not in ChatConstants.CHAT_MODELS:
            raise ValueError(f"Unknown chat model '{v}'")
        return v


# =============================================================================
# Message Schemas
# =============================================================================

class TextPart(RequestModel):
    type: Literal["text"]
    text: str = Field(min_length=1, max_length=ChatConstants.MAX_TEXT_PART_LENGTH)


class Attachment(RequestModel):
    url: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=2000)
    content_type: Literal["image/png", "image/jpg", "image/jpeg"]


class UserMessageCreate(RequestModel):
    """
    A user message submitted to a chat.

    The server stamps the creation time; a client-sent ``createdAt`` is ignored.
    """

    id: str = Field(min_length=1)
    role: Literal["user"] = "user"
    parts: List[TextPart] = Field(min_length=1)
    attachments: List[Attachment] = Field(default_factory=list)


class ChatSubmission(RequestModel):
    """Body of a chat submission: the chat id plus the new user message."""

    id: str = Field(min_length=1)
    message: UserMessageCreate
    selected_chat_model: str = ChatConstants.DEFAULT_CHAT_MODEL
    selected_visibility_type: Visibility = Visibility.PRIVATE


class MessageResponse(BaseModel):
    """Response schema for a message."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    chat_id: str
    role: str
    parts: List[Dict[str, Any]]
    attachments: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime


# =============================================================================
# Chat Schemas
# =============================================================================

class ChatResponse(BaseModel):
    """Response schema for a chat."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    user_id: str
    visibility: Visibility
    created_at: datetime


class ChatDetailResponse(ChatResponse):
    """Chat with its messages and whether the viewer owns it."""

    messages: List[MessageResponse] = Field(default_factory=list)
    is_readonly: bool = False


class ChatHistoryResponse(BaseModel):
    """One page of chat history."""

    chats: List[ChatResponse]
    has_more: bool = False


# =============================================================================
# Vote Schemas
# =============================================================================

class VoteRequest(RequestModel):
    """Payload for voting on a message."""

    chat_id: str = Field(min_length=1)
    message_id: str = Field(min_length=1)
    type: Literal["up", "down"]

    @property
    def is_upvoted(self) -> bool:
        return self.type == ChatConstants.VOTE_UP


class VoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    chat_id: str
    message_id: str
    is_upvoted: bool
