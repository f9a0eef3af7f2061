"""
Pydantic schemas for API requests and responses.
"""

from app.models.schemas.auth import AuthForm, SessionResponse, SessionUserResponse
from app.models.schemas.chat import (
    Attachment,
    ChatDetailResponse,
    ChatHistoryResponse,
    ChatModelSelection,
    ChatResponse,
    ChatSubmission,
    MessageResponse,
    TextPart,
    TrailingMessagesDelete,
    UserMessageCreate,
    VisibilityUpdate,
    VoteRequest,
    VoteResponse,
)
from app.models.schemas.document import DocumentResponse, DocumentSave, SuggestionResponse

__all__ = [
    # Auth
    "AuthForm",
    "SessionResponse",
    "SessionUserResponse",
    # Chat
    "Attachment",
    "ChatDetailResponse",
    "ChatHistoryResponse",
    "ChatModelSelection",
    "ChatResponse",
    "ChatSubmission",
    "MessageResponse",
    "TextPart",
    "TrailingMessagesDelete",
    "UserMessageCreate",
    "VisibilityUpdate",
    # Vote
    "VoteRequest",
    "VoteResponse",
    # Document
    "DocumentResponse",
    "DocumentSave",
    "SuggestionResponse",
]
