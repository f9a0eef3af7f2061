"""
Custom exception hierarchy for the Chatbot backend.
All application-specific exceptions inherit from ChatbotError.
"""

from typing import Any, Dict, Optional

from app.core.constants import HTTPStatus


class ChatbotError(Exception):
    """Base exception for all Chatbot errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(ChatbotError):
    """Raised when request input is malformed."""

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    default_message = "Validation error"


# =============================================================================
# Storage Errors
# =============================================================================

class ConflictError(ChatbotError):
    """Raised when a write violates a uniqueness constraint."""

    status_code = HTTPStatus.CONFLICT
    default_message = "Resource already exists"

    def __init__(self, entity: str, field: Optional[str] = None):
        message = f"{entity.capitalize()} already exists"
        if field:
            message = f"{entity.capitalize()} with this {field} already exists"
        super().__init__(
            message=message,
            details={"entity": entity, "field": field}
        )

    @property
    def entity(self) -> str:
        return self.details["entity"]

    @property
    def field(self) -> Optional[str]:
        return self.details["field"]


class NotFoundError(ChatbotError):
    """Raised when a referenced row does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = "Resource not found"


class ChatNotFoundError(NotFoundError):
    """Raised when a chat is not found."""

    default_message = "Chat not found"

    def __init__(self, chat_id: str):
        super().__init__(
            message=f"Chat '{chat_id}' not found",
            details={"chat_id": chat_id}
        )


class MessageNotFoundError(NotFoundError):
    """Raised when a message is not found."""

    default_message = "Message not found"

    def __init__(self, message_id: str):
        super().__init__(
            message=f"Message '{message_id}' not found",
            details={"message_id": message_id}
        )


class DocumentNotFoundError(NotFoundError):
    """Raised when a document is not found."""

    default_message = "Document not found"

    def __init__(self, document_id: str):
        super().__init__(
            message=f"Document '{document_id}' not found",
            details={"document_id": document_id}
        )


class DatabaseError(ChatbotError):
    """Raised when the database fails for an unclassified reason."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Database error"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Database operation '{operation}' failed",
            details={"operation": operation}
        )


# =============================================================================
# Auth Errors
# =============================================================================

class AuthenticationError(ChatbotError):
    """Raised when a request requires a session and has none."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "You need to sign in before continuing"


class ForbiddenError(ChatbotError):
    """Raised when the session user does not own the resource."""

    status_code = HTTPStatus.FORBIDDEN
    default_message = "You do not have access to this resource"


class RateLimitError(ChatbotError):
    """Raised when a user exceeds their daily message quota."""

    status_code = HTTPStatus.TOO_MANY_REQUESTS
    default_message = "Message limit reached"

    def __init__(self, limit: int, window_hours: int):
        super().__init__(
            message=f"You have exceeded your maximum of {limit} messages per {window_hours} hours",
            details={"limit": limit, "window_hours": window_hours}
        )
