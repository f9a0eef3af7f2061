"""
FastAPI dependencies for request handling.
"""

from typing import Any, Mapping, Optional

from fastapi import Depends, Request

from app.auth.tokens import SessionUser
from app.core.constants import APIConstants
from app.core.exceptions import AuthenticationError, ValidationError
from app.db.database import get_db

__all__ = [
    "get_db",
    "get_session_user",
    "require_user",
    "read_payload",
]


async def get_session_user(request: Request) -> Optional[SessionUser]:
    """Identity resolved from the session cookie by the gate middleware."""
    return getattr(request.state, "session_user", None)


async def require_user(
    user: Optional[SessionUser] = Depends(get_session_user)
) -> SessionUser:
    """
    Require a signed-in user.

    Raises:
        AuthenticationError: If the request has no valid session
    """
    if user is None:
        raise AuthenticationError()
    return user


async def read_payload(request: Request) -> Mapping[str, Any]:
    """
    Read an action payload from a form submission or a JSON object body.

    Raises:
        ValidationError: If a JSON body is not an object
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(APIConstants.JSON_CONTENT_TYPE):
        try:
            body = await request.json()
        except ValueError as e:
            raise ValidationError("Request body is not valid JSON") from e
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body

    return await request.form()
