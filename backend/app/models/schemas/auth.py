"""
Pydantic schemas for authentication forms and session responses.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.constants import AuthConstants


class AuthForm(BaseModel):
    """
    Email/password pair submitted by the login and register forms.

    Surrounding whitespace is trimmed from the email only; the password is
    kept exactly as typed.
    """

    model_config = ConfigDict(extra="ignore")

    email: EmailStr
    password: str = Field(min_length=AuthConstants.MIN_PASSWORD_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


class SessionUserResponse(BaseModel):
    id: str
    email: str
    type: str


class SessionResponse(BaseModel):
    """Current session, or null user when signed out."""

    user: Optional[SessionUserResponse] = None
