"""
Pydantic schemas for document and suggestion endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.domain.document import DocumentKind
from app.models.schemas.chat import RequestModel


class DocumentSave(RequestModel):
    """Body for saving a new document version."""

    title: str = Field(min_length=1)
    kind: DocumentKind
    content: Optional[str] = None


class DocumentResponse(BaseModel):
    """Response schema for one document version."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    title: str
    kind: DocumentKind
    content: Optional[str] = None
    user_id: str


class SuggestionResponse(BaseModel):
    """Response schema for a suggestion."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    document_created_at: datetime
    original_text: str
    suggested_text: str
    description: Optional[str] = None
    is_resolved: bool
    user_id: str
    created_at: datetime
