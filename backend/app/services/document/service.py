"""
Document service: versioned documents with owner checks.
"""

from datetime import datetime
from typing import List

from app.auth.tokens import SessionUser
from app.core.exceptions import DocumentNotFoundError, ForbiddenError
from app.core.logging import get_logger
from app.db import queries
from app.models.domain import Document, Suggestion
from app.models.schemas import DocumentSave

logger = get_logger(__name__)


class DocumentService:
    """Service for reading and writing document versions."""

    async def get_versions(self, document_id: str, user: SessionUser) -> List[Document]:
        """
        Get all versions of a document owned by ``user``.

        Raises:
            DocumentNotFoundError: If no version exists
            ForbiddenError: If it belongs to someone else
        """
        documents = await queries.get_documents_by_id(document_id)

        if not documents:
            raise DocumentNotFoundError(document_id)
        if documents[0].user_id != user.id:
            raise ForbiddenError()
        return documents

    async def save(
        self,
        document_id: str,
        data: DocumentSave,
        user: SessionUser
    ) -> Document:
        """
        Save a new version. Only the owner may add versions to an existing
        document.
        """
        latest = await queries.get_document_by_id(document_id)
        if latest is not None and latest.user_id != user.id:
            raise ForbiddenError()

        return await queries.save_document(
            id=document_id,
            title=data.title,
            kind=data.kind.value,
            content=data.content,
            user_id=user.id
        )

    async def delete_after(
        self,
        document_id: str,
        timestamp: datetime,
        user: SessionUser
    ) -> List[Document]:
        await self.get_versions(document_id, user)
        return await queries.delete_documents_by_id_after_timestamp(document_id, timestamp)

    async def get_suggestions(self, document_id: str, user: SessionUser) -> List[Suggestion]:
        """
        Get suggestions for a document; empty when there are none.

        Raises:
            ForbiddenError: If the suggestions belong to someone else
        """
        suggestions = await queries.get_suggestions_by_document_id(document_id)

        if suggestions and suggestions[0].user_id != user.id:
            raise ForbiddenError()
        return suggestions


document_service = DocumentService()
