"""
Document repository for versioned documents and their suggestions.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.domain import Document, Suggestion
from app.repositories.base import BaseRepository


class DocumentRepository:
    """Repository for Document entities, keyed by (id, created_at)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        """
        Insert a new document version.

        Args:
            document: Document to insert

        Returns:
            Created document
        """
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_versions(self, document_id: str) -> List[Document]:
        """
        Get every version of a document.

        Args:
            document_id: Document ID

        Returns:
            Versions ordered oldest first
        """
        result = await self.session.execute(
            select(Document)
            .where(Document.id == document_id)
            .order_by(Document.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_latest(self, document_id: str) -> Optional[Document]:
        """
        Get the newest version of a document.

        Args:
            document_id: Document ID

        Returns:
            Latest version or None
        """
        result = await self.session.execute(
            select(Document)
            .where(Document.id == document_id)
            .order_by(Document.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def delete_after(
        self,
        document_id: str,
        timestamp: datetime
    ) -> List[Document]:
        """
        Delete versions created after a timestamp, with their suggestions.

        Args:
            document_id: Document ID
            timestamp: Exclusive lower bound

        Returns:
            The deleted versions
        """
        result = await self.session.execute(
            select(Document).where(
                Document.id == document_id,
                Document.created_at > timestamp
            )
        )
        documents = list(result.scalars().all())

        await self.session.execute(
            delete(Suggestion).where(
                Suggestion.document_id == document_id,
                Suggestion.document_created_at > timestamp
            )
        )
        await self.session.execute(
            delete(Document).where(
                Document.id == document_id,
                Document.created_at > timestamp
            )
        )
        return documents


class SuggestionRepository(BaseRepository[Suggestion]):
    """Repository for Suggestion entities."""

    model = Suggestion

    async def get_document_suggestions(self, document_id: str) -> List[Suggestion]:
        result = await self.session.execute(
            select(Suggestion)
            .where(Suggestion.document_id == document_id)
            .order_by(Suggestion.created_at.asc())
        )
        return list(result.scalars().all())
