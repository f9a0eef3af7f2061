"""
Document and suggestion API routes.
"""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import require_user
from app.auth.tokens import SessionUser
from app.models.schemas import DocumentResponse, DocumentSave, SuggestionResponse
from app.services.document import document_service

router = APIRouter(tags=["documents"])


@router.get("/document", response_model=List[DocumentResponse])
async def get_document(
    id: str = Query(..., min_length=1),
    user: SessionUser = Depends(require_user)
):
    """All versions of a document, oldest first."""
    documents = await document_service.get_versions(id, user)
    return [DocumentResponse.model_validate(d) for d in documents]


@router.post("/document", response_model=DocumentResponse)
async def save_document(
    data: DocumentSave,
    id: str = Query(..., min_length=1),
    user: SessionUser = Depends(require_user)
):
    """Save a new version of a document."""
    document = await document_service.save(id, data, user)
    return DocumentResponse.model_validate(document)


@router.delete("/document", response_model=List[DocumentResponse])
async def delete_document_versions(
    id: str = Query(..., min_length=1),
    timestamp: datetime = Query(...),
    user: SessionUser = Depends(require_user)
):
    """Delete every version created after ``timestamp``."""
    documents = await document_service.delete_after(id, timestamp, user)
    return [DocumentResponse.model_validate(d) for d in documents]


@router.get("/suggestions", response_model=List[SuggestionResponse])
async def get_suggestions(
    document_id: str = Query(..., alias="documentId", min_length=1),
    user: SessionUser = Depends(require_user)
):
    """Suggestions made against a document."""
    suggestions = await document_service.get_suggestions(document_id, user)
    return [SuggestionResponse.model_validate(s) for s in suggestions]
