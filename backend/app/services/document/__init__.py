"""
Document services for versioned documents and suggestions.
"""

from app.services.document.service import DocumentService, document_service

__all__ = [
    "DocumentService",
    "document_service",
]
