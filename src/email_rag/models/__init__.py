"""
Pydantic data models for the email RAG pipeline.

Includes:
- Input models (EmailRecord, Contact, Recipients, Attachment)
- Derived models (CleanedContent, QualityMetrics, EntityBundle, Chunk)
- Enums (Importance, DocumentType)
- StageResult (frozen dataclass returned by fail-open stages)
"""

from email_rag.models.enums import DocumentType, Importance
from email_rag.models.input_models import Attachment, Contact, EmailRecord, Recipients
from email_rag.models.output_models import (
    Chunk,
    CleanedContent,
    EntityBundle,
    QualityMetrics,
    UrlEntity,
)
from email_rag.models.stage_result import StageResult

__all__ = [
    # Enums
    "Importance",
    "DocumentType",
    # Input models
    "Contact",
    "Recipients",
    "Attachment",
    "EmailRecord",
    # Derived models
    "QualityMetrics",
    "UrlEntity",
    "EntityBundle",
    "Chunk",
    "CleanedContent",
    # Stage results
    "StageResult",
]
