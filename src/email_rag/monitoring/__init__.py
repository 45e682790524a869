"""Monitoring and metrics instrumentation for the email RAG pipeline."""

from email_rag.monitoring.metrics import (
    chunks_emitted_total,
    content_quality_score,
    emails_processed_total,
    search_documents_total,
    stage_degradations_total,
)

__all__ = [
    "emails_processed_total",
    "stage_degradations_total",
    "chunks_emitted_total",
    "search_documents_total",
    "content_quality_score",
]
