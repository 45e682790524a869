"""
Search document builder: flattens one email into index documents.

Produces one parent document (documentType=Email) carrying the full cleaned
text and one child document (documentType=EmailChunk) per non-empty chunk.
Document ids derive from the subject, so rebuilding the same email yields
the same ids and re-indexing overwrites instead of duplicating.
"""

import re
import uuid
from typing import Any, Iterable, Optional

import structlog

from ..config import Settings
from ..exceptions import MissingContentError
from ..models.enums import DocumentType
from ..models.input_models import Contact, EmailRecord
from ..models.output_models import Chunk, CleanedContent
from ..monitoring.metrics import search_documents_total
from .documents import ChunkSearchDocument, EmailSearchDocument
from .field_guard import MAX_FIELD_LENGTH, TRUNCATED_FIELD_LENGTH
from .keywords import CONTENT_KEYWORD_COUNT, MAX_KEYWORDS, top_keywords
from .stopwords import STOP_WORDS

logger = structlog.get_logger(__name__)

ID_PREFIX = "email-"
MAX_ID_SLUG_LENGTH = 50

_ID_DISALLOWED = re.compile(r"[^A-Za-z0-9\-_.]")
_DASH_RUN = re.compile(r"-{2,}")


def generate_base_id(subject: str) -> str:
    """
    Derive the parent document id from a subject line.

    Disallowed characters become dashes, dash runs collapse, leading and
    trailing dashes go and the slug is cut to 50 chars. A subject with no
    usable characters gets a random id instead.

    Examples:
        >>> generate_base_id("Re: Q3 budget (draft)")
        'email-Re-Q3-budget-draft'
    """
    slug = _ID_DISALLOWED.sub("-", subject or "")
    slug = _DASH_RUN.sub("-", slug).strip("-")
    slug = slug[:MAX_ID_SLUG_LENGTH]
    if not slug.strip():
        return f"{ID_PREFIX}{uuid.uuid4().hex}"
    return f"{ID_PREFIX}{slug}"


def _join_contacts(contacts: Iterable[Contact]) -> str:
    return "; ".join(c.display for c in contacts if c.display)


def _isoformat(value: Any) -> Optional[str]:
    return value.isoformat() if value is not None else None


class SearchDocumentBuilder:
    """
    Build flat search index documents for one email.

    Fail-fast: an email with no subject, no cleaned text and no chunks raises
    MissingContentError instead of producing an empty parent document.
    """

    def __init__(
        self,
        max_keywords: int = MAX_KEYWORDS,
        content_keyword_count: int = CONTENT_KEYWORD_COUNT,
        max_field_length: int = MAX_FIELD_LENGTH,
        truncated_field_length: int = TRUNCATED_FIELD_LENGTH,
        stopwords: Iterable[str] = STOP_WORDS,
    ):
        """
        Initialize builder.

        Args:
            max_keywords: Cap on searchKeywords per document
            content_keyword_count: Frequent body words considered for keywords
            max_field_length: Longest string field accepted unchanged
            truncated_field_length: Characters kept when a field is truncated
            stopwords: Words excluded from keywords
        """
        self.max_keywords = max_keywords
        self.content_keyword_count = content_keyword_count
        self.stopwords = frozenset(w.lower() for w in stopwords)
        self._validation_context = {
            "max_field_length": max_field_length,
            "truncated_field_length": truncated_field_length,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchDocumentBuilder":
        return cls(
            max_keywords=settings.MAX_KEYWORDS,
            content_keyword_count=settings.CONTENT_KEYWORD_COUNT,
            max_field_length=settings.MAX_FIELD_LENGTH,
            truncated_field_length=settings.TRUNCATED_FIELD_LENGTH,
        )

    def keywords_for(self, email: EmailRecord, content: str) -> list[str]:
        return top_keywords(
            email.subject,
            email.sender.name,
            content,
            stopwords=self.stopwords,
            limit=self.max_keywords,
            content_top_n=self.content_keyword_count,
        )

    def build_documents(
        self,
        email: EmailRecord,
        cleaned: CleanedContent,
        chunks: list[Chunk],
    ) -> list[dict[str, Any]]:
        """
        Flatten an email into its parent and chunk documents.

        Args:
            email: Source email record
            cleaned: Cleaned text, quality metrics and entities
            chunks: Chunks of the cleaned text

        Returns:
            Parent document first, then one document per non-empty chunk,
            each a flat camelCase dict ready for upload

        Raises:
            MissingContentError: Nothing to index (no subject, text or chunks)
        """
        indexable_chunks = [c for c in chunks if c.content.strip()]
        if not email.subject.strip() and not cleaned.cleaned_text.strip() and not indexable_chunks:
            raise MissingContentError(
                "Email has no subject, body text or chunks to index",
                file_name=email.file_name,
                missing_fields=["subject", "body"],
            )

        base_id = generate_base_id(email.subject)
        documents = [self._build_parent(base_id, email, cleaned, len(indexable_chunks))]
        documents.extend(
            self._build_chunk(base_id, email, chunk) for chunk in indexable_chunks
        )

        search_documents_total.labels(document_type=DocumentType.EMAIL.value).inc()
        search_documents_total.labels(document_type=DocumentType.EMAIL_CHUNK.value).inc(
            len(indexable_chunks)
        )
        logger.debug(
            "Built search documents",
            base_id=base_id,
            file_name=email.file_name,
            chunk_documents=len(indexable_chunks),
        )
        return documents

    def _build_parent(
        self,
        base_id: str,
        email: EmailRecord,
        cleaned: CleanedContent,
        chunk_count: int,
    ) -> dict[str, Any]:
        metrics = cleaned.quality_score
        entities = cleaned.entities
        data = {
            "id": base_id,
            "documentType": DocumentType.EMAIL,
            "fileName": email.file_name,
            "subject": email.subject,
            "senderName": email.sender.name,
            "senderEmail": email.sender.email,
            "recipientsTo": _join_contacts(email.recipients.to),
            "recipientsCc": _join_contacts(email.recipients.cc),
            "recipientsBcc": _join_contacts(email.recipients.bcc),
            "recipientCount": email.recipients.count,
            "sentDate": _isoformat(email.sent_at),
            "receivedDate": _isoformat(email.received_at),
            "size": email.size,
            "importance": email.importance.value,
            "hasAttachments": bool(email.attachments),
            "attachmentCount": len(email.attachments),
            "attachmentNames": [a.file_name for a in email.attachments],
            "allText": cleaned.cleaned_text,
            "contentLength": metrics.length,
            "wordCount": metrics.word_count,
            "qualityScore": metrics.overall_score,
            "readabilityScore": metrics.readability_score,
            "hasMeaningfulContent": metrics.has_meaningful_content,
            "reductionRatio": cleaned.reduction_ratio,
            "chunkCount": chunk_count,
            "entityCount": entities.entity_count,
            "emailAddresses": list(entities.emails),
            "urls": [u.url for u in entities.urls],
            "urlDomains": entities.domains,
            "phoneNumbers": list(entities.phone_numbers),
            "dates": list(entities.dates),
            "ipAddresses": list(entities.ip_addresses),
            "numbers": list(entities.numbers),
            "searchKeywords": self.keywords_for(email, cleaned.cleaned_text),
        }
        document = EmailSearchDocument.model_validate(data, context=self._validation_context)
        return document.to_index_dict()

    def _build_chunk(self, base_id: str, email: EmailRecord, chunk: Chunk) -> dict[str, Any]:
        data = {
            "id": f"{base_id}-chunk-{chunk.chunk_number}",
            "documentType": DocumentType.EMAIL_CHUNK,
            "parentEmailId": base_id,
            "fileName": email.file_name,
            "subject": email.subject,
            "senderName": email.sender.name,
            "senderEmail": email.sender.email,
            "sentDate": _isoformat(email.sent_at),
            "chunkId": chunk.chunk_id,
            "chunkNumber": chunk.chunk_number,
            "totalChunks": chunk.total_chunks,
            "chunkContent": chunk.content,
            "allText": chunk.content,
            "startPosition": chunk.start_position,
            "endPosition": chunk.end_position,
            "chunkLength": chunk.length,
            "chunkWordCount": chunk.word_count,
            "isFirstChunk": chunk.is_first,
            "isLastChunk": chunk.is_last,
            "hasOverlapWithNext": chunk.overlap_with_next,
            "hasOverlapWithPrevious": chunk.overlap_with_previous,
            "searchKeywords": self.keywords_for(email, chunk.content),
        }
        document = ChunkSearchDocument.model_validate(data, context=self._validation_context)
        return document.to_index_dict()
