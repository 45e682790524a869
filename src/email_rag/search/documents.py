"""
Search index document models.

Typed parent (Email) and child (EmailChunk) documents. Before validation every
document goes through the field guard: scalar fields are coerced to their
declared type and oversized strings are truncated with a `<field>_Truncated`
companion flag (kept as an extra field). `to_index_dict()` returns the flat
camelCase map the indexing client uploads.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel

from email_rag.models.enums import DocumentType
from email_rag.search.field_guard import (
    MAX_FIELD_LENGTH,
    TRUNCATED_FIELD_LENGTH,
    guard_fields,
)


class SearchDocument(BaseModel):
    """
    Fields shared by parent and chunk documents.

    Validation context keys (optional):
        max_field_length: Longest string accepted unchanged
        truncated_field_length: Characters kept when truncating
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    id: str = Field(..., min_length=1)
    document_type: DocumentType
    file_name: str = ""
    subject: str = ""
    sender_name: str = ""
    sender_email: str = ""
    sent_date: Optional[str] = None
    all_text: str = ""
    search_keywords: list[str] = Field(default_factory=list)

    @classmethod
    def scalar_field_types(cls) -> dict[str, type]:
        """Map both alias and attribute name of int/float/bool fields to their type."""
        types: dict[str, type] = {}
        for name, field in cls.model_fields.items():
            if field.annotation in (int, float, bool):
                types[name] = field.annotation
                types[field.alias or to_camel(name)] = field.annotation
        return types

    @model_validator(mode="before")
    @classmethod
    def _guard(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        context = info.context or {}
        return guard_fields(
            data,
            declared_types=cls.scalar_field_types(),
            max_length=context.get("max_field_length", MAX_FIELD_LENGTH),
            truncated_length=context.get("truncated_field_length", TRUNCATED_FIELD_LENGTH),
        )

    def to_index_dict(self) -> dict[str, Any]:
        """Flat camelCase map, enums as plain strings, truncation flags included."""
        return self.model_dump(by_alias=True, mode="json")


class EmailSearchDocument(SearchDocument):
    """Parent document: one per email, carries the full cleaned text."""

    # Recipients
    recipients_to: str = ""
    recipients_cc: str = ""
    recipients_bcc: str = ""
    recipient_count: int = 0

    # Message metadata
    received_date: Optional[str] = None
    size: int = 0
    importance: str = "normal"
    has_attachments: bool = False
    attachment_count: int = 0
    attachment_names: list[str] = Field(default_factory=list)

    # Content statistics
    content_length: int = 0
    word_count: int = 0
    quality_score: float = 0.0
    readability_score: float = 0.0
    has_meaningful_content: bool = False
    reduction_ratio: float = 0.0
    chunk_count: int = 0

    # Entities
    entity_count: int = 0
    email_addresses: list[str] = Field(default_factory=list)
    urls: list[str] = Field(default_factory=list)
    url_domains: list[str] = Field(default_factory=list)
    phone_numbers: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    ip_addresses: list[str] = Field(default_factory=list)
    numbers: list[str] = Field(default_factory=list)


class ChunkSearchDocument(SearchDocument):
    """Child document: one per non-empty chunk, points back to its parent."""

    parent_email_id: str = Field(..., min_length=1)
    chunk_id: str = ""
    chunk_number: int = 0
    total_chunks: int = 0
    chunk_content: str = ""
    start_position: int = 0
    end_position: int = 0
    chunk_length: int = 0
    chunk_word_count: int = 0
    is_first_chunk: bool = False
    is_last_chunk: bool = False
    has_overlap_with_next: bool = False
    has_overlap_with_previous: bool = False
