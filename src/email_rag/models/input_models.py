"""
Input data models for the email RAG pipeline.

These models represent the email record handed over by the external MSG
reader. Field aliases are camelCase so JSON exported by the reader can be
validated directly; snake_case names are accepted as well.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from email_rag.models.enums import Importance


class _RecordModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Contact(_RecordModel):
    """Display name and address of a sender or recipient."""
    
    name: str = ""
    email: str = ""
    
    @property
    def display(self) -> str:
        """'Name <email>' when both are known, otherwise whichever is set."""
        if self.name and self.email and self.name != self.email:
            return f"{self.name} <{self.email}>"
        return self.name or self.email


class Recipients(_RecordModel):
    """To/Cc/Bcc recipient lists."""
    
    to: list[Contact] = Field(default_factory=list)
    cc: list[Contact] = Field(default_factory=list)
    bcc: list[Contact] = Field(default_factory=list)
    
    @property
    def count(self) -> int:
        return len(self.to) + len(self.cc) + len(self.bcc)


class Attachment(_RecordModel):
    """Attachment metadata (content is not read by the pipeline)."""
    
    file_name: str = Field(..., description="Attachment file name")
    size: int = Field(default=0, ge=0, description="Attachment size in bytes")


class EmailRecord(_RecordModel):
    """
    Email read out of an MSG file.
    
    Immutable once built by the MSG reader. body is the plain-text body;
    html_body is optional and only used when body is blank or itself HTML.
    """
    
    # Content
    subject: str = Field(default="", description="Subject line")
    body: str = Field(default="", description="Plain-text body")
    html_body: str = Field(default="", description="HTML body if available")
    
    # Addressing
    sender: Contact = Field(default_factory=Contact)
    recipients: Recipients = Field(default_factory=Recipients)
    
    # Message metadata
    sent_at: Optional[datetime] = Field(default=None, description="Sent timestamp")
    received_at: Optional[datetime] = Field(default=None, description="Received timestamp")
    size: int = Field(default=0, ge=0, description="Message size in bytes")
    importance: Importance = Field(default=Importance.NORMAL)
    attachments: list[Attachment] = Field(default_factory=list)
    
    # Source identifier, seeds chunk ids
    file_name: str = Field(default="", description="Source MSG file name")
    
    @field_validator("importance", mode="before")
    @classmethod
    def _importance_from_outlook(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return Importance.from_outlook(value)
        if isinstance(value, str):
            return value.strip().lower()
        return value
    
    @field_validator("subject", "body", "html_body", "file_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value
