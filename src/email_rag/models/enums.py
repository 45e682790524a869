"""
Enumerations for email RAG data models.
"""

from enum import Enum


class Importance(str, Enum):
    """
    Outlook message importance.
    
    MSG readers report importance as 0/1/2 (olImportanceLow/Normal/High);
    EmailRecord maps those integers onto this enum.
    """
    
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    
    @classmethod
    def from_outlook(cls, value: int) -> "Importance":
        """Map Outlook integer importance (0=low, 1=normal, 2=high)."""
        order = [cls.LOW, cls.NORMAL, cls.HIGH]
        if 0 <= value < len(order):
            return order[value]
        return cls.NORMAL


class DocumentType(str, Enum):
    """Search document kinds: one parent per email, one child per chunk."""
    
    EMAIL = "Email"
    EMAIL_CHUNK = "EmailChunk"
