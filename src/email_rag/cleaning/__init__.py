"""
Fail-open text cleaning stages.

- base.py: FailOpenStage (run() returns a StageResult, never raises)
- html_sanitizer.py: Strip scripts/trackers from HTML, HTML to plain text
- signature_stripper.py: Ordered signature/footer/disclaimer rules
- normalizer.py: Whitespace normalization, RAG flattening
"""

from .base import FailOpenStage
from .html_sanitizer import HtmlSanitizer, SANITIZE_RULES
from .normalizer import ContentNormalizer
from .signature_stripper import SignatureStripper, SignatureRule, SIGNATURE_RULES

__all__ = [
    "FailOpenStage",
    "HtmlSanitizer",
    "SignatureStripper",
    "ContentNormalizer",
    # Rule tables
    "SANITIZE_RULES",
    "SignatureRule",
    "SIGNATURE_RULES",
]
