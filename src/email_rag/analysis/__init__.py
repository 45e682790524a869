"""
Analysis stages run on normalized text (fail-open, like the cleaning stages).

- entity_extractor.py: Emails, URLs, phones, dates, IPv4, numbers
- quality_scorer.py: 0-100 content quality score
"""

from .entity_extractor import EntityExtractor, parse_url
from .quality_scorer import QualityScorer

__all__ = [
    "EntityExtractor",
    "QualityScorer",
    "parse_url",
]
