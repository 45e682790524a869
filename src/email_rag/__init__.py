"""
Email RAG content pipeline.

Turns email records read out of Outlook MSG files into search documents for
Azure AI Search / vector databases:
- HTML sanitizing, signature stripping and text normalization
- Entity extraction and content quality scoring
- Overlapping, word-boundary-aware chunking
- Flattened parent + chunk search documents

Architecture: ordered fail-open cleaning stages + fail-fast chunking/flattening
"""

__version__ = "0.1.0"
