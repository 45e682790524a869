"""
RAG chunking (fail-fast on invalid configuration).

- chunker.py: Overlapping, word-boundary-aware chunker
"""

from .chunker import (
    Chunker,
    DEFAULT_BOUNDARY_WINDOW,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_OVERLAP,
    validate_chunk_config,
)

__all__ = [
    "Chunker",
    "validate_chunk_config",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_OVERLAP",
    "DEFAULT_BOUNDARY_WINDOW",
]
