"""
Search index document flattening.

- document_builder.py: Parent + chunk documents with deterministic ids
- documents.py: Typed document models (dumped to flat camelCase dicts)
- keywords.py: Search keyword extraction
- field_guard.py: Field-length truncation and type coercion
- stopwords.py: English stop word list
- export.py: JSON array export
"""

from .document_builder import SearchDocumentBuilder, generate_base_id
from .documents import ChunkSearchDocument, EmailSearchDocument, SearchDocument
from .export import documents_to_json, read_documents, write_documents
from .keywords import top_keywords
from .stopwords import STOP_WORDS

__all__ = [
    "SearchDocumentBuilder",
    "generate_base_id",
    "top_keywords",
    "STOP_WORDS",
    # Models
    "SearchDocument",
    "EmailSearchDocument",
    "ChunkSearchDocument",
    # Export
    "documents_to_json",
    "write_documents",
    "read_documents",
]
