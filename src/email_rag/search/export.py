"""
JSON export of flattened search documents.

The indexing client (or an Azure AI Search indexer reading from blob
storage) consumes a JSON array of documents; this module writes it.
"""

import json
from pathlib import Path
from typing import Any, Iterable

import structlog

logger = structlog.get_logger(__name__)


def documents_to_json(documents: Iterable[dict[str, Any]], indent: int | None = 2) -> str:
    """Serialize documents to a JSON array (UTF-8 text, non-ASCII kept)."""
    return json.dumps(list(documents), ensure_ascii=False, indent=indent, default=str)


def write_documents(documents: Iterable[dict[str, Any]], path: str | Path) -> Path:
    """
    Write documents to a JSON file, creating parent directories.
    
    Args:
        documents: Flat search documents
        path: Output file path
        
    Returns:
        Resolved output path
    """
    documents = list(documents)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(documents_to_json(documents), encoding="utf-8")
    
    logger.info(
        "Wrote search documents",
        path=str(output_path),
        document_count=len(documents),
    )
    return output_path.resolve()


def read_documents(path: str | Path) -> list[dict[str, Any]]:
    """Load documents previously written by write_documents()."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)
