"""
Overlapping, word-boundary-aware text chunking for RAG indexing.

The cursor walks the text in chunk_size steps. Each candidate end is snapped
to the nearest whitespace within the boundary window (ties go forward), the
span is trimmed and emitted if non-empty, and the cursor moves back by
`overlap` characters for the next chunk. The cursor always advances by at
least one character and the walk ends once the cursor passes the last
character, so it terminates for every overlap value. Near the end of the
text this emits short tail chunks that sit inside the previous span.
"""

import structlog

from ..exceptions import ConfigurationError
from ..models.output_models import Chunk
from ..monitoring.metrics import chunks_emitted_total

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 512
DEFAULT_OVERLAP = 50
DEFAULT_BOUNDARY_WINDOW = 50


def validate_chunk_config(chunk_size: int, overlap: int) -> None:
    """
    Check chunking parameters.
    
    Raises:
        ConfigurationError: chunk_size <= 0 or overlap outside [0, chunk_size)
    """
    if not isinstance(chunk_size, int) or isinstance(chunk_size, bool) or chunk_size <= 0:
        raise ConfigurationError(
            f"chunk_size must be a positive integer, got {chunk_size!r}",
            parameter="chunk_size",
            value=chunk_size,
        )
    if not isinstance(overlap, int) or isinstance(overlap, bool) or not 0 <= overlap < chunk_size:
        raise ConfigurationError(
            f"overlap must be in [0, {chunk_size}), got {overlap!r}",
            parameter="overlap",
            value=overlap,
        )


class Chunker:
    """
    Split cleaned text into ordered, overlapping chunks.
    
    Fail-fast on invalid configuration; empty or whitespace-only text yields
    an empty list.
    """
    
    def __init__(self, boundary_window: int = DEFAULT_BOUNDARY_WINDOW):
        """
        Initialize chunker.
        
        Args:
            boundary_window: Max distance (chars) from the candidate end to a
                whitespace boundary, in either direction
        """
        if boundary_window < 0:
            raise ConfigurationError(
                f"boundary_window must be >= 0, got {boundary_window}",
                parameter="boundary_window",
                value=boundary_window,
            )
        self.boundary_window = boundary_window
    
    def chunk(
        self,
        text: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_OVERLAP,
        source_id: str = "",
    ) -> list[Chunk]:
        """
        Split text into chunks.
        
        Args:
            text: Cleaned text
            chunk_size: Target chunk length in characters
            overlap: Characters shared between consecutive chunks
            source_id: Seeds chunk ids ("<source_id>_chunk_<n>")
            
        Returns:
            Chunks in increasing chunk_number order
            
        Raises:
            ConfigurationError: Invalid chunk_size or overlap
        """
        validate_chunk_config(chunk_size, overlap)
        
        if not text or not text.strip():
            return []
        
        text_length = len(text)
        spans: list[tuple[int, int, str]] = []
        
        if text_length <= chunk_size:
            spans.append((0, text_length - 1, text.strip()))
        else:
            position = 0
            while position < text_length:
                end = min(position + chunk_size - 1, text_length - 1)
                if end < text_length - 1:
                    end = self._snap_to_boundary(text, position, end)
                
                content = text[position:end + 1].strip()
                if content:
                    spans.append((position, end, content))
                position = max(end + 1 - overlap, position + 1)
        
        total_chunks = len(spans)
        chunks = [
            Chunk(
                chunk_number=number,
                content=content,
                start_position=start,
                end_position=end,
                length=len(content),
                word_count=len(content.split()),
                is_first=number == 1,
                is_last=number == total_chunks,
                total_chunks=total_chunks,
                overlap_with_next=(end + 1) < text_length,
                overlap_with_previous=start > 0,
                chunk_id=f"{source_id}_chunk_{number}",
            )
            for number, (start, end, content) in enumerate(spans, start=1)
        ]
        
        chunks_emitted_total.inc(total_chunks)
        logger.debug(
            "Chunked text",
            source_id=source_id,
            text_length=text_length,
            chunk_size=chunk_size,
            overlap=overlap,
            total_chunks=total_chunks,
        )
        return chunks
    
    def _snap_to_boundary(self, text: str, position: int, end: int) -> int:
        """
        Move a candidate end onto the nearest whitespace.
        
        Looks forward up to boundary_window chars (from end itself) and
        backward down to boundary_window chars (never onto the chunk start).
        The closer side wins, ties go forward; with no whitespace on either
        side the candidate end is kept.
        """
        next_space = self._find_forward(text, end)
        prev_space = self._find_backward(text, position, end)
        
        if next_space is None and prev_space is None:
            return end
        if next_space is None:
            return prev_space  # type: ignore[return-value]
        if prev_space is None:
            return next_space
        if next_space - end <= end - prev_space:
            return next_space
        return prev_space
    
    def _find_forward(self, text: str, end: int) -> int | None:
        limit = min(len(text) - 1, end + self.boundary_window)
        for index in range(end, limit + 1):
            if text[index].isspace():
                return index
        return None
    
    def _find_backward(self, text: str, position: int, end: int) -> int | None:
        floor = max(position + 1, end - self.boundary_window)
        for index in range(end, floor - 1, -1):
            if text[index].isspace():
                return index
        return None
