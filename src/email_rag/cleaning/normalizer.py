"""
Whitespace normalization for cleaned email text.
"""

import re

from ..models.stage_result import StageResult
from .base import FailOpenStage, ensure_text

_LINE_ENDINGS = re.compile(r"\r\n|\r|\u2028|\u2029|\x85")
_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_NEWLINE_RUN = re.compile(r"\n{3,}")
_ANY_WHITESPACE = re.compile(r"\s+")

_TERMINAL_PUNCTUATION = (".", "!", "?")


class ContentNormalizer(FailOpenStage[str]):
    """
    Collapse whitespace while keeping paragraph breaks.

    normalize() is idempotent: lines are trimmed before newline runs are
    collapsed, so whitespace-only lines cannot form a new run on a second pass.
    """

    stage_name = "content_normalizer"

    def _apply(self, text: str) -> StageResult[str]:
        text = ensure_text(text)
        text = _LINE_ENDINGS.sub("\n", text)
        text = _HORIZONTAL_WHITESPACE.sub(" ", text)
        text = "\n".join(line.strip() for line in text.split("\n"))
        text = _NEWLINE_RUN.sub("\n\n", text)
        return StageResult.ok(self.stage_name, text.strip())

    def _fallback(self, text: str) -> str:
        return text

    def normalize(self, text: str) -> str:
        """
        Normalize line endings and whitespace.

        Examples:
            >>> ContentNormalizer().normalize("a  b\\r\\n\\r\\n\\r\\n\\r\\nc ")
            'a b\\n\\nc'
        """
        return self.run(text).value

    def optimize_for_rag(self, text: str) -> str:
        """
        Flatten text to a single line for embedding.

        Collapses every whitespace run (newlines included) to one space and
        makes sure non-empty text ends with terminal punctuation.

        Examples:
            >>> ContentNormalizer().optimize_for_rag("Hello\\n\\nworld")
            'Hello world.'
        """
        text = _ANY_WHITESPACE.sub(" ", ensure_text(text)).strip()
        if text and not text.endswith(_TERMINAL_PUNCTUATION):
            text += "."
        return text
