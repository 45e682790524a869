"""
Content quality scoring.

Scores cleaned text 0-100 from its length, word count, paragraph structure
and a sentence-length readability heuristic. Text that does not look like
prose (too few words or sentences, no letters) scores 0.
"""

import re

import structlog

from ..cleaning.base import FailOpenStage, ensure_text
from ..models.output_models import QualityMetrics
from ..models.stage_result import StageResult

logger = structlog.get_logger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_WORD_RUN = re.compile(r"\w{3,}")
_LETTER = re.compile(r"[^\W\d_]")

# Weights of the overall score components
LENGTH_WEIGHT = 0.3
WORD_WEIGHT = 0.4
STRUCTURE_WEIGHT = 0.2
READABILITY_WEIGHT = 0.1


def _count_segments(pattern: re.Pattern, text: str) -> int:
    return sum(1 for segment in pattern.split(text) if segment.strip())


class QualityScorer(FailOpenStage[QualityMetrics]):
    """
    Compute QualityMetrics for cleaned text.
    
    Fail-open: on internal failure returns zeroed metrics.
    """
    
    stage_name = "quality_scorer"
    
    def _apply(self, text: str) -> StageResult[QualityMetrics]:
        text = ensure_text(text)
        if not text.strip():
            return StageResult.ok(self.stage_name, QualityMetrics.empty())
        
        length = len(text)
        word_count = len(text.split())
        sentence_count = _count_segments(_SENTENCE_SPLIT, text)
        paragraph_count = _count_segments(_PARAGRAPH_SPLIT, text)
        
        avg_words_per_sentence = word_count / sentence_count if sentence_count else 0.0
        readability_score = max(0.0, min(100.0, 100 - avg_words_per_sentence * 2))
        
        has_meaningful_content = (
            word_count > 10
            and sentence_count > 1
            and _WORD_RUN.search(text) is not None
            and _LETTER.search(text) is not None
        )
        
        overall_score = 0.0
        if has_meaningful_content:
            length_score = min(100.0, length / 10)
            word_score = min(100.0, word_count * 2)
            structure_score = min(100.0, paragraph_count * 20)
            overall_score = round(
                min(
                    100.0,
                    length_score * LENGTH_WEIGHT
                    + word_score * WORD_WEIGHT
                    + structure_score * STRUCTURE_WEIGHT
                    + readability_score * READABILITY_WEIGHT,
                ),
                1,
            )
        
        metrics = QualityMetrics(
            overall_score=overall_score,
            length=length,
            word_count=word_count,
            sentence_count=sentence_count,
            paragraph_count=paragraph_count,
            avg_words_per_sentence=round(avg_words_per_sentence, 2),
            readability_score=readability_score,
            has_meaningful_content=has_meaningful_content,
        )
        logger.debug(
            "Scored content",
            overall_score=overall_score,
            word_count=word_count,
            meaningful=has_meaningful_content,
        )
        return StageResult.ok(self.stage_name, metrics)
    
    def _fallback(self, text: str) -> QualityMetrics:
        return QualityMetrics.empty()
    
    def score(self, text: str) -> QualityMetrics:
        """Score text quality (0-100); empty text gets zeroed metrics."""
        return self.run(text).value
