"""
Fail-open stage base class.

Cleaning and analysis stages are best-effort: a single malformed email must
not abort a batch. Subclasses implement `_apply()`; `run()` wraps it, logs and
counts any internal failure, and returns the stage fallback in a degraded
StageResult instead of raising.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import structlog

from ..models.stage_result import StageResult
from ..monitoring.metrics import stage_degradations_total

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class FailOpenStage(ABC, Generic[T]):
    """
    Base class for stages that never raise past their boundary.
    
    Attributes:
        stage_name: Label used in logs, metrics and StageResult.stage
    """
    
    stage_name: str = "stage"
    
    @abstractmethod
    def _apply(self, text: str) -> StageResult[T]:
        """Run the stage; may raise, run() takes care of the fallback."""
    
    @abstractmethod
    def _fallback(self, text: str) -> T:
        """Safe value returned when _apply() fails."""
    
    def run(self, text: str) -> StageResult[T]:
        """
        Run the stage, falling back instead of raising.
        
        Args:
            text: Stage input
            
        Returns:
            StageResult with the stage output, or the fallback value and a
            diagnostic when the stage failed internally
        """
        try:
            return self._apply(text)
        except Exception as e:
            return self._degraded(text, e)
    
    def _degraded(self, text: str, error: Exception) -> StageResult[T]:
        """Log and count a stage failure, then wrap the fallback value."""
        diagnostic = f"{type(error).__name__}: {error}"
        logger.warning(
            "Stage failed, returning fallback",
            stage=self.stage_name,
            error=diagnostic,
            input_length=len(text) if isinstance(text, str) else None,
        )
        stage_degradations_total.labels(stage=self.stage_name).inc()
        return StageResult.fallback(self.stage_name, self._fallback(text), diagnostic)


def ensure_text(value: Any) -> str:
    """Treat None as empty text; reject anything else that is not a string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value
