"""
Stage results for fail-open pipeline stages.

A stage either succeeds (degraded=False) or falls back: the value is then the
stage's safe fallback (usually the unmodified input) and diagnostic carries
the reason. Callers that only want the value use `result.value`.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """
    Immutable outcome of one stage run.
    
    Attributes:
        stage: Stage name (html_sanitizer, signature_stripper, ...)
        value: Stage output, or the fallback value when degraded
        degraded: True if the stage failed internally and fell back
        diagnostic: Error description when degraded
        details: Stage-specific extras (e.g. rules that fired)
    """
    
    stage: str
    value: T
    degraded: bool = False
    diagnostic: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)
    
    @classmethod
    def ok(cls, stage: str, value: T, **details: Any) -> "StageResult[T]":
        return cls(stage=stage, value=value, details=details)
    
    @classmethod
    def fallback(cls, stage: str, value: T, diagnostic: str) -> "StageResult[T]":
        return cls(stage=stage, value=value, degraded=True, diagnostic=diagnostic)
    
    def __str__(self) -> str:
        if self.degraded:
            return f"StageResult({self.stage}, degraded: {self.diagnostic})"
        return f"StageResult({self.stage}, ok)"
