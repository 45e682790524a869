"""Unit tests for the fail-open stage base and StageResult."""

import dataclasses

import pytest
from prometheus_client import REGISTRY

from email_rag.cleaning.base import FailOpenStage, ensure_text
from email_rag.models.stage_result import StageResult


class ExplodingStage(FailOpenStage[str]):
    stage_name = "exploding"
    
    def _apply(self, text):
        raise ValueError("kaboom")
    
    def _fallback(self, text):
        return "fallback"


class UpperStage(FailOpenStage[str]):
    stage_name = "upper"
    
    def _apply(self, text):
        return StageResult.ok(self.stage_name, ensure_text(text).upper(), changed=True)
    
    def _fallback(self, text):
        return text


def _degradations(stage: str) -> float:
    value = REGISTRY.get_sample_value(
        "email_rag_stage_degradations_total", {"stage": stage}
    )
    return value or 0.0


class TestFailOpenStage:
    """Test run() wrapping of stage implementations."""
    
    def test_success_passes_result_through(self):
        result = UpperStage().run("abc")
        
        assert result == StageResult(stage="upper", value="ABC", details={"changed": True})
        assert not result.degraded
        assert result.diagnostic is None
    
    def test_failure_returns_fallback(self):
        """Exceptions never escape run()."""
        result = ExplodingStage().run("input")
        
        assert result.degraded
        assert result.stage == "exploding"
        assert result.value == "fallback"
        assert result.diagnostic == "ValueError: kaboom"
    
    def test_failure_is_counted(self):
        before = _degradations("exploding")
        
        ExplodingStage().run("input")
        
        assert _degradations("exploding") == before + 1


class TestStageResult:
    """Test StageResult constructors and immutability."""
    
    def test_ok(self):
        result = StageResult.ok("s", 1, rules_applied=["a"])
        
        assert not result.degraded
        assert result.details == {"rules_applied": ["a"]}
        assert str(result) == "StageResult(s, ok)"
    
    def test_fallback(self):
        result = StageResult.fallback("s", "", "TypeError: bad")
        
        assert result.degraded
        assert result.details == {}
        assert str(result) == "StageResult(s, degraded: TypeError: bad)"
    
    def test_frozen(self):
        result = StageResult.ok("s", 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = 2


class TestEnsureText:
    
    def test_none_is_empty(self):
        assert ensure_text(None) == ""
    
    def test_string_passthrough(self):
        assert ensure_text("x") == "x"
    
    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="expected str, got bytes"):
            ensure_text(b"bytes")
