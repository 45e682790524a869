"""
Pipeline exceptions.

Only the fail-fast stages raise: the chunker on invalid configuration and the
search document builder when an email has nothing to index. Cleaning stages
never raise past their boundary (see cleaning.base.FailOpenStage).
"""

from typing import Any


class PipelineError(Exception):
    """
    Base exception for all pipeline errors.
    
    Caught per email by the batch orchestrator so one bad record never
    aborts a batch.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize pipeline error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging/metrics
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PipelineError):
    """
    Invalid pipeline configuration (caller bug, not dirty data).
    
    Raised for non-positive chunk size, overlap outside [0, chunk_size)
    or a negative boundary search window.
    """
    
    def __init__(self, message: str, parameter: str | None = None, value: Any | None = None):
        details = {}
        if parameter:
            details["parameter"] = parameter
        if value is not None:
            details["value"] = value
        
        super().__init__(message, details)


class MissingContentError(PipelineError):
    """
    Email carries nothing that could be indexed.
    
    Raised by the search document builder when subject, cleaned text and
    chunks are all empty.
    """
    
    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        details: dict[str, Any] = {}
        if file_name:
            details["file_name"] = file_name
        if missing_fields:
            details["missing_fields"] = missing_fields
        
        super().__init__(message, details)
