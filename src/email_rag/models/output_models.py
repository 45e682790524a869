"""
Derived data models produced by the pipeline stages.

QualityMetrics and EntityBundle come out of the analysis stages, Chunk out of
the chunker, and CleanedContent bundles them for the search document builder.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class QualityMetrics(BaseModel):
    """
    Content quality score and the counts it was derived from.
    
    overall_score is 0 whenever has_meaningful_content is False.
    """
    
    model_config = ConfigDict(frozen=True)
    
    overall_score: float = Field(default=0.0, ge=0.0, le=100.0)
    length: int = Field(default=0, ge=0)
    word_count: int = Field(default=0, ge=0)
    sentence_count: int = Field(default=0, ge=0)
    paragraph_count: int = Field(default=0, ge=0)
    avg_words_per_sentence: float = Field(default=0.0, ge=0.0)
    readability_score: float = Field(default=0.0, ge=0.0, le=100.0)
    has_meaningful_content: bool = False
    
    @classmethod
    def empty(cls) -> "QualityMetrics":
        """Zeroed metrics for empty or unscorable text."""
        return cls()


class UrlEntity(BaseModel):
    """URL found in the text, with its parsed domain."""
    
    model_config = ConfigDict(frozen=True)
    
    url: str
    domain: str = ""
    is_secure: bool = False


class EntityBundle(BaseModel):
    """
    Structured tokens recognized in cleaned text.
    
    Every category is deduplicated and sorted lexicographically; error is
    set only when extraction failed and the bundle is the empty fallback.
    """
    
    model_config = ConfigDict(frozen=True)
    
    emails: list[str] = Field(default_factory=list)
    urls: list[UrlEntity] = Field(default_factory=list)
    phone_numbers: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    ip_addresses: list[str] = Field(default_factory=list)
    numbers: list[str] = Field(default_factory=list)
    error: Optional[str] = None
    
    @computed_field  # type: ignore[prop-decorator]
    @property
    def entity_count(self) -> int:
        return (
            len(self.emails)
            + len(self.urls)
            + len(self.phone_numbers)
            + len(self.dates)
            + len(self.ip_addresses)
            + len(self.numbers)
        )
    
    @property
    def domains(self) -> list[str]:
        """Unique URL domains, sorted."""
        return sorted({u.domain for u in self.urls if u.domain})


class Chunk(BaseModel):
    """
    Bounded, overlapping slice of cleaned text.
    
    start_position/end_position are inclusive offsets of the raw span in the
    source text; content is that span trimmed.
    """
    
    model_config = ConfigDict(frozen=True)
    
    chunk_number: int = Field(..., ge=1, description="1-based, counts emitted chunks only")
    content: str
    start_position: int = Field(..., ge=0)
    end_position: int = Field(..., ge=0)
    length: int = Field(..., ge=0, description="Length of trimmed content")
    word_count: int = Field(..., ge=0)
    is_first: bool = False
    is_last: bool = False
    total_chunks: int = Field(default=0, ge=0)
    overlap_with_next: bool = False
    overlap_with_previous: bool = False
    chunk_id: str


class CleanedContent(BaseModel):
    """Output of the cleaning and analysis stages for one email."""
    
    model_config = ConfigDict(frozen=True)
    
    original_text: str = ""
    cleaned_text: str = ""
    quality_score: QualityMetrics = Field(default_factory=QualityMetrics.empty)
    entities: EntityBundle = Field(default_factory=EntityBundle)
    reduction_ratio: float = 0.0
    
    @staticmethod
    def compute_reduction_ratio(original_text: str, cleaned_text: str) -> float:
        """Percentage of characters removed by cleaning, 0 for empty input."""
        if not original_text:
            return 0.0
        return round((1 - len(cleaned_text) / len(original_text)) * 100, 2)
