"""
Email content pipeline: per-email orchestrator and batch runner.

Runs the stages in fixed order:
- HTML to text (only when the body source is HTML) (fail-open)
- Signature stripping (toggle: REMOVE_SIGNATURES) (fail-open)
- Normalization (fail-open)
- Entity extraction (toggle: EXTRACT_ENTITIES) + quality scoring (fail-open)
- Chunking (fail-fast on configuration)
- Search document building (fail-fast on missing content)

Fail-open stages that fell back are reported as warnings on the result.
The batch runner isolates failures per email.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from .analysis import EntityExtractor, QualityScorer
from .chunking import Chunker, validate_chunk_config
from .cleaning import ContentNormalizer, HtmlSanitizer, SignatureStripper
from .config import Settings
from .exceptions import PipelineError
from .models.input_models import EmailRecord
from .models.output_models import Chunk, CleanedContent, EntityBundle
from .models.stage_result import StageResult
from .monitoring.metrics import content_quality_score, emails_processed_total
from .search import SearchDocumentBuilder

logger = logging.getLogger(__name__)

# A plain-text body that is really HTML (some MSG writers put markup there)
_HTML_HINT = re.compile(r"<(?:!doctype|html|head|body|div|p|br|table|span|font)\b", re.IGNORECASE)

DEFAULT_SOURCE_ID = "email"


@dataclass
class PipelineResult:
    """
    Everything produced for one email.

    documents[0] is the parent document, followed by one document per chunk.
    """
    email: EmailRecord
    cleaned: CleanedContent
    chunks: list[Chunk]
    documents: list[dict[str, Any]]
    warnings: list[str] = field(default_factory=list)
    meets_quality_threshold: bool = True

    @property
    def document_id(self) -> Optional[str]:
        return self.documents[0]["id"] if self.documents else None


@dataclass
class BatchFailure:
    """One email that could not be processed."""
    file_name: str
    error_type: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class BatchReport:
    """Per-email outcomes of a batch run."""
    results: list[PipelineResult] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    @property
    def documents(self) -> list[dict[str, Any]]:
        """All documents of all successful emails, in input order."""
        return [doc for result in self.results for doc in result.documents]


class EmailContentPipeline:
    """
    Clean, analyze, chunk and flatten email records.

    Stateless apart from configuration: one instance can process any number
    of emails, from several threads at once.
    """

    def __init__(self, settings: Settings):
        """
        Initialize pipeline.

        Args:
            settings: Application settings with chunking and toggle config

        Raises:
            ConfigurationError: Invalid chunk size, overlap or boundary window
        """
        self.settings = settings
        validate_chunk_config(settings.CHUNK_SIZE, settings.CHUNK_OVERLAP)

        self.html_sanitizer = HtmlSanitizer()
        self.signature_stripper = SignatureStripper()
        self.normalizer = ContentNormalizer()
        self.entity_extractor = EntityExtractor()
        self.quality_scorer = QualityScorer()
        self.chunker = Chunker(boundary_window=settings.BOUNDARY_SEARCH_WINDOW)
        self.document_builder = SearchDocumentBuilder.from_settings(settings)

        logger.info(
            f"EmailContentPipeline initialized (chunk_size: {settings.CHUNK_SIZE}, "
            f"overlap: {settings.CHUNK_OVERLAP}, signatures: {settings.REMOVE_SIGNATURES}, "
            f"entities: {settings.EXTRACT_ENTITIES}, rag: {settings.OPTIMIZE_FOR_RAG})"
        )

    @staticmethod
    def select_body(email: EmailRecord) -> tuple[str, bool]:
        """
        Pick the body to clean.

        Returns:
            Tuple of (source text, whether it is HTML). The plain body wins
            unless it is blank; a plain body containing markup counts as HTML.
        """
        if email.body.strip():
            return email.body, bool(_HTML_HINT.search(email.body))
        if email.html_body.strip():
            return email.html_body, True
        return "", False

    def clean(self, email: EmailRecord) -> tuple[CleanedContent, list[str]]:
        """
        Run the cleaning and analysis stages.

        Args:
            email: Source email record

        Returns:
            Tuple of (CleanedContent, warnings from degraded stages)
        """
        original_text, is_html = self.select_body(email)
        stage_results: list[StageResult] = []
        text = original_text

        if is_html:
            result = self.html_sanitizer.run_plain_text(text)
            stage_results.append(result)
            text = result.value

        if self.settings.REMOVE_SIGNATURES:
            result = self.signature_stripper.run(text)
            stage_results.append(result)
            text = result.value

        normalized = self.normalizer.run(text)
        stage_results.append(normalized)

        if self.settings.EXTRACT_ENTITIES:
            entities_result = self.entity_extractor.run(normalized.value)
            stage_results.append(entities_result)
            entities = entities_result.value
        else:
            entities = EntityBundle()

        quality_result = self.quality_scorer.run(normalized.value)
        stage_results.append(quality_result)

        cleaned_text = normalized.value
        if self.settings.OPTIMIZE_FOR_RAG:
            cleaned_text = self.normalizer.optimize_for_rag(cleaned_text)

        warnings = [
            f"Stage {result.stage} degraded: {result.diagnostic}"
            for result in stage_results
            if result.degraded
        ]

        cleaned = CleanedContent(
            original_text=original_text,
            cleaned_text=cleaned_text,
            quality_score=quality_result.value,
            entities=entities,
            reduction_ratio=CleanedContent.compute_reduction_ratio(original_text, cleaned_text),
        )
        return cleaned, warnings

    def process(self, email: EmailRecord) -> PipelineResult:
        """
        Run the full pipeline on one email.

        Args:
            email: Source email record

        Returns:
            PipelineResult with cleaned content, chunks and search documents

        Raises:
            MissingContentError: Email has nothing to index
        """
        cleaned, warnings = self.clean(email)
        quality = cleaned.quality_score
        content_quality_score.observe(quality.overall_score)

        meets_threshold = quality.overall_score >= self.settings.QUALITY_THRESHOLD
        if not meets_threshold:
            warnings.append(
                f"Quality score {quality.overall_score} below threshold "
                f"{self.settings.QUALITY_THRESHOLD}"
            )

        if not meets_threshold and self.settings.SKIP_LOW_QUALITY:
            chunks: list[Chunk] = []
        else:
            chunks = self.chunker.chunk(
                cleaned.cleaned_text,
                chunk_size=self.settings.CHUNK_SIZE,
                overlap=self.settings.CHUNK_OVERLAP,
                source_id=email.file_name or DEFAULT_SOURCE_ID,
            )

        documents = self.document_builder.build_documents(email, cleaned, chunks)

        if warnings:
            logger.warning(
                f"Processed '{email.file_name}' with {len(warnings)} warning(s): "
                f"{warnings[:3]}{'...' if len(warnings) > 3 else ''}"
            )
        else:
            logger.debug(
                f"Processed '{email.file_name}': {len(chunks)} chunk(s), "
                f"{len(documents)} document(s), quality {quality.overall_score}"
            )

        return PipelineResult(
            email=email,
            cleaned=cleaned,
            chunks=chunks,
            documents=documents,
            warnings=warnings,
            meets_quality_threshold=meets_threshold,
        )

    def process_batch(
        self,
        emails: Iterable[EmailRecord],
        max_workers: Optional[int] = None,
    ) -> BatchReport:
        """
        Process independent emails, isolating failures per email.

        Args:
            emails: Email records
            max_workers: Thread pool size; defaults to settings.BATCH_MAX_WORKERS,
                1 processes sequentially

        Returns:
            BatchReport with results in input order and per-email failures
        """
        emails = list(emails)
        workers = max_workers or self.settings.BATCH_MAX_WORKERS

        if workers > 1 and len(emails) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(self._process_isolated, emails))
        else:
            outcomes = [self._process_isolated(email) for email in emails]

        report = BatchReport()
        for outcome in outcomes:
            if isinstance(outcome, BatchFailure):
                report.failures.append(outcome)
            else:
                report.results.append(outcome)

        logger.info(
            f"Batch complete: {report.succeeded} succeeded, {report.failed} failed, "
            f"{len(report.documents)} document(s)"
        )
        return report

    def _process_isolated(self, email: EmailRecord) -> Union[PipelineResult, BatchFailure]:
        try:
            result = self.process(email)
        except PipelineError as e:
            logger.warning(f"Skipping '{email.file_name}': {e}")
            emails_processed_total.labels(status="failed").inc()
            return BatchFailure(
                file_name=email.file_name,
                error_type=type(e).__name__,
                message=e.message,
                details=e.details,
            )
        except Exception as e:
            logger.exception(f"Unexpected error processing '{email.file_name}': {e}")
            emails_processed_total.labels(status="failed").inc()
            return BatchFailure(
                file_name=email.file_name,
                error_type=type(e).__name__,
                message=str(e),
            )

        status = "succeeded" if result.meets_quality_threshold else "low_quality"
        emails_processed_total.labels(status=status).inc()
        return result
