"""Prometheus metrics for the email RAG pipeline.

Counters are process-wide and thread-safe; a batch runner or indexing service
embedding the pipeline can expose them with prometheus_client's HTTP server.
Alert rules worth configuring:
- stage_degradations_total (cleaning stages falling back on malformed input)
- emails_processed_total{status="failed"} (emails dropped from a batch)
"""

from prometheus_client import Counter, Histogram

# === Pipeline Metrics ===

emails_processed_total = Counter(
    "email_rag_emails_processed_total",
    "Emails processed by outcome",
    ["status"],
)
"""
Emails processed counter.

Labels:
- status: succeeded, failed, low_quality
"""

stage_degradations_total = Counter(
    "email_rag_stage_degradations_total",
    "Fail-open stage runs that returned their fallback value",
    ["stage"],
)
"""
Stage degradation counter.

Labels:
- stage: html_sanitizer, signature_stripper, content_normalizer,
  entity_extractor, quality_scorer
"""

# === Output Metrics ===

chunks_emitted_total = Counter(
    "email_rag_chunks_emitted_total",
    "Chunks produced by the chunker",
)

search_documents_total = Counter(
    "email_rag_search_documents_total",
    "Search documents built by type",
    ["document_type"],
)

content_quality_score = Histogram(
    "email_rag_content_quality_score",
    "Overall content quality score of processed emails",
    buckets=[0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)
"""
Quality score distribution.

A growing share of emails in the 0 bucket usually means the HTML sanitizer or
signature stripper is removing real content.
"""
