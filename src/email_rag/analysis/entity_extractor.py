"""
Regex entity extraction from cleaned email text.

Every category is deduplicated and returned in lexicographic order rather
than match order, so the same text always yields the same bundle.
"""

import dataclasses
import re
from urllib.parse import urlparse

import structlog

from ..cleaning.base import FailOpenStage, ensure_text
from ..models.output_models import EntityBundle, UrlEntity
from ..models.stage_result import StageResult

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

URL_PATTERN = re.compile(r"""https?://[^\s<>"'{}]+""", re.IGNORECASE)

PHONE_PATTERN = re.compile(
    r"\+\d{1,3}[\s.-]?\(?\d{1,4}\)?(?:[\s.-]?\d{2,4}){2,4}"  # +44 20 7946 0958
    r"|\(\d{3}\)\s?\d{3}[-.\s]?\d{4}"  # (555) 123-4567
    r"|\b\d{3}[-.]?\d{3}[-.]?\d{4}\b"  # 555-123-4567, 555.123.4567, 5551234567
    r"|\b\d{3} \d{3} \d{4}\b"  # 555 123 4567
)

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

DATE_PATTERN = re.compile(
    r"\b\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})\b"  # 1/15/2024, 01/15/24
    r"|\b\d{4}-\d{1,2}-\d{1,2}\b"  # 2024-01-15
    rf"|\b{_MONTH}\.?\s+\d{{1,2}},\s*\d{{4}}\b"  # January 15, 2024
    rf"|\b\d{{1,2}}\s+{_MONTH}\.?\s+\d{{4}}\b",  # 15 January 2024
    re.IGNORECASE,
)

IPV4_CANDIDATE_PATTERN = re.compile(r"\b\d{1,3}(?:\.\d{1,3}){3}\b")

NUMBER_PATTERN = re.compile(
    r"\$\d{1,3}(?:,\d{3})+(?:\.\d{2})?"  # $1,234.56
    r"|\$\d+(?:\.\d{2})?"  # $99.99
    r"|\b\d+(?:\.\d+)?%"  # 12.5%
    r"|\b\d{1,3}(?:,\d{3})+(?:\.\d+)?\b"  # 1,234,567
    r"|\b\d+\.\d+\b"  # 3.14
)


def _unique_sorted(values) -> list[str]:
    return sorted(set(values))


def _is_valid_ipv4(candidate: str) -> bool:
    return all(0 <= int(octet) <= 255 for octet in candidate.split("."))


def parse_url(url: str) -> UrlEntity:
    """
    Split a URL into the fields indexed for it.

    Args:
        url: Absolute http(s) URL

    Returns:
        UrlEntity with lowercase domain (empty if unparseable) and HTTPS flag
    """
    try:
        parsed = urlparse(url)
        domain = (parsed.hostname or "").lower()
        scheme = parsed.scheme.lower()
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        domain = ""
        scheme = url.split(":", 1)[0].lower()
    return UrlEntity(url=url, domain=domain, is_secure=scheme == "https")


class EntityExtractor(FailOpenStage[EntityBundle]):
    """
    Find emails, URLs, phone numbers, dates, IPv4 addresses and numbers.

    Fail-open: on internal failure returns an empty bundle whose error field
    carries the diagnostic.
    """

    stage_name = "entity_extractor"

    def _apply(self, text: str) -> StageResult[EntityBundle]:
        text = ensure_text(text)
        if not text.strip():
            return StageResult.ok(self.stage_name, EntityBundle())

        urls = _unique_sorted(m.group(0) for m in URL_PATTERN.finditer(text))
        bundle = EntityBundle(
            emails=_unique_sorted(m.group(0).lower() for m in EMAIL_PATTERN.finditer(text)),
            urls=[parse_url(url) for url in urls],
            phone_numbers=_unique_sorted(m.group(0).strip() for m in PHONE_PATTERN.finditer(text)),
            dates=_unique_sorted(m.group(0) for m in DATE_PATTERN.finditer(text)),
            ip_addresses=_unique_sorted(
                m.group(0)
                for m in IPV4_CANDIDATE_PATTERN.finditer(text)
                if _is_valid_ipv4(m.group(0))
            ),
            numbers=_unique_sorted(m.group(0) for m in NUMBER_PATTERN.finditer(text)),
        )

        logger.debug(
            "Extracted entities",
            entity_count=bundle.entity_count,
            emails=len(bundle.emails),
            urls=len(bundle.urls),
            phone_numbers=len(bundle.phone_numbers),
        )
        return StageResult.ok(self.stage_name, bundle)

    def _fallback(self, text: str) -> EntityBundle:
        return EntityBundle()

    def _degraded(self, text: str, error: Exception) -> StageResult[EntityBundle]:
        result = super()._degraded(text, error)
        annotated = result.value.model_copy(update={"error": result.diagnostic})
        return dataclasses.replace(result, value=annotated)

    def extract(self, text: str) -> EntityBundle:
        """
        Extract all entity categories from text.

        Examples:
            >>> EntityExtractor().extract("mail a@b.com or A@B.com").emails
            ['a@b.com']
        """
        return self.run(text).value
