"""
Signature, footer and disclaimer removal.

Each rule cuts from its trigger to the end of the text. Rules run once, in
table order, on the evolving string, so an early cut (e.g. at a "--" line)
can take a later rule's trigger with it. Tests pin the behavior rule by rule.
"""

import re
from typing import NamedTuple

import structlog

from ..models.stage_result import StageResult
from .base import FailOpenStage, ensure_text

logger = structlog.get_logger(__name__)

_FLAGS = re.IGNORECASE | re.MULTILINE | re.DOTALL


class SignatureRule(NamedTuple):
    """Named trigger pattern; a match removes everything from the trigger on."""

    name: str
    pattern: re.Pattern


SIGNATURE_RULES: list[SignatureRule] = [
    # \r? because the stripper runs before line endings are normalized
    SignatureRule("dash_delimiter", re.compile(r"^[ \t]*--[ \t]*\r?$.*", _FLAGS)),
    SignatureRule(
        "divider_line",
        re.compile(r"^[ \t]*(?:_{3,}|-{3,}|={3,})[ \t]*\r?$.*", _FLAGS),
    ),
    SignatureRule(
        "valediction",
        re.compile(
            r"^[ \t]*(?:best regards|kind regards|thanks and regards|sincerely)\b.*",
            _FLAGS,
        ),
    ),
    SignatureRule(
        "mobile_footer",
        re.compile(
            r"\bsent from my (?:iphone|ipad|android|samsung|galaxy|blackberry|"
            r"mobile|phone|smartphone|tablet)\b.*",
            _FLAGS,
        ),
    ),
    SignatureRule(
        "app_promo_footer",
        re.compile(r"\bget outlook for (?:ios|android)\b.*", _FLAGS),
    ),
    SignatureRule(
        "contact_line",
        re.compile(r"^[ \t]*(?:phone|tel|mobile|e-?mail|fax)[ \t]*:[ \t]*\S.*", _FLAGS),
    ),
    SignatureRule(
        "trailing_email_block",
        re.compile(
            r"^[^\n]*\b[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[a-z]{2,}\b[^\n]*(?:\n[^\n]*){0,5}\Z",
            re.IGNORECASE | re.MULTILINE,
        ),
    ),
    SignatureRule(
        "disclaimer",
        re.compile(
            r"^[ \t]*(?:confidentiality notice|disclaimer|privileged (?:and|&) confidential|"
            r"this (?:e-?mail|message)(?: and any attachments)? (?:is|are|may be|contains?) "
            r"(?:confidential|privileged|intended)).*",
            _FLAGS,
        ),
    ),
]

_BLANK_LINE_RUN = re.compile(r"\r?\n(?:[ \t\r]*\n){2,}")


class SignatureStripper(FailOpenStage[str]):
    """
    Remove trailing signature blocks, mobile footers and disclaimers.

    Fail-open: on internal failure the original text comes back unchanged.
    """

    stage_name = "signature_stripper"

    def __init__(self, rules: list[SignatureRule] | None = None):
        """
        Initialize the stripper.

        Args:
            rules: Ordered rule table, defaults to SIGNATURE_RULES
        """
        self.rules = list(rules) if rules is not None else list(SIGNATURE_RULES)

    def _apply(self, text: str) -> StageResult[str]:
        text = ensure_text(text)
        if not text.strip():
            return StageResult.ok(self.stage_name, text.rstrip(), rules_applied=[])

        stripped = text
        applied: list[str] = []
        for rule in self.rules:
            match = rule.pattern.search(stripped)
            if match:
                stripped = stripped[: match.start()]
                applied.append(rule.name)

        stripped = _BLANK_LINE_RUN.sub("\n\n", stripped).rstrip()

        if applied:
            logger.debug(
                "Stripped signature content",
                rules_applied=applied,
                removed_chars=len(text) - len(stripped),
            )
        return StageResult.ok(self.stage_name, stripped, rules_applied=applied)

    def _fallback(self, text: str) -> str:
        return text

    def strip(self, text: str) -> str:
        """
        Remove signature content from the end of a plain-text body.

        Examples:
            >>> SignatureStripper().strip("See attached.\\n\\nBest regards,\\nJohn")
            'See attached.'
        """
        return self.run(text).value
