"""
HTML sanitizing and HTML-to-text conversion.

Removal rules are an ordered table applied top to bottom: comments first (so
commented-out markup cannot hide a closing tag), then active/embedded
elements, tracking pixels, inline event handlers and finally utm_* tracking
parameters.
"""

import re
from typing import Callable, NamedTuple, Union

import structlog

from ..models.stage_result import StageResult
from .base import FailOpenStage, ensure_text

logger = structlog.get_logger(__name__)


class HtmlRule(NamedTuple):
    """Named regex rewrite; replacement may be a string or a match callback."""

    name: str
    pattern: re.Pattern
    replacement: Union[str, Callable[[re.Match], str]]


_BLOCKED_ELEMENTS = ("script", "style", "object", "embed", "applet", "form")

# 1px dimension: width=1, width="1", width='1px'
_ONE_PX = r"""\s*=\s*["']?1(?:px)?["']?(?=[\s/>])"""

_EVENT_HANDLER = re.compile(
    r"""\s+on[a-z]+\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""",
    re.IGNORECASE,
)
_TAG = re.compile(r"<[a-zA-Z][^>]*>")
_URL = re.compile(r"""https?://[^\s"'<>]+""", re.IGNORECASE)
# Query separators inside an href are usually written as &amp;
_UTM_PARAM = re.compile(
    r"(?:(?<=[?&])|(?<=&amp;))utm_[A-Za-z0-9_]*=[^&#]*(?:&amp;|&)?",
    re.IGNORECASE,
)
_DANGLING_QUERY = re.compile(r"(?:&amp;|[?&])+(?=#|$)")


def _strip_event_handlers(match: re.Match) -> str:
    return _EVENT_HANDLER.sub("", match.group(0))


def _strip_utm_params(match: re.Match) -> str:
    url = match.group(0)
    if "utm_" not in url.lower():
        return url
    url = _UTM_PARAM.sub("", url)
    return _DANGLING_QUERY.sub("", url)


SANITIZE_RULES: list[HtmlRule] = [
    HtmlRule("comments", re.compile(r"<!--.*?-->", re.DOTALL), ""),
    *[
        HtmlRule(
            f"{tag}_elements",
            re.compile(rf"<{tag}\b[^>]*>.*?</{tag}\s*>", re.IGNORECASE | re.DOTALL),
            "",
        )
        for tag in _BLOCKED_ELEMENTS
    ],
    HtmlRule(
        "orphan_blocked_tags",
        re.compile(rf"</?(?:{'|'.join(_BLOCKED_ELEMENTS)})\b[^>]*>", re.IGNORECASE),
        "",
    ),
    HtmlRule(
        "tracking_pixels",
        re.compile(
            rf"<img\b(?=[^>]*\bwidth{_ONE_PX})(?=[^>]*\bheight{_ONE_PX})[^>]*>",
            re.IGNORECASE,
        ),
        "",
    ),
    HtmlRule("event_handlers", _TAG, _strip_event_handlers),
    HtmlRule("utm_parameters", _URL, _strip_utm_params),
]

# Block-level structure mapped onto line breaks before tags are stripped
TEXT_RULES: list[HtmlRule] = [
    HtmlRule("line_breaks", re.compile(r"<br\s*/?>", re.IGNORECASE), "\n"),
    HtmlRule("blocks", re.compile(r"</?(?:p|div|h[1-6])\b[^>]*>", re.IGNORECASE), "\n\n"),
    HtmlRule("list_items", re.compile(r"<li\b[^>]*>", re.IGNORECASE), "\n• "),
    HtmlRule("remaining_tags", re.compile(r"<[^>]+>"), ""),
]

# &amp; last so "&amp;lt;" decodes to "&lt;" and not "<"
HTML_ENTITIES: list[tuple[str, str]] = [
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
]


def _apply_rules(text: str, rules: list[HtmlRule]) -> tuple[str, list[str]]:
    applied: list[str] = []
    for rule in rules:
        rewritten = rule.pattern.sub(rule.replacement, text)
        if rewritten != text:
            applied.append(rule.name)
        text = rewritten
    return text, applied


def _decode_entities(text: str) -> str:
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _collapse_whitespace(text: str) -> str:
    text = re.sub(r"[^\S\n]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


class HtmlSanitizer(FailOpenStage[str]):
    """
    Strip active content and trackers from email HTML, or convert it to text.

    Both operations are fail-open: on internal failure the input comes back
    unchanged.
    """

    stage_name = "html_sanitizer"

    def _apply(self, html: str) -> StageResult[str]:
        html = ensure_text(html)
        if not html:
            return StageResult.ok(self.stage_name, "")

        sanitized, applied = _apply_rules(html, SANITIZE_RULES)
        if applied:
            logger.debug(
                "Sanitized HTML",
                rules_applied=applied,
                original_length=len(html),
                sanitized_length=len(sanitized),
            )
        return StageResult.ok(self.stage_name, sanitized, rules_applied=applied)

    def _fallback(self, html: str) -> str:
        return html

    def sanitize(self, html: str) -> str:
        """Remove scripts, embedded objects, tracking pixels, event handlers and utm_* params."""
        return self.run(html).value

    def run_plain_text(self, html: str) -> StageResult[str]:
        """
        Convert HTML to plain text, fail-open.

        Args:
            html: Raw HTML

        Returns:
            StageResult with the plain text, or the input when conversion failed
        """
        try:
            sanitized = self._apply(html)
            text, _ = _apply_rules(sanitized.value, TEXT_RULES)
            text = _collapse_whitespace(_decode_entities(text))
            return StageResult.ok(
                self.stage_name,
                text,
                rules_applied=sanitized.details.get("rules_applied", []),
            )
        except Exception as e:
            return self._degraded(html, e)

    def to_plain_text(self, html: str) -> str:
        """
        Convert HTML to readable plain text.

        <br> becomes a newline, paragraphs/divs/headings become blank-line
        separated blocks, list items get a "• " bullet; remaining tags are
        dropped and the common entities decoded.

        Examples:
            >>> HtmlSanitizer().to_plain_text("<p>Hi <b>Bob</b></p>")
            'Hi Bob'
        """
        return self.run_plain_text(html).value
