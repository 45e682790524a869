"""
Search keyword extraction.

Keywords come from three sources, in priority order: subject words, sender
name words and the most frequent body words. The merged list is lowercased,
stop words are dropped, duplicates removed and the result capped.
"""

import string
from collections import Counter
from itertools import chain
from typing import Iterable, Iterator

from .stopwords import STOP_WORDS

MAX_KEYWORDS = 25
CONTENT_KEYWORD_COUNT = 15

_STRIP_CHARS = string.punctuation + "“”‘’«»…•–—"
_URL_PREFIXES = ("http:", "https:")


def _words(text: str) -> Iterator[str]:
    for raw in (text or "").split():
        word = raw.strip(_STRIP_CHARS)
        if word:
            yield word


def subject_keywords(subject: str) -> list[str]:
    """Subject words longer than 3 chars that are not pure digits."""
    return [w.lower() for w in _words(subject) if len(w) > 3 and not w.isdigit()]


def sender_keywords(sender_name: str) -> list[str]:
    """Sender name words longer than 2 chars."""
    return [w.lower() for w in _words(sender_name) if len(w) > 2]


def content_keywords(content: str, top_n: int = CONTENT_KEYWORD_COUNT) -> list[str]:
    """
    Most frequent body words longer than 4 chars.
    
    Pure digits and http(s): tokens are skipped. Sorted by descending
    frequency; equal counts keep first-seen order (Counter.most_common).
    """
    words = []
    for raw in (content or "").split():
        if raw.lower().startswith(_URL_PREFIXES):
            continue
        word = raw.strip(_STRIP_CHARS).lower()
        if len(word) > 4 and not word.isdigit():
            words.append(word)
    return [word for word, _ in Counter(words).most_common(top_n)]


def top_keywords(
    subject: str,
    sender_name: str,
    content: str,
    stopwords: Iterable[str] = STOP_WORDS,
    limit: int = MAX_KEYWORDS,
    content_top_n: int = CONTENT_KEYWORD_COUNT,
) -> list[str]:
    """
    Build the ordered, unique, lowercase keyword list for a search document.
    
    Args:
        subject: Email subject
        sender_name: Sender display name
        content: Text the document indexes (full body or one chunk)
        stopwords: Words to drop (compared lowercase)
        limit: Maximum number of keywords
        content_top_n: How many frequent body words to consider
        
    Returns:
        At most `limit` keywords: subject words first, then sender, then body
        
    Examples:
        >>> top_keywords("Quarterly budget review", "Jane Doe", "budget budget forecast")
        ['quarterly', 'budget', 'review', 'jane', 'doe', 'forecast']
    """
    if limit <= 0:
        return []
    stop = stopwords if isinstance(stopwords, (set, frozenset)) else set(stopwords)
    keywords: list[str] = []
    seen: set[str] = set()
    
    for word in chain(
        subject_keywords(subject),
        sender_keywords(sender_name),
        content_keywords(content, content_top_n),
    ):
        if word in stop or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
        if len(keywords) >= limit:
            break
    
    return keywords
