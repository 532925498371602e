"""
URL Extraction Module
Extracts links, normalizes them to https form and resolves overlapping matches
"""
import re
import logging
from datetime import datetime
from typing import List, Set, Tuple

from .models import Url
from .utils import extract_context, sanitize_text

logger = logging.getLogger(__name__)

_PROTOCOL = re.compile(r"^https?://", re.IGNORECASE)
_DOMAIN_CHARSET = re.compile(r"^[a-zA-Z0-9][-a-zA-Z0-9.]{0,253}[a-zA-Z0-9]$")
_HOST_TERMINATORS = re.compile(r"[/?#]")

# Sentence punctuation that ends up glued to links in chat messages
_TRAILING_PUNCTUATION = ".,;:!?"


class _SpanTracker:
    """Character spans already claimed by an accepted URL."""

    __slots__ = ("_spans",)

    def __init__(self):
        self._spans: List[Tuple[int, int]] = []

    def is_overlapping(self, start: int, end: int) -> bool:
        for s, e in self._spans:
            if start < e and end > s:
                return True
        return False

    def add(self, start: int, end: int) -> None:
        self._spans.append((start, end))


def extract_domain(url: str) -> str:
    """Host of a URL without protocol, path, port or leading www., lower-cased."""
    domain = _PROTOCOL.sub("", url)
    domain = _HOST_TERMINATORS.split(domain, 1)[0]
    domain = domain.split(":", 1)[0]
    if domain.lower().startswith("www."):
        domain = domain[4:]
    return domain.lower()


def normalize_url(raw_url: str) -> Tuple[str, str, float]:
    """
    Normalize a matched URL.

    Returns:
        (normalized, domain, confidence)
    """
    normalized = raw_url.strip()

    if _PROTOCOL.match(normalized):
        confidence = 0.95
    elif normalized.lower().startswith("www."):
        normalized = "https://" + normalized
        confidence = 0.85
    else:
        normalized = "https://" + normalized
        confidence = 0.75

    # https://host/ keeps its root slash, https://host/path/ loses the trailing one
    if normalized.endswith("/") and len(normalized.split("/")) > 4:
        normalized = normalized[:-1]

    return normalized, extract_domain(normalized), confidence


def validate_url(url: str) -> bool:
    if not _PROTOCOL.match(url):
        return False

    host = _HOST_TERMINATORS.split(_PROTOCOL.sub("", url), 1)[0].split(":", 1)[0]
    if "." not in host:
        return False

    if not _DOMAIN_CHARSET.match(host):
        return False

    tld = host.rsplit(".", 1)[1]
    return len(tld) >= 2


class UrlExtractor:
    """Extract URLs from text in decreasing order of explicitness"""

    def __init__(self):
        self.patterns = self._compile_patterns()

    def _compile_patterns(self) -> Tuple[re.Pattern, ...]:
        return (
            # Explicit protocol
            re.compile(
                r"\b(https?://[a-zA-Z0-9][-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
                r"[-a-zA-Z0-9()@:%_+.~#?&/=]*)",
                re.IGNORECASE | re.ASCII,
            ),
            # www. prefix
            re.compile(
                r"\b(www\.[a-zA-Z0-9][-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
                r"[-a-zA-Z0-9()@:%_+.~#?&/=]*)",
                re.IGNORECASE | re.ASCII,
            ),
            # Bare domain, only when followed by a path, query or fragment
            re.compile(
                r"\b([a-zA-Z0-9][-a-zA-Z0-9]{0,61}[a-zA-Z0-9]?\.[a-zA-Z]{2,6}"
                r"[/?#][-a-zA-Z0-9()@:%_+.~#?&/=]+)",
                re.IGNORECASE | re.ASCII,
            ),
        )

    def extract(self, text: str) -> List[Url]:
        try:
            text = sanitize_text(text)
            if not text:
                return []

            timestamp = datetime.now()
            urls: List[Url] = []
            seen: Set[str] = set()
            claimed = _SpanTracker()

            for pattern in self.patterns:
                for match in pattern.finditer(text):
                    raw = match.group(1).rstrip(_TRAILING_PUNCTUATION)
                    if not raw:
                        continue

                    start = match.start(1)
                    end = start + len(raw)
                    if claimed.is_overlapping(start, end):
                        continue

                    normalized, domain, confidence = normalize_url(raw)
                    if normalized in seen:
                        continue
                    seen.add(normalized)

                    urls.append(Url(
                        value=normalized,
                        confidence=confidence,
                        context=extract_context(text, start, len(raw)),
                        timestamp=timestamp,
                        validated=validate_url(normalized),
                        domain=domain,
                        format=raw,
                    ))
                    claimed.add(start, end)

            return urls

        except Exception as e:
            logger.error(f"URL extraction error: {e}", exc_info=True)
            return []
