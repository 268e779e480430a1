"""Lexical feature extraction from raw URL strings.

This module turns a URL string into a UrlFeatures value without touching
the network. Extraction is total: malformed input degrades to a
best-effort feature vector instead of raising, because phishing URLs are
often deliberately malformed and still need a score.

Domain extraction is plain string splitting, not a URL parser:
- Take the text between the first ``//`` and the next ``/``
- Without ``//``, take everything before the first ``/``
- Drop a ``:port`` and a ``?query`` from the candidate
"""

import math
import re
from collections import Counter
from typing import Any, Iterable, Optional

from phisheye.core.config import DetectorConfig
from phisheye.core.models import UrlFeatures


_IPV4_RE = re.compile(r"(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})", re.ASCII)
_DIGIT_RE = re.compile(r"[0-9]")


def extract_domain(url: str) -> str:
    """Extract the host portion of a URL by string splitting.

    Args:
        url: URL string (already lowercased by the caller)

    Returns:
        Host candidate, possibly empty
    """
    if "//" in url:
        rest = url[url.index("//") + 2:]
        candidate = rest.split("/", 1)[0]
    else:
        candidate = url.split("/", 1)[0]

    candidate = candidate.split(":", 1)[0]
    candidate = candidate.split("?", 1)[0]
    return candidate


def extract_tld(domain: str) -> str:
    """Return the label after the final dot, or '' if there is none."""
    if "." not in domain:
        return ""
    return domain.rsplit(".", 1)[1]


def is_ip_address(domain: str) -> bool:
    """Check if domain is a dotted-quad IPv4 literal.

    Exactly four groups of one to three ASCII digits, each within 0-255.
    IPv6, octal and hex forms are not recognized.
    """
    match = _IPV4_RE.fullmatch(domain)
    if match is None:
        return False
    return all(0 <= int(part) <= 255 for part in match.groups())


def shannon_entropy(text: str) -> float:
    """Shannon entropy (base 2) over the characters of text.

    Returns 0.0 for the empty string.
    """
    length = len(text)
    if length == 0:
        return 0.0

    entropy = 0.0
    for count in Counter(text).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


def _as_entries(values: Iterable[str]) -> tuple[str, ...]:
    """Treat a bare string as a single entry, not a sequence of characters."""
    if isinstance(values, str):
        return (values,)
    return tuple(values)


class UrlFeatureExtractor:
    """Extract UrlFeatures from URL strings.

    The suspicious TLD set and the shortener list come from a DetectorConfig
    so they can be tuned without code changes.
    """

    def __init__(
        self,
        *,
        config: Optional[DetectorConfig] = None,
        suspicious_tlds: Optional[Iterable[str]] = None,
        url_shorteners: Optional[Iterable[str]] = None,
    ):
        """Initialize UrlFeatureExtractor.

        Args:
            config: DetectorConfig with the heuristic lists (defaults if None)
            suspicious_tlds: Overrides config.suspicious_tlds
            url_shorteners: Overrides config.url_shorteners
        """
        config = config or DetectorConfig()
        self.suspicious_tlds = frozenset(
            _as_entries(suspicious_tlds) if suspicious_tlds is not None else config.suspicious_tlds
        )
        self.url_shorteners = tuple(
            _as_entries(url_shorteners) if url_shorteners is not None else config.url_shorteners
        )

    def extract(self, url: Any) -> UrlFeatures:
        """Extract features from a single URL.

        Args:
            url: URL to analyze. Non-string input is coerced with str(),
                None is treated as the empty string

        Returns:
            UrlFeatures for the lowercased URL
        """
        text = "" if url is None else str(url)
        text = text.lower()

        domain = extract_domain(text)
        tld = extract_tld(domain)

        return UrlFeatures(
            url_length=len(text),
            domain_length=len(domain),
            has_https=text.startswith("https://"),
            num_dots=text.count("."),
            num_dashes=text.count("-"),
            num_digits=len(_DIGIT_RE.findall(text)),
            num_subdomains=domain.count("."),
            has_ip_address=is_ip_address(domain),
            has_suspicious_tld=tld in self.suspicious_tlds,
            has_url_shortener=self.has_url_shortener(domain),
            entropy=shannon_entropy(text),
        )

    def extract_batch(self, urls: list[str]) -> list[UrlFeatures]:
        """Extract features for a batch of URLs."""
        return [self.extract(url) for url in urls]

    def has_url_shortener(self, domain: str) -> bool:
        """Substring match of the domain against known shortener hosts.

        ``notbit.ly.evil.com`` contains ``bit.ly`` and therefore matches.
        """
        return any(shortener in domain for shortener in self.url_shorteners)


_default_extractor = UrlFeatureExtractor()


def extract_features(url: Any) -> UrlFeatures:
    """Extract features using the default heuristic lists."""
    return _default_extractor.extract(url)
