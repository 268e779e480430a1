"""Core data models for PhishEye.

This module defines the value types passed between the feature extractor,
the ensemble scorer and whatever renders the result.
"""

from dataclasses import dataclass, asdict
from typing import Any, Optional

from phisheye.core.constants import Verdict, VerdictPolicy


# ============================================================================
# Feature Model
# ============================================================================

@dataclass(frozen=True)
class UrlFeatures:
    """Lexical features extracted from a single URL string.

    Counts are taken on the lowercased URL. The domain is a best-effort
    substring, not the result of a real URL parser.
    """
    url_length: int                         # Characters in the URL
    domain_length: int                      # Characters in the extracted host
    has_https: bool                         # URL starts with https://
    num_dots: int                           # '.' across the whole URL
    num_dashes: int                         # '-' across the whole URL
    num_digits: int                         # 0-9 across the whole URL
    num_subdomains: int                     # '.' separators in the domain
    has_ip_address: bool                    # Domain is a dotted-quad IPv4
    has_suspicious_tld: bool
    has_url_shortener: bool
    entropy: float                          # Shannon entropy (bits/char)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


# ============================================================================
# Result Models
# ============================================================================

@dataclass(frozen=True)
class ModelScores:
    """Per-model scores of the ensemble."""
    xgboost: float
    logistic: float
    gaussian: float

    @property
    def mean(self) -> float:
        """Arithmetic mean of the three scores."""
        return (self.xgboost + self.logistic + self.gaussian) / 3

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "xgboost": self.xgboost,
            "logistic": self.logistic,
            "gaussian": self.gaussian,
        }


@dataclass(frozen=True)
class EnsembleResult:
    """Verdict and confidence produced by the ensemble scorer."""
    verdict: Verdict
    confidence: float                       # Aggregate score (0.0-1.0)
    policy: VerdictPolicy
    scores: Optional[ModelScores] = None
    features: Optional[UrlFeatures] = None
    url: Optional[str] = None

    @property
    def is_safe(self) -> bool:
        return self.verdict == Verdict.SAFE

    @property
    def is_suspicious(self) -> bool:
        return self.verdict == Verdict.SUSPICIOUS

    @property
    def is_dangerous(self) -> bool:
        return self.verdict == Verdict.DANGEROUS

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data: dict[str, Any] = {
            "verdict": self.verdict.value,
            "confidence": self.confidence,
            "policy": self.policy.value,
        }
        if self.url is not None:
            data["url"] = self.url
        if self.scores is not None:
            data["scores"] = self.scores.to_dict()
        if self.features is not None:
            data["features"] = self.features.to_dict()
        return data
