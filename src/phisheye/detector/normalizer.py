"""Feature normalization for the ensemble scorer.

Maps a UrlFeatures value to a fixed-order vector of comparable scalars:
- Count features are divided by a cap and clipped to 1
- has_https is inverted (no HTTPS raises the risk signal)
- Other booleans map to 0/1
- Entropy is divided by its cap but NOT clipped, so it may exceed 1
"""

from typing import Optional

from phisheye.core.constants import FEATURE_ORDER, NORMALIZATION_CAPS
from phisheye.core.models import UrlFeatures


class FeatureNormalizer:
    """Normalize UrlFeatures into the scorer's input vector."""

    def __init__(self, *, caps: Optional[dict[str, float]] = None):
        """Initialize FeatureNormalizer.

        Args:
            caps: Divisors per feature name (defaults to NORMALIZATION_CAPS)
        """
        self.caps = dict(NORMALIZATION_CAPS)
        if caps:
            self.caps.update(caps)

    def normalize(self, features: UrlFeatures) -> list[float]:
        """Normalize a single feature set.

        Args:
            features: Extracted URL features

        Returns:
            List of len(FEATURE_ORDER) floats in FEATURE_ORDER
        """
        vector = [
            self._capped(features.url_length, "url_length"),
            self._capped(features.domain_length, "domain_length"),
            0.0 if features.has_https else 1.0,
            self._capped(features.num_dots, "num_dots"),
            self._capped(features.num_dashes, "num_dashes"),
            self._capped(features.num_digits, "num_digits"),
            self._capped(features.num_subdomains, "num_subdomains"),
            1.0 if features.has_ip_address else 0.0,
            1.0 if features.has_suspicious_tld else 0.0,
            1.0 if features.has_url_shortener else 0.0,
            features.entropy / self.caps["entropy"],
        ]
        return vector

    def normalize_named(self, features: UrlFeatures) -> dict[str, float]:
        """Normalize and key each value by its feature name."""
        return dict(zip(FEATURE_ORDER, self.normalize(features)))

    def _capped(self, value: float, name: str) -> float:
        return min(value / self.caps[name], 1.0)


_default_normalizer = FeatureNormalizer()


def normalize_features(features: UrlFeatures) -> list[float]:
    """Normalize features with the default caps."""
    return _default_normalizer.normalize(features)
