"""URL feature extraction, normalization, and ensemble scoring.

This package provides the phishing heuristics pipeline:
- UrlFeatureExtractor: Extract lexical features from a URL string
- FeatureNormalizer: Map features to the scorer's input vector
- EnsembleScorer: Score, average and classify with three weighted models
"""

from phisheye.detector.features import UrlFeatureExtractor, extract_features
from phisheye.detector.normalizer import FeatureNormalizer, normalize_features
from phisheye.detector.ensemble import EnsembleScorer

__all__ = [
    "UrlFeatureExtractor",
    "FeatureNormalizer",
    "EnsembleScorer",
    "extract_features",
    "normalize_features",
]
