"""Constants used throughout PhishEye.

This module contains enums, heuristic lists, model weight tables and
verdict thresholds. All of them are defaults: callers may override any
of them through DetectorConfig.
"""

from enum import Enum


class Verdict(str, Enum):
    """Final classification of a URL."""
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"


class VerdictPolicy(str, Enum):
    """How the aggregate score is mapped to a verdict."""
    THREE_CLASS = "three-class"     # safe / suspicious / dangerous
    TWO_CLASS = "two-class"         # safe / dangerous


class ScorerState(Enum):
    """Lifecycle of the ensemble scorer."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class ModelName(str, Enum):
    """Nominal ensemble members. All share the same weighted-sum scorer."""
    XGBOOST = "xgboost"
    LOGISTIC = "logistic"
    GAUSSIAN = "gaussian"


# TLDs frequently registered for phishing campaigns
SUSPICIOUS_TLDS = frozenset({
    'xyz', 'top', 'club', 'online', 'site', 'live', 'stream',
    'click', 'bid', 'cf', 'ga', 'ml', 'gq', 'tk',
})

# Known URL shortener hosts (matched as substrings of the domain)
URL_SHORTENERS = (
    'bit.ly', 'tinyurl.com', 't.co', 'goo.gl', 'is.gd',
    'cli.gs', 'pic.gd', 'ddp.ly', 'su.pr', 'ow.ly',
)


# Order of the normalized feature vector. Weight vectors follow this order.
FEATURE_ORDER = (
    "url_length",
    "domain_length",
    "has_https",
    "num_dots",
    "num_dashes",
    "num_digits",
    "num_subdomains",
    "has_ip_address",
    "has_suspicious_tld",
    "has_url_shortener",
    "entropy",
)

FEATURE_COUNT = len(FEATURE_ORDER)

# Divisors for count features. Ratios are capped at 1 except entropy.
NORMALIZATION_CAPS = {
    "url_length": 100,
    "domain_length": 50,
    "num_dots": 10,
    "num_dashes": 5,
    "num_digits": 10,
    "num_subdomains": 5,
    "entropy": 5,
}


# Hand-picked weights, one vector per nominal model, in FEATURE_ORDER
MODEL_WEIGHTS = {
    ModelName.XGBOOST: (0.8, 0.7, 0.9, 0.6, 0.7, 0.6, 0.8, 0.95, 0.85, 0.9, 0.6),
    ModelName.LOGISTIC: (0.7, 0.6, 0.8, 0.5, 0.6, 0.5, 0.7, 0.9, 0.8, 0.85, 0.55),
    ModelName.GAUSSIAN: (0.75, 0.65, 0.85, 0.55, 0.65, 0.55, 0.75, 0.9, 0.82, 0.87, 0.58),
}

# Upper bound (exclusive) of the uniform perturbation added to each model score
NOISE_AMPLITUDE = 0.1


THRESHOLDS = {
    VerdictPolicy.THREE_CLASS: {
        "safe": 0.3,
        "suspicious": 0.6,
    },
    VerdictPolicy.TWO_CLASS: {
        "dangerous": 0.65,
    },
}


# Application-wide defaults
DEFAULTS = {
    "policy": VerdictPolicy.THREE_CLASS,
    "noise": NOISE_AMPLITUDE,
}
