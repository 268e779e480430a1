"""Configuration loader for PhishEye.

This module bundles the heuristic lists, weight tables and thresholds into
a DetectorConfig, and loads overrides for them from YAML files.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from phisheye.core.exceptions import ConfigError
from phisheye.core.constants import (
    DEFAULTS,
    FEATURE_COUNT,
    MODEL_WEIGHTS,
    SUSPICIOUS_TLDS,
    THRESHOLDS,
    URL_SHORTENERS,
    ModelName,
    VerdictPolicy,
)


# ============================================================================
# Detector Configuration
# ============================================================================

@dataclass
class DetectorConfig:
    """Tunable constants for feature extraction and scoring."""
    suspicious_tlds: frozenset[str] = SUSPICIOUS_TLDS
    url_shorteners: tuple[str, ...] = URL_SHORTENERS
    model_weights: dict[ModelName, tuple[float, ...]] = field(
        default_factory=lambda: dict(MODEL_WEIGHTS)
    )
    safe_threshold: float = THRESHOLDS[VerdictPolicy.THREE_CLASS]["safe"]
    suspicious_threshold: float = THRESHOLDS[VerdictPolicy.THREE_CLASS]["suspicious"]
    binary_threshold: float = THRESHOLDS[VerdictPolicy.TWO_CLASS]["dangerous"]
    noise_amplitude: float = DEFAULTS["noise"]
    policy: VerdictPolicy = DEFAULTS["policy"]

    def validate(self) -> None:
        """Check value ranges and weight shapes.

        Raises:
            ConfigError: If any setting is out of range
        """
        for name in (
            "safe_threshold",
            "suspicious_threshold",
            "binary_threshold",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"'{name}' must be within [0, 1], got {value}")

        if self.safe_threshold >= self.suspicious_threshold:
            raise ConfigError(
                "'safe_threshold' must be lower than 'suspicious_threshold'"
            )

        if not math.isfinite(self.noise_amplitude) or self.noise_amplitude < 0:
            raise ConfigError(
                "'noise_amplitude' must be a finite non-negative number, "
                f"got {self.noise_amplitude}"
            )

        for model, weights in self.model_weights.items():
            if len(weights) != FEATURE_COUNT:
                raise ConfigError(
                    f"Weights for '{model.value}' must have {FEATURE_COUNT} entries, "
                    f"got {len(weights)}"
                )
            if not all(math.isfinite(w) for w in weights):
                raise ConfigError(
                    f"Weights for '{model.value}' must be finite numbers"
                )


# ============================================================================
# YAML Loader
# ============================================================================

def load_detector_config(config_file: Path | str | None = None) -> DetectorConfig:
    """Load detector configuration from a YAML file.

    Keys present in the file override the built-in defaults; missing keys
    keep them. Recognized keys: ``tlds``, ``shorteners``, ``weights``,
    ``thresholds`` (``safe``, ``suspicious``, ``binary``), ``noise`` and
    ``policy``.

    Args:
        config_file: Path to YAML file. If None, returns the defaults

    Returns:
        Validated DetectorConfig

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    config = DetectorConfig()
    if config_file is None:
        return config

    config_path = Path(config_file)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}") from e

    if data is None:
        return config

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping at top level")

    _apply_overrides(config, data)
    config.validate()
    return config


def _apply_overrides(config: DetectorConfig, data: dict[str, Any]) -> None:
    """Overlay YAML values onto a DetectorConfig in place."""
    if "tlds" in data:
        tlds = data["tlds"]
        if not isinstance(tlds, list):
            raise ConfigError("'tlds' must be a list")
        config.suspicious_tlds = frozenset(str(t).lower().lstrip(".") for t in tlds)

    if "shorteners" in data:
        shorteners = data["shorteners"]
        if not isinstance(shorteners, list):
            raise ConfigError("'shorteners' must be a list")
        config.url_shorteners = tuple(str(s).lower() for s in shorteners if s)

    if "weights" in data:
        weights = data["weights"]
        if not isinstance(weights, dict):
            raise ConfigError("'weights' must be a mapping of model name to list")
        for name, vector in weights.items():
            try:
                model = ModelName(name)
            except ValueError as e:
                known = ", ".join(m.value for m in ModelName)
                raise ConfigError(
                    f"Unknown model '{name}'. Known models: {known}"
                ) from e
            if not isinstance(vector, list):
                raise ConfigError(f"Weights for '{name}' must be a list")
            try:
                config.model_weights[model] = tuple(float(w) for w in vector)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Weights for '{name}' must be numeric: {e}") from e

    thresholds = data.get("thresholds") or {}
    if not isinstance(thresholds, dict):
        raise ConfigError("'thresholds' must be a mapping")
    for key, attr in (
        ("safe", "safe_threshold"),
        ("suspicious", "suspicious_threshold"),
        ("binary", "binary_threshold"),
    ):
        if key in thresholds:
            setattr(config, attr, _as_float(thresholds[key], f"thresholds.{key}"))

    if "noise" in data:
        config.noise_amplitude = _as_float(data["noise"], "noise")

    if "policy" in data:
        try:
            config.policy = VerdictPolicy(data["policy"])
        except ValueError as e:
            known = ", ".join(p.value for p in VerdictPolicy)
            raise ConfigError(
                f"Unknown policy '{data['policy']}'. Known policies: {known}"
            ) from e


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{name}' must be a number, got {value!r}") from e
