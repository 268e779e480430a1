"""Ensemble scoring of normalized URL features.

The three ensemble members (xgboost, logistic, gaussian) are nominal: each
is the same weighted sum over the normalized feature vector, parameterized
by its own weight vector, plus a small uniform perturbation drawn from an
injectable random source. The member scores are averaged and the average
is mapped to a verdict by the selected VerdictPolicy.

Because of the perturbation, repeated calls on identical input may return
slightly different scores. Pass a seeded ``random.Random`` (or any object
with a ``random()`` method) to make scoring reproducible.
"""

import logging
import math
import numbers
import random
from typing import Any, Optional, Protocol, Sequence

from phisheye.core.config import DetectorConfig
from phisheye.core.constants import (
    FEATURE_COUNT,
    ModelName,
    ScorerState,
    Verdict,
    VerdictPolicy,
)
from phisheye.core.exceptions import InitError, InputError, NotReadyError
from phisheye.core.models import EnsembleResult, ModelScores, UrlFeatures
from phisheye.detector.features import UrlFeatureExtractor
from phisheye.detector.normalizer import FeatureNormalizer


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


class EnsembleScorer:
    """Score URL features with a three-member weighted-sum ensemble.

    Lifecycle is Uninitialized -> Ready. ``initialize()`` is idempotent and
    may be retried after an InitError. With ``auto_initialize`` (the
    default) the first score/classify call initializes synchronously;
    otherwise it raises NotReadyError.

    Example:
        >>> scorer = EnsembleScorer(rng=random.Random(7))
        >>> scorer.initialize()
        >>> result = scorer.classify_url("http://free-gift.xyz/login")
        >>> result.verdict
    """

    def __init__(
        self,
        *,
        config: Optional[DetectorConfig] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        policy: Optional[VerdictPolicy] = None,
        extractor: Optional[UrlFeatureExtractor] = None,
        normalizer: Optional[FeatureNormalizer] = None,
        auto_initialize: bool = True,
    ):
        """Initialize EnsembleScorer.

        Args:
            config: DetectorConfig with weights, thresholds and noise
            rng: Random source for the perturbation (overrides seed)
            seed: Seed for a private random.Random when rng is None
            policy: Default verdict policy (falls back to config.policy)
            extractor: UrlFeatureExtractor used by classify_url
            normalizer: FeatureNormalizer used by classify
            auto_initialize: Initialize on first use instead of raising
        """
        self.config = config or DetectorConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.policy = VerdictPolicy(policy) if policy is not None else self.config.policy
        self.extractor = extractor or UrlFeatureExtractor(config=self.config)
        self.normalizer = normalizer or FeatureNormalizer()
        self.auto_initialize = auto_initialize

        self._state = ScorerState.UNINITIALIZED
        self._models: dict[ModelName, tuple[float, ...]] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> ScorerState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == ScorerState.READY

    def initialize(self) -> None:
        """Validate the config and build the model table. No-op once Ready.

        Raises:
            InitError: If the config is invalid or the model table cannot be
                built. The scorer stays
                Uninitialized so the call can be retried.
        """
        if self.is_ready:
            return

        try:
            self.config.validate()
            models = self._build_models()
        except Exception as e:
            logger.exception(f"Model initialization failed: {e}")
            raise InitError(f"Failed to initialize ensemble models: {e}") from e

        self._models = models
        self._state = ScorerState.READY
        logger.info(f"Ensemble ready: {', '.join(m.value for m in models)}")

    def _build_models(self) -> dict[ModelName, tuple[float, ...]]:
        """Validate and freeze the configured weight vectors."""
        models: dict[ModelName, tuple[float, ...]] = {}
        for model in ModelName:
            if model not in self.config.model_weights:
                raise ValueError(f"No weights configured for model '{model.value}'")
            weights = tuple(float(w) for w in self.config.model_weights[model])
            if len(weights) != FEATURE_COUNT:
                raise ValueError(
                    f"Weights for '{model.value}' have {len(weights)} entries, "
                    f"expected {FEATURE_COUNT}"
                )
            if not all(math.isfinite(w) for w in weights):
                raise ValueError(f"Weights for '{model.value}' must be finite")
            models[model] = weights
        return models

    def _ensure_ready(self) -> None:
        if self.is_ready:
            return
        if not self.auto_initialize:
            raise NotReadyError("Scorer used before initialize()")
        self.initialize()

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(
        self,
        vector: Sequence[float],
        *,
        policy: Optional[VerdictPolicy] = None,
    ) -> EnsembleResult:
        """Score a normalized feature vector.

        Args:
            vector: FEATURE_COUNT normalized values in FEATURE_ORDER
            policy: Verdict policy for this call (defaults to self.policy)

        Returns:
            EnsembleResult with verdict, aggregate confidence and model scores

        Raises:
            InputError: If the vector has the wrong length or non-numeric entries
            NotReadyError: If not initialized and auto_initialize is off
            InitError: If auto-initialization fails
        """
        self._ensure_ready()
        values = self._validate_vector(vector)
        policy = VerdictPolicy(policy) if policy is not None else self.policy

        member_scores = {
            model: self._score_model(values, weights)
            for model, weights in self._models.items()
        }
        scores = ModelScores(
            xgboost=member_scores[ModelName.XGBOOST],
            logistic=member_scores[ModelName.LOGISTIC],
            gaussian=member_scores[ModelName.GAUSSIAN],
        )
        aggregate = scores.mean
        verdict = self.verdict_for(aggregate, policy)

        logger.debug(
            f"Scores xgboost={scores.xgboost:.4f} logistic={scores.logistic:.4f} "
            f"gaussian={scores.gaussian:.4f} -> {aggregate:.4f} ({verdict.value})"
        )

        return EnsembleResult(
            verdict=verdict,
            confidence=aggregate,
            policy=policy,
            scores=scores,
        )

    def classify(
        self,
        features: UrlFeatures,
        *,
        policy: Optional[VerdictPolicy] = None,
        url: Optional[str] = None,
    ) -> EnsembleResult:
        """Normalize and score extracted URL features.

        Args:
            features: Output of the feature extractor
            policy: Verdict policy for this call
            url: Original URL, attached to the result for display

        Returns:
            EnsembleResult carrying the features it was computed from
        """
        result = self.score(self.normalizer.normalize(features), policy=policy)
        return EnsembleResult(
            verdict=result.verdict,
            confidence=result.confidence,
            policy=result.policy,
            scores=result.scores,
            features=features,
            url=url,
        )

    def classify_url(
        self,
        url: str,
        *,
        policy: Optional[VerdictPolicy] = None,
    ) -> EnsembleResult:
        """Extract features from a URL and classify them."""
        return self.classify(self.extractor.extract(url), policy=policy, url=url)

    def classify_batch(
        self,
        urls: list[str],
        *,
        policy: Optional[VerdictPolicy] = None,
    ) -> list[EnsembleResult]:
        """Classify a batch of URLs."""
        return [self.classify_url(url, policy=policy) for url in urls]

    def verdict_for(self, aggregate: float, policy: VerdictPolicy) -> Verdict:
        """Map an aggregate score to a verdict under the given policy.

        Three-class: safe below the safe cut, suspicious below the
        suspicious cut, dangerous otherwise. Two-class: dangerous above the
        binary cut, safe otherwise.
        """
        if policy == VerdictPolicy.TWO_CLASS:
            if aggregate > self.config.binary_threshold:
                return Verdict.DANGEROUS
            return Verdict.SAFE

        if aggregate < self.config.safe_threshold:
            return Verdict.SAFE
        if aggregate < self.config.suspicious_threshold:
            return Verdict.SUSPICIOUS
        return Verdict.DANGEROUS

    def _score_model(self, values: list[float], weights: tuple[float, ...]) -> float:
        """Weighted mean plus uniform noise in [0, noise_amplitude), clamped to [0, 1]."""
        weighted = sum(v * w for v, w in zip(values, weights)) / FEATURE_COUNT
        noise = self.rng.random() * self.config.noise_amplitude
        return min(max(weighted + noise, 0.0), 1.0)

    @staticmethod
    def _validate_vector(vector: Any) -> list[float]:
        try:
            values = list(vector)
        except TypeError as e:
            raise InputError(f"Feature vector must be a sequence: {e}") from e

        if len(values) != FEATURE_COUNT:
            raise InputError(
                f"Expected {FEATURE_COUNT} features, got {len(values)}"
            )

        for index, value in enumerate(values):
            if not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InputError(
                    f"Feature {index} must be a finite number, got {value!r}"
                )

        return [float(v) for v in values]
