"""Unit tests for detector configuration loading.

Tests for DetectorConfig defaults, validation, and YAML overrides.
"""

import sys
import tempfile
import unittest
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
sys.path.insert(0, str(src_path))

from phisheye.core.config import DetectorConfig, load_detector_config
from phisheye.core.constants import (
    FEATURE_COUNT,
    MODEL_WEIGHTS,
    SUSPICIOUS_TLDS,
    URL_SHORTENERS,
    ModelName,
    VerdictPolicy,
)
from phisheye.core.exceptions import ConfigError


class TestDetectorConfig(unittest.TestCase):
    """Test suite for DetectorConfig defaults and validation."""

    def test_defaults(self):
        config = DetectorConfig()

        self.assertEqual(config.suspicious_tlds, SUSPICIOUS_TLDS)
        self.assertEqual(config.url_shorteners, URL_SHORTENERS)
        self.assertEqual(config.model_weights, MODEL_WEIGHTS)
        self.assertEqual(config.safe_threshold, 0.3)
        self.assertEqual(config.suspicious_threshold, 0.6)
        self.assertEqual(config.binary_threshold, 0.65)
        self.assertEqual(config.noise_amplitude, 0.1)
        self.assertEqual(config.policy, VerdictPolicy.THREE_CLASS)

    def test_default_lists_match_known_values(self):
        self.assertEqual(len(SUSPICIOUS_TLDS), 14)
        self.assertIn("xyz", SUSPICIOUS_TLDS)
        self.assertIn("tk", SUSPICIOUS_TLDS)
        self.assertEqual(len(URL_SHORTENERS), 10)
        self.assertIn("bit.ly", URL_SHORTENERS)

    def test_model_weights_not_shared_between_instances(self):
        first = DetectorConfig()
        second = DetectorConfig()
        first.model_weights[ModelName.XGBOOST] = (0.0,) * 11

        self.assertEqual(second.model_weights[ModelName.XGBOOST], MODEL_WEIGHTS[ModelName.XGBOOST])

    def test_validate_defaults(self):
        DetectorConfig().validate()

    def test_validate_threshold_range(self):
        with self.assertRaises(ConfigError):
            DetectorConfig(binary_threshold=1.5).validate()

    def test_validate_threshold_order(self):
        with self.assertRaises(ConfigError):
            DetectorConfig(safe_threshold=0.7, suspicious_threshold=0.6).validate()

    def test_validate_negative_noise(self):
        with self.assertRaises(ConfigError):
            DetectorConfig(noise_amplitude=-0.1).validate()

    def test_validate_weight_length(self):
        config = DetectorConfig()
        config.model_weights[ModelName.GAUSSIAN] = (1.0, 2.0)
        with self.assertRaises(ConfigError):
            config.validate()

    def test_validate_nan_noise(self):
        with self.assertRaises(ConfigError):
            DetectorConfig(noise_amplitude=float("nan")).validate()

    def test_validate_infinite_noise(self):
        with self.assertRaises(ConfigError):
            DetectorConfig(noise_amplitude=float("inf")).validate()

    def test_validate_nan_weight(self):
        config = DetectorConfig()
        config.model_weights[ModelName.LOGISTIC] = (float("nan"),) + (0.5,) * (FEATURE_COUNT - 1)
        with self.assertRaises(ConfigError):
            config.validate()

    def test_validate_infinite_weight(self):
        config = DetectorConfig()
        config.model_weights[ModelName.XGBOOST] = (0.5,) * (FEATURE_COUNT - 1) + (float("-inf"),)
        with self.assertRaises(ConfigError):
            config.validate()


class TestLoadDetectorConfig(unittest.TestCase):
    """Test suite for load_detector_config."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir_path = Path(self.temp_dir.name)

    def tearDown(self):
        """Clean up temporary files."""
        self.temp_dir.cleanup()

    def _write(self, content: str) -> Path:
        path = self.dir_path / "phisheye.yaml"
        path.write_text(content)
        return path

    def test_none_returns_defaults(self):
        self.assertEqual(load_detector_config(None), DetectorConfig())

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_detector_config(self.dir_path / "missing.yaml")

    def test_empty_file_returns_defaults(self):
        path = self._write("")
        self.assertEqual(load_detector_config(path), DetectorConfig())

    def test_invalid_yaml(self):
        path = self._write("tlds: [xyz, top\nweights: {")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_top_level_must_be_mapping(self):
        path = self._write("- xyz\n- top\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_override_lists(self):
        path = self._write(
            "tlds: [XYZ, .zip]\n"
            "shorteners: [bit.ly, rb.gy]\n"
        )
        config = load_detector_config(str(path))

        self.assertEqual(config.suspicious_tlds, frozenset({"xyz", "zip"}))
        self.assertEqual(config.url_shorteners, ("bit.ly", "rb.gy"))

    def test_empty_shortener_entries_dropped(self):
        path = self._write("shorteners: ['', bit.ly]\n")
        config = load_detector_config(path)
        self.assertEqual(config.url_shorteners, ("bit.ly",))

    def test_override_thresholds_and_policy(self):
        path = self._write(
            "thresholds:\n"
            "  safe: 0.2\n"
            "  suspicious: 0.5\n"
            "  binary: 0.7\n"
            "noise: 0\n"
            "policy: two-class\n"
        )
        config = load_detector_config(path)

        self.assertEqual(config.safe_threshold, 0.2)
        self.assertEqual(config.suspicious_threshold, 0.5)
        self.assertEqual(config.binary_threshold, 0.7)
        self.assertEqual(config.noise_amplitude, 0.0)
        self.assertEqual(config.policy, VerdictPolicy.TWO_CLASS)

    def test_partial_override_keeps_defaults(self):
        path = self._write("thresholds:\n  binary: 0.5\n")
        config = load_detector_config(path)

        self.assertEqual(config.binary_threshold, 0.5)
        self.assertEqual(config.safe_threshold, 0.3)
        self.assertEqual(config.suspicious_tlds, SUSPICIOUS_TLDS)

    def test_override_weights(self):
        path = self._write("weights:\n  logistic: [" + ", ".join(["0.5"] * 11) + "]\n")
        config = load_detector_config(path)

        self.assertEqual(config.model_weights[ModelName.LOGISTIC], (0.5,) * 11)
        self.assertEqual(config.model_weights[ModelName.XGBOOST], MODEL_WEIGHTS[ModelName.XGBOOST])

    def test_weights_wrong_length(self):
        path = self._write("weights:\n  xgboost: [0.1, 0.2]\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_weights_unknown_model(self):
        path = self._write("weights:\n  forest: [" + ", ".join(["0.5"] * 11) + "]\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_weights_non_numeric(self):
        path = self._write("weights:\n  gaussian: [a, b, c, d, e, f, g, h, i, j, k]\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_weights_nan_rejected(self):
        path = self._write("weights:\n  xgboost: [.nan, " + ", ".join(["0.7"] * 10) + "]\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_noise_nan_rejected(self):
        path = self._write("noise: .nan\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_noise_infinite_rejected(self):
        path = self._write("noise: .inf\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_unknown_policy(self):
        path = self._write("policy: five-class\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_non_numeric_threshold(self):
        path = self._write("thresholds:\n  safe: low\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_thresholds_out_of_order(self):
        path = self._write("thresholds:\n  safe: 0.8\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)

    def test_tlds_must_be_list(self):
        path = self._write("tlds: xyz\n")
        with self.assertRaises(ConfigError):
            load_detector_config(path)


if __name__ == "__main__":
    unittest.main()
