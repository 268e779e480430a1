"""PhishEye - heuristic phishing URL classifier."""

__version__ = "0.1.0"
