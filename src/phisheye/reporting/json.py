"""JSON export for classification results.

This module serializes EnsembleResult objects for programmatic
consumption, with custom encoding for enum, dataclass and Path values.
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable

from phisheye import __version__
from phisheye.core.exceptions import ExportError
from phisheye.core.models import EnsembleResult


class ResultJSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for result objects.

    Handles serialization of Enum, dataclass, datetime and Path objects.
    """

    def default(self, o):
        if isinstance(o, Enum):
            return o.value

        if is_dataclass(o) and not isinstance(o, type):
            return asdict(o)

        if isinstance(o, datetime):
            return o.isoformat()

        if isinstance(o, Path):
            return str(o)

        return super().default(o)


def build_document(results: Iterable[EnsembleResult]) -> dict:
    """Build the JSON document for a batch of results."""
    results = list(results)
    return {
        "metadata": {
            "generated_at": datetime.now(timezone.utc),
            "generator": "PhishEye",
            "version": __version__,
            "total": len(results),
        },
        "results": [result.to_dict() for result in results],
    }


def dumps(results: Iterable[EnsembleResult]) -> str:
    """Serialize results to a JSON string."""
    return json.dumps(build_document(results), cls=ResultJSONEncoder, indent=2)


def export_results(results: Iterable[EnsembleResult], output_path: Path) -> None:
    """Export results to a JSON file.

    Args:
        results: Results to export
        output_path: Path where the JSON file will be written

    Raises:
        ExportError: If export fails
    """
    try:
        data = build_document(results)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with output_path.open("w", encoding="utf-8") as f:
            json.dump(
                data,
                f,
                cls=ResultJSONEncoder,
                indent=2,
                ensure_ascii=False,
            )

    except (OSError, TypeError, ValueError) as e:
        raise ExportError(f"Failed to export JSON results: {e}") from e
