"""Tabular export of match results.

Usage example:
    >>> from pathlib import Path
    >>> from property_match.application.export import write_results_csv
    >>> fs = ...  # Injected FileSystem from the CLI/composition root
    >>> write_results_csv(results, Path("out/recommendations.csv"), fs)
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..domain.models import MatchResult
from ..observability import get_logger
from ..protocols import FileSystem

RESULT_COLUMNS = ("candidate_id", "score", "tier", "label", "top_reasons")
REASON_SEPARATOR = "; "


def results_to_frame(results: Iterable[MatchResult]) -> pd.DataFrame:
    """Flatten results into a DataFrame, one row per result, order preserved."""
    rows = [
        {
            "candidate_id": result.candidate_id,
            "score": result.score,
            "tier": result.tier.value,
            "label": result.label,
            "top_reasons": REASON_SEPARATOR.join(result.top_reasons),
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=list(RESULT_COLUMNS))


def write_results_csv(results: Iterable[MatchResult], path: Path, fs: FileSystem) -> Path:
    """Write results to CSV and return the output path."""
    logger = get_logger("property_match.export")
    frame = results_to_frame(results)
    fs.write_csv(frame, path)
    logger.info("Wrote %s results to %s", len(frame), path)
    return path
