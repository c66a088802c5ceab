"""Shared weight table catalogue fixtures for tests."""

from __future__ import annotations

import json
from pathlib import Path

from property_match.protocols import FileSystem


def weight_table_catalog_payload() -> dict[str, object]:
    """Return a valid two-table catalogue payload."""
    return {
        "schema_version": 1,
        "default_table": "balanced",
        "tables": [
            {
                "name": "balanced",
                "weights": {
                    "location": 0.3,
                    "price": 0.25,
                    "type": 0.15,
                    "bedrooms": 0.1,
                    "amenities": 0.2,
                },
            },
            {
                "name": "budget_first",
                "weights": {"location": 1.0, "price": 3.0},
                "tier_thresholds": {"exact": 95, "high": 80, "partial": 50},
            },
        ],
    }


def write_weight_table_catalog(
    *, fs: FileSystem, path: Path, payload: dict[str, object] | None = None
) -> None:
    """Write a weight table catalogue to the given filesystem path."""
    fs.write_text(json.dumps(payload or weight_table_catalog_payload()), path)
