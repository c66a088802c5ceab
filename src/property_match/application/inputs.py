"""Load candidate listings and preference profiles through the injected filesystem.

Candidates may be JSON (``{"candidates": [...]}``) or CSV (one row per listing,
``amenities`` separated by ``;``). Profiles are JSON and may name a preset.

Usage example:
    >>> from pathlib import Path
    >>> from property_match.application.inputs import load_candidates, load_profile
    >>> fs = ...  # Injected FileSystem from the CLI/composition root
    >>> candidates = load_candidates(Path("data/listings.csv"), fs)
    >>> profile = load_profile(Path("data/profile.json"), fs)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..domain.models import (
    BudgetRange,
    Candidate,
    Criterion,
    LocationFields,
    PreferenceProfile,
)
from ..domain.presets import build_profile_from_preset
from ..exceptions import (
    CandidateFileNotFoundError,
    CandidateFileValidationError,
    ProfileFileNotFoundError,
    ProfileFileValidationError,
)
from ..io_contracts import CandidateIO, ProfileIO
from ..io_validation import IncomingDataError, parse_candidate_rows, parse_candidates, parse_profile
from ..observability import get_logger
from ..protocols import FileSystem


def build_candidate(item: CandidateIO) -> Candidate:
    """Convert a validated candidate payload into a domain candidate."""
    return Candidate(
        candidate_id=item["id"],
        title=item["title"],
        location=LocationFields(
            address=item["address"] or None,
            city=item["city"] or None,
            state=item["state"] or None,
            country=item["country"] or None,
        ),
        price=item["price"],
        property_type=item["property_type"],
        bedroom_count=item["bedroom_count"],
        bathroom_count=item["bathroom_count"],
        amenities=frozenset(item["amenities"]),
        furnished=item["furnished"],
        available_from=item["available_from"],
    )


def build_profile(item: ProfileIO) -> PreferenceProfile:
    """Convert a validated profile payload into a domain profile.

    When a preset is named, only the fields present in the payload override it.
    """
    fields: dict[str, Any] = {}
    budget = item["budget"]
    if budget is not None:
        fields["budget"] = BudgetRange(minimum=budget["min"], maximum=budget["max"])
    if item["desired_types"]:
        fields["desired_types"] = frozenset(item["desired_types"])
    if item["desired_amenities"]:
        fields["desired_amenities"] = frozenset(item["desired_amenities"])
    if item["preferred_locations"]:
        fields["preferred_locations"] = tuple(item["preferred_locations"])
    if item["min_bedrooms"] is not None:
        fields["min_bedrooms"] = item["min_bedrooms"]
    if item["max_bedrooms"] is not None:
        fields["max_bedrooms"] = item["max_bedrooms"]
    weights = item["weights"]
    if weights is not None:
        fields["weights"] = {Criterion(name): value for name, value in weights.items()}
    if item["lifestyle"] is not None:
        fields["lifestyle"] = item["lifestyle"]
    if item["move_in_by"] is not None:
        fields["move_in_by"] = item["move_in_by"]

    preset = item["preset"]
    if preset is not None:
        return build_profile_from_preset(preset, **fields)
    return PreferenceProfile(**fields)


def _read_json(path: Path, fs: FileSystem) -> object:
    return json.loads(fs.read_text(path))


def load_candidates(path: Path, fs: FileSystem) -> list[Candidate]:
    """Load candidates from a JSON or CSV file."""
    logger = get_logger("property_match.inputs")
    if not fs.exists(path):
        raise CandidateFileNotFoundError(str(path))

    try:
        if path.suffix.lower() == ".csv":
            frame = fs.read_csv(path)
            rows = [
                {str(key): str(value) for key, value in row.items()}
                for row in frame.to_dict(orient="records")
            ]
            payloads = parse_candidate_rows(rows)
        else:
            payloads = parse_candidates(_read_json(path, fs))
    except (IncomingDataError, json.JSONDecodeError) as exc:
        raise CandidateFileValidationError(str(path), str(exc)) from exc

    candidates = [build_candidate(item) for item in payloads]
    logger.info("Loaded %s candidates from %s", len(candidates), path)
    return candidates


def load_profile(path: Path, fs: FileSystem) -> PreferenceProfile:
    """Load a preference profile from JSON."""
    if not fs.exists(path):
        raise ProfileFileNotFoundError(str(path))
    try:
        payload = parse_profile(_read_json(path, fs))
    except (IncomingDataError, json.JSONDecodeError) as exc:
        raise ProfileFileValidationError(str(path), str(exc)) from exc
    return build_profile(payload)
