"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from typing import TypeVar

from typing_extensions import TypedDict

from pydantic import TypeAdapter, ValidationError

from .domain.models import Criterion
from .io_contracts import BudgetIO, CandidateIO, ProfileIO


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class CandidateInput(TypedDict, total=False):
    id: str | int | None
    title: str | None
    address: str | None
    city: str | None
    state: str | None
    country: str | None
    price: float | None
    property_type: str | None
    bedroom_count: int | None
    bathroom_count: int | None
    amenities: list[str] | None
    furnished: bool | None
    available_from: date | None


class CandidatesFileInput(TypedDict, total=False):
    candidates: list[CandidateInput]


class BudgetInput(TypedDict, total=False):
    min: float | None
    max: float | None


class ProfileInput(TypedDict, total=False):
    preset: str | None
    budget: BudgetInput | None
    desired_types: list[str] | None
    min_bedrooms: int | None
    max_bedrooms: int | None
    desired_amenities: list[str] | None
    preferred_locations: list[str] | None
    weights: dict[str, float] | None
    lifestyle: str | None
    move_in_by: date | None


SchemaT = TypeVar("SchemaT")


def validate_as(schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def _as_str(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _optional_str(value: object) -> str | None:
    text = _as_str(value)
    return text or None


def _as_str_list(value: Iterable[str] | None) -> list[str]:
    if value is None:
        return []
    cleaned: list[str] = []
    for item in value:
        text = item.strip()
        if text:
            cleaned.append(text)
    return cleaned


def _to_candidate_io(item: CandidateInput, position: int) -> CandidateIO:
    raw_id = item.get("id")
    candidate_id = str(raw_id).strip() if raw_id is not None else ""
    if not candidate_id:
        raise IncomingDataError(f"Candidate at position {position} has no id.")
    return {
        "id": candidate_id,
        "title": _as_str(item.get("title")),
        "address": _as_str(item.get("address")),
        "city": _as_str(item.get("city")),
        "state": _as_str(item.get("state")),
        "country": _as_str(item.get("country")),
        "price": item.get("price"),
        "property_type": _as_str(item.get("property_type")),
        "bedroom_count": item.get("bedroom_count") or 0,
        "bathroom_count": item.get("bathroom_count") or 0,
        "amenities": _as_str_list(item.get("amenities")),
        "furnished": bool(item.get("furnished")),
        "available_from": item.get("available_from"),
    }


def parse_candidates(payload: object) -> list[CandidateIO]:
    """Validate a ``{"candidates": [...]}`` document into candidate payloads."""
    document = validate_as(CandidatesFileInput, payload)
    items = document.get("candidates", [])
    candidates = [_to_candidate_io(item, position) for position, item in enumerate(items)]
    _check_unique_ids(candidates)
    return candidates


def parse_candidate_rows(rows: Iterable[Mapping[str, str]]) -> list[CandidateIO]:
    """Validate CSV rows (all strings) into candidate payloads.

    Blank cells are treated as missing and ``amenities`` is split on ``;``.
    """
    items: list[object] = []
    for row in rows:
        item: dict[str, object] = {
            key: value.strip() for key, value in row.items() if value and value.strip()
        }
        amenities = item.get("amenities")
        if isinstance(amenities, str):
            item["amenities"] = [part for part in amenities.split(";") if part.strip()]
        items.append(item)
    return parse_candidates({"candidates": items})


def _check_unique_ids(candidates: list[CandidateIO]) -> None:
    seen: set[str] = set()
    for candidate in candidates:
        if candidate["id"] in seen:
            raise IncomingDataError(f"Duplicate candidate id: {candidate['id']}")
        seen.add(candidate["id"])


def _to_budget_io(budget: BudgetInput | None) -> BudgetIO | None:
    if budget is None:
        return None
    minimum = budget.get("min")
    maximum = budget.get("max")
    if minimum is None and maximum is None:
        return None
    if maximum is None:
        raise IncomingDataError("Budget requires a max value.")
    return {"min": minimum or 0.0, "max": maximum}


def _to_weights(weights: dict[str, float] | None) -> dict[str, float] | None:
    if weights is None:
        return None
    known = {criterion.value for criterion in Criterion}
    cleaned: dict[str, float] = {}
    for key, value in weights.items():
        name = key.strip().lower()
        if name not in known:
            raise IncomingDataError(f"Unknown weight criterion: {key}")
        cleaned[name] = value
    return cleaned


def parse_profile(payload: object) -> ProfileIO:
    """Validate a preference profile document.

    An absent ``weights`` key stays ``None`` (use defaults); an explicit mapping
    is passed through for strict validation by the scorer.
    """
    item = validate_as(ProfileInput, payload)
    return {
        "preset": _optional_str(item.get("preset")),
        "budget": _to_budget_io(item.get("budget")),
        "desired_types": _as_str_list(item.get("desired_types")),
        "min_bedrooms": item.get("min_bedrooms"),
        "max_bedrooms": item.get("max_bedrooms"),
        "desired_amenities": _as_str_list(item.get("desired_amenities")),
        "preferred_locations": _as_str_list(item.get("preferred_locations")),
        "weights": _to_weights(item.get("weights")),
        "lifestyle": _optional_str(item.get("lifestyle")),
        "move_in_by": item.get("move_in_by"),
    }
