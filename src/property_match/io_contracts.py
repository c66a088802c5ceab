"""Boundary-neutral IO contracts for inbound candidate and profile payloads.

Usage example:
    from property_match.io_contracts import CandidateIO

    candidate: CandidateIO = {
        "id": "p-1",
        "title": "Two-bed flat",
        "address": "24 Marina Road",
        "city": "Lagos",
        "state": "Lagos",
        "country": "Nigeria",
        "price": 1200.0,
        "property_type": "apartment",
        "bedroom_count": 2,
        "bathroom_count": 1,
        "amenities": ["wifi", "parking"],
        "furnished": False,
        "available_from": None,
    }
"""

from __future__ import annotations

from datetime import date
from typing import TypedDict


class CandidateIO(TypedDict):
    """Validated property listing payload shape."""

    id: str
    title: str
    address: str
    city: str
    state: str
    country: str
    price: float | None
    property_type: str
    bedroom_count: int
    bathroom_count: int
    amenities: list[str]
    furnished: bool
    available_from: date | None


class BudgetIO(TypedDict):
    """Validated budget range payload shape."""

    min: float
    max: float


class ProfileIO(TypedDict):
    """Validated preference profile payload shape."""

    preset: str | None
    budget: BudgetIO | None
    desired_types: list[str]
    min_bedrooms: int | None
    max_bedrooms: int | None
    desired_amenities: list[str]
    preferred_locations: list[str]
    weights: dict[str, float] | None
    lifestyle: str | None
    move_in_by: date | None
