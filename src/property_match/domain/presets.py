"""Preset preference templates offered by the recommendation wizard."""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from ..exceptions import ConfigurationError
from .models import PreferenceProfile


@dataclass(frozen=True)
class ProfilePreset:
    """Starting point for a profile; callers add budget and locations."""

    name: str
    desired_types: frozenset[str]
    desired_amenities: frozenset[str]
    lifestyle: str


PROFILE_PRESETS: MappingProxyType[str, ProfilePreset] = MappingProxyType(
    {
        "student": ProfilePreset(
            name="student",
            desired_types=frozenset({"apartment", "studio"}),
            desired_amenities=frozenset({"wifi", "study area", "public transport"}),
            lifestyle="minimalist",
        ),
        "young_professional": ProfilePreset(
            name="young_professional",
            desired_types=frozenset({"apartment", "condo"}),
            desired_amenities=frozenset({"gym", "wifi", "parking", "security"}),
            lifestyle="modern",
        ),
        "family": ProfilePreset(
            name="family",
            desired_types=frozenset({"house", "duplex"}),
            desired_amenities=frozenset({"garden", "parking", "schools nearby", "playground"}),
            lifestyle="family",
        ),
        "luxury_seeker": ProfilePreset(
            name="luxury_seeker",
            desired_types=frozenset({"penthouse", "luxury apartment"}),
            desired_amenities=frozenset({"pool", "concierge", "gym", "spa", "valet"}),
            lifestyle="luxury",
        ),
    }
)


def build_profile_from_preset(name: str, **overrides: Any) -> PreferenceProfile:
    """Build a profile from a named preset, with keyword overrides applied on top.

    Raises:
        ConfigurationError: If the preset name is unknown.
    """
    preset = PROFILE_PRESETS.get(name.strip().lower())
    if preset is None:
        available = ", ".join(sorted(PROFILE_PRESETS))
        raise ConfigurationError(f"unknown preset '{name}' (available: {available})")
    base = PreferenceProfile(
        desired_types=preset.desired_types,
        desired_amenities=preset.desired_amenities,
        lifestyle=preset.lifestyle,
    )
    return replace(base, **overrides)


def apply_preset(profile: PreferenceProfile, name: str) -> PreferenceProfile:
    """Fill the types, amenities and lifestyle a profile leaves empty from a preset.

    Raises:
        ConfigurationError: If the preset name is unknown.
    """
    preset = build_profile_from_preset(name)
    return replace(
        profile,
        desired_types=profile.desired_types or preset.desired_types,
        desired_amenities=profile.desired_amenities or preset.desired_amenities,
        lifestyle=profile.lifestyle or preset.lifestyle,
    )
