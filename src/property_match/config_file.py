"""Typed parsing and validation for match engine config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1
_BEST_FIELD_POLICIES = frozenset({"first_match", "address_priority"})


@dataclass(frozen=True)
class MatchConfigFile:
    """Validated config values loaded from a TOML file."""

    weight_tables_path: str | None = None
    weight_table_name: str | None = None
    min_score: float | None = None
    result_limit: int | None = None
    search_limit: int | None = None
    best_field_policy: str | None = None
    max_workers: int | None = None


class _MatchingSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    weight_tables_path: str | None = None
    weight_table_name: str | None = None
    min_score: float | None = None
    result_limit: int | None = None
    search_limit: int | None = None
    best_field_policy: str | None = None
    max_workers: int | None = None

    @field_validator("weight_tables_path", "weight_table_name")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("best_field_policy")
    @classmethod
    def _validate_policy(cls, value: str | None) -> str | None:
        if value is None:
            return None
        policy = value.strip().lower()
        if policy not in _BEST_FIELD_POLICIES:
            raise ValueError
        return policy

    @field_validator("result_limit", "search_limit", "max_workers")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("min_score")
    @classmethod
    def _validate_score_range(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value < 0.0 or value > 100.0:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    matching: _MatchingSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc") or ("<root>",))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_match_config_file(*, path: Path, fs: FileSystem) -> MatchConfigFile:
    """Load and validate a match engine TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.matching
    return MatchConfigFile(
        weight_tables_path=section.weight_tables_path,
        weight_table_name=section.weight_table_name,
        min_score=section.min_score,
        result_limit=section.result_limit,
        search_limit=section.search_limit,
        best_field_policy=section.best_field_policy,
        max_workers=section.max_workers,
    )
