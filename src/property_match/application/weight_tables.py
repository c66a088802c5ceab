"""Loading and strict validation for weight table catalogues.

Catalogue format (JSON):
    {
        "schema_version": 1,
        "default_table": "balanced",
        "tables": [
            {
                "name": "balanced",
                "weights": {"location": 0.3, "price": 0.25, "type": 0.15,
                            "bedrooms": 0.1, "amenities": 0.2},
                "tier_thresholds": {"exact": 90, "high": 70, "partial": 40}
            }
        ]
    }
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.models import Criterion
from ..domain.weights import (
    DEFAULT_TIER_THRESHOLDS,
    DEFAULT_WEIGHT_TABLE,
    TierThresholds,
    WeightTable,
    build_weight_table,
)
from ..exceptions import (
    WeightTableFileNotFoundError,
    WeightTableSelectionError,
    WeightTableValidationError,
)
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class NamedWeightTable:
    """A weight table with the tier thresholds it should be scored with."""

    table: WeightTable
    tier_thresholds: TierThresholds

    @property
    def name(self) -> str:
        return self.table.name


@dataclass(frozen=True)
class WeightTableCatalog:
    """Named weight tables bundled in a single schema version."""

    schema_version: int
    default_table: str
    tables: tuple[NamedWeightTable, ...]


DEFAULT_NAMED_TABLE = NamedWeightTable(
    table=DEFAULT_WEIGHT_TABLE, tier_thresholds=DEFAULT_TIER_THRESHOLDS
)


class _TierThresholdsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    exact: float
    high: float
    partial: float

    @field_validator("exact", "high", "partial")
    @classmethod
    def _validate_range(cls, value: float) -> float:
        if value < 0.0 or value > 100.0:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_order(self) -> _TierThresholdsModel:
        if not self.exact > self.high > self.partial:
            raise ValueError
        return self


class _WeightTableModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    weights: dict[str, float]
    tier_thresholds: _TierThresholdsModel | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("weights")
    @classmethod
    def _validate_weights(cls, value: dict[str, float]) -> dict[str, float]:
        known = {criterion.value for criterion in Criterion}
        cleaned: dict[str, float] = {}
        for key, weight in value.items():
            name = key.strip().lower()
            if name not in known:
                raise ValueError
            if not math.isfinite(weight) or weight < 0.0:
                raise ValueError
            cleaned[name] = weight
        if sum(cleaned.values()) <= 0.0:
            raise ValueError
        return cleaned


class _WeightTableCatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    default_table: str
    tables: tuple[_WeightTableModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @field_validator("default_table")
    @classmethod
    def _validate_default_table(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @model_validator(mode="after")
    def _validate_tables(self) -> _WeightTableCatalogModel:
        if not self.tables:
            raise ValueError
        names = [table.name for table in self.tables]
        if len(set(names)) != len(names):
            raise ValueError
        if self.default_table not in set(names):
            raise ValueError
        return self


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc") or ("<root>",))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def _to_domain_table(model: _WeightTableModel) -> NamedWeightTable:
    weights = {Criterion(name): weight for name, weight in model.weights.items()}
    thresholds = (
        TierThresholds(
            exact=model.tier_thresholds.exact,
            high=model.tier_thresholds.high,
            partial=model.tier_thresholds.partial,
        )
        if model.tier_thresholds is not None
        else DEFAULT_TIER_THRESHOLDS
    )
    return NamedWeightTable(
        table=build_weight_table(model.name, weights),
        tier_thresholds=thresholds,
    )


def load_weight_table_catalog(*, path: Path, fs: FileSystem) -> WeightTableCatalog:
    """Load and validate a weight table catalogue from JSON."""
    if not fs.exists(path):
        raise WeightTableFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _WeightTableCatalogModel.model_validate_json(payload)
    except ValidationError as exc:
        raise WeightTableValidationError(str(path), _format_validation_error(exc)) from exc

    return WeightTableCatalog(
        schema_version=model.schema_version,
        default_table=model.default_table,
        tables=tuple(_to_domain_table(table) for table in model.tables),
    )


def resolve_weight_table(
    catalog: WeightTableCatalog,
    table_name: str | None = None,
) -> NamedWeightTable:
    """Resolve one table by name, defaulting to the catalogue default table."""
    target = (table_name or catalog.default_table).strip()
    if not target:
        target = catalog.default_table

    for table in catalog.tables:
        if table.name == target:
            return table

    available = tuple(sorted(table.name for table in catalog.tables))
    raise WeightTableSelectionError(target, available)


def select_weight_table(
    *,
    path: str,
    table_name: str,
    fs: FileSystem,
) -> NamedWeightTable:
    """Pick the table for a run: the built-in default when no catalogue is configured."""
    if not path:
        if table_name and table_name != DEFAULT_NAMED_TABLE.name:
            raise WeightTableSelectionError(table_name, (DEFAULT_NAMED_TABLE.name,))
        return DEFAULT_NAMED_TABLE
    catalog = load_weight_table_catalog(path=Path(path), fs=fs)
    return resolve_weight_table(catalog, table_name or None)
