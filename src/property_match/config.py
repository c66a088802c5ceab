"""Centralised, injectable configuration for the property match engine.

The scoring core never reads this; entry points load it once and pass plain
values (weight tables, limits, policies) into the application functions.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import MatchConfigFile
from .domain.location_matching import BestFieldPolicy


class PositiveIntegerEnvVarError(ValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class ScoreEnvVarError(ValueError):
    """Raised when an environment variable must be a score between 0 and 100."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a number between 0 and 100.")


class BestFieldPolicyEnvVarError(ValueError):
    """Raised when the best-field policy is not a supported value."""

    def __init__(self, env_name: str) -> None:
        choices = ", ".join(policy.value for policy in BestFieldPolicy)
        super().__init__(f"{env_name} must be one of: {choices}.")


@dataclass(frozen=True)
class MatchConfig:
    """Immutable configuration object for search and recommendation runs.

    Load from environment with `MatchConfig.from_env()` or construct directly for testing.
    """

    # Weight tables
    weight_tables_path: str = ""
    weight_table_name: str = ""

    # Recommendations
    min_score: float = 20.0
    result_limit: int = 10

    # Location search
    search_limit: int = 20
    best_field_policy: BestFieldPolicy = BestFieldPolicy.FIRST_MATCH

    # Batch scoring (None = score sequentially)
    max_workers: int | None = None

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            MatchConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            weight_tables_path=os.getenv("MATCH_WEIGHT_TABLES", "").strip(),
            weight_table_name=os.getenv("MATCH_WEIGHT_TABLE", "").strip(),
            min_score=_parse_score(
                os.getenv("MATCH_MIN_SCORE", "20"), env_name="MATCH_MIN_SCORE"
            ),
            result_limit=_parse_positive_int(
                os.getenv("MATCH_RESULT_LIMIT", "10"), env_name="MATCH_RESULT_LIMIT"
            ),
            search_limit=_parse_positive_int(
                os.getenv("MATCH_SEARCH_LIMIT", "20"), env_name="MATCH_SEARCH_LIMIT"
            ),
            best_field_policy=_parse_policy(
                os.getenv("MATCH_BEST_FIELD_POLICY", ""), env_name="MATCH_BEST_FIELD_POLICY"
            ),
            max_workers=_parse_optional_positive_int(
                os.getenv("MATCH_MAX_WORKERS", ""), env_name="MATCH_MAX_WORKERS"
            ),
        )

    def with_overrides(
        self,
        *,
        weight_table_name: str | None = None,
        min_score: float | None = None,
        result_limit: int | None = None,
        search_limit: int | None = None,
        best_field_policy: BestFieldPolicy | None = None,
        max_workers: int | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            weight_table_name=self.weight_table_name
            if weight_table_name is None
            else weight_table_name.strip(),
            min_score=self.min_score if min_score is None else min_score,
            result_limit=self.result_limit if result_limit is None else result_limit,
            search_limit=self.search_limit if search_limit is None else search_limit,
            best_field_policy=self.best_field_policy
            if best_field_policy is None
            else best_field_policy,
            max_workers=self.max_workers if max_workers is None else max_workers,
        )

    def with_file_overrides(self, file_config: MatchConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            weight_tables_path=self.weight_tables_path
            if file_config.weight_tables_path is None
            else file_config.weight_tables_path,
            weight_table_name=self.weight_table_name
            if file_config.weight_table_name is None
            else file_config.weight_table_name,
            min_score=self.min_score if file_config.min_score is None else file_config.min_score,
            result_limit=self.result_limit
            if file_config.result_limit is None
            else file_config.result_limit,
            search_limit=self.search_limit
            if file_config.search_limit is None
            else file_config.search_limit,
            best_field_policy=self.best_field_policy
            if file_config.best_field_policy is None
            else BestFieldPolicy(file_config.best_field_policy),
            max_workers=self.max_workers
            if file_config.max_workers is None
            else file_config.max_workers,
        )


def _parse_positive_int(value: str, *, env_name: str) -> int:
    """Parse a required positive integer from an environment variable."""
    parsed = _parse_optional_positive_int(value, env_name=env_name)
    if parsed is None:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_optional_positive_int(value: str, *, env_name: str) -> int | None:
    """Parse an optional positive integer from an environment variable."""
    text = value.strip()
    if not text:
        return None
    try:
        parsed = int(text)
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_score(value: str, *, env_name: str) -> float:
    """Parse a 0–100 score from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise ScoreEnvVarError(env_name) from exc
    if not 0.0 <= parsed <= 100.0:
        raise ScoreEnvVarError(env_name)
    return parsed


def _parse_policy(value: str, *, env_name: str) -> BestFieldPolicy:
    """Parse the best-field policy, defaulting to first_match."""
    text = value.strip().lower()
    if not text:
        return BestFieldPolicy.FIRST_MATCH
    try:
        return BestFieldPolicy(text)
    except ValueError as exc:
        raise BestFieldPolicyEnvVarError(env_name) from exc
