"""Custom exceptions for the property match engine.

These exceptions provide clear error handling and enable testing of error paths.
"""

from __future__ import annotations


class MatchEngineError(Exception):
    """Base exception for all match engine errors."""

    pass


class ConfigurationError(MatchEngineError, ValueError):
    """Raised when scoring configuration is malformed.

    Covers weight tables (negative, non-finite or all-zero weights), budget and
    bedroom ranges, tier thresholds and unknown presets. The engine never
    substitutes defaults for a configuration the caller chose to supply.
    """

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid scoring configuration: {message}")


class WeightTableFileNotFoundError(MatchEngineError, FileNotFoundError):
    """Raised when a weight table catalogue file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Weight table catalogue not found: {path}\n"
            "Set MATCH_WEIGHT_TABLES to a valid JSON file or omit it to use the defaults."
        )


class WeightTableValidationError(MatchEngineError, ValueError):
    """Raised when a weight table catalogue fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid weight table catalogue {path}: {detail}")


class WeightTableSelectionError(MatchEngineError, ValueError):
    """Raised when a requested weight table is not in the catalogue."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        choices = ", ".join(available) if available else "<none>"
        super().__init__(f"Unknown weight table '{name}'. Available tables: {choices}")


class CandidateFileNotFoundError(MatchEngineError, FileNotFoundError):
    """Raised when a candidate listing file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Candidate file not found: {path}")


class CandidateFileValidationError(MatchEngineError, ValueError):
    """Raised when a candidate listing file fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid candidate file {path}: {detail}")


class ProfileFileNotFoundError(MatchEngineError, FileNotFoundError):
    """Raised when a preference profile file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Preference profile not found: {path}")


class ProfileFileValidationError(MatchEngineError, ValueError):
    """Raised when a preference profile file fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid preference profile {path}: {detail}")


class ConfigFileNotFoundError(MatchEngineError, FileNotFoundError):
    """Raised when a TOML config file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(MatchEngineError, ValueError):
    """Raised when a TOML config file cannot be parsed."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Could not parse config file {path}: {detail}")


class ConfigFileValidationError(MatchEngineError, ValueError):
    """Raised when a TOML config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid config file {path}: {detail}")
