"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .cli_progress import CliProgressReporter
from .config import MatchConfig
from .infrastructure import LocalFileSystem


def build_cli_dependencies(*, config: MatchConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Match configuration (a progress bar is only shown for threaded scoring).
    """
    progress = CliProgressReporter() if config.max_workers and config.max_workers > 1 else None
    return CliDependencies(fs=LocalFileSystem(), progress=progress)


app = create_app(build_cli_dependencies)
