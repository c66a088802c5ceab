"""Tests for CLI composition root wiring."""

from __future__ import annotations

import typer

from property_match import composition
from property_match.cli_progress import CliProgressReporter
from property_match.config import MatchConfig
from property_match.infrastructure import LocalFileSystem


def test_build_cli_dependencies_sequential_has_no_progress() -> None:
    deps = composition.build_cli_dependencies(config=MatchConfig())

    assert isinstance(deps.fs, LocalFileSystem)
    assert deps.progress is None


def test_build_cli_dependencies_threaded_reports_progress() -> None:
    deps = composition.build_cli_dependencies(config=MatchConfig(max_workers=4))

    assert isinstance(deps.fs, LocalFileSystem)
    assert isinstance(deps.progress, CliProgressReporter)


def test_app_is_a_typer_application() -> None:
    assert isinstance(composition.app, typer.Typer)
