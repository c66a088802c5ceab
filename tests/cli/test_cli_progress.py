"""Tests for the rich progress reporter."""

from __future__ import annotations

import io

from rich.console import Console
from rich.progress import Progress

from property_match.cli_progress import CliProgressReporter


def _reporter() -> CliProgressReporter:
    console = Console(file=io.StringIO(), force_terminal=False)
    return CliProgressReporter(_progress=Progress(console=console, transient=True))


def test_progress_tracks_task_lifecycle() -> None:
    reporter = _reporter()

    reporter.start("Scoring candidates", 3)
    reporter.advance(2)
    task = reporter._progress.tasks[0]
    assert task.completed == 2
    assert task.total == 3

    reporter.finish()

    assert reporter._task_id is None
    assert reporter._progress.tasks == []


def test_advance_and_finish_without_start_are_noops() -> None:
    reporter = _reporter()

    reporter.advance(1)
    reporter.finish()

    assert reporter._task_id is None
