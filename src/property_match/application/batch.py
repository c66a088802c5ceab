"""Batch scoring of candidates with cooperative cancellation.

Usage example:
    from functools import partial

    from property_match.application.batch import score_batch
    from property_match.domain.recommendation import score

    results = score_batch(candidates, partial(score, profile), max_workers=4)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from ..domain.models import Candidate, MatchResult
from ..observability import get_logger
from ..protocols import ProgressReporter


def _stop_requested(should_stop: Callable[[], bool] | None) -> bool:
    return should_stop is not None and should_stop()


def score_batch(
    candidates: Iterable[Candidate],
    score_one: Callable[[Candidate], MatchResult],
    *,
    should_stop: Callable[[], bool] | None = None,
    max_workers: int | None = None,
    progress: ProgressReporter | None = None,
) -> list[MatchResult]:
    """Score candidates, keeping input order.

    ``should_stop`` is checked before each candidate is submitted. Once it returns
    True no further candidates are scored; results already produced are returned.

    Args:
        candidates: Candidates to score.
        score_one: Pure scorer for a single candidate.
        should_stop: Optional cancellation check.
        max_workers: Thread count; None or 1 scores sequentially.
        progress: Optional progress reporter.

    Returns:
        One result per scored candidate, in input order.
    """
    logger = get_logger("property_match.batch")
    items = list(candidates)
    if progress is not None:
        progress.start("Scoring candidates", len(items))

    try:
        if max_workers is None or max_workers <= 1:
            results = _score_sequential(items, score_one, should_stop, progress)
        else:
            results = _score_threaded(items, score_one, should_stop, progress, max_workers)
    finally:
        if progress is not None:
            progress.finish()

    if len(results) < len(items):
        logger.info("Batch stopped after %s of %s candidates", len(results), len(items))
    else:
        logger.info("Scored %s candidates", len(results))
    return results


def _score_sequential(
    items: list[Candidate],
    score_one: Callable[[Candidate], MatchResult],
    should_stop: Callable[[], bool] | None,
    progress: ProgressReporter | None,
) -> list[MatchResult]:
    results: list[MatchResult] = []
    for candidate in items:
        if _stop_requested(should_stop):
            break
        results.append(score_one(candidate))
        if progress is not None:
            progress.advance(1)
    return results


def _score_threaded(
    items: list[Candidate],
    score_one: Callable[[Candidate], MatchResult],
    should_stop: Callable[[], bool] | None,
    progress: ProgressReporter | None,
    max_workers: int,
) -> list[MatchResult]:
    futures: list[Future[MatchResult]] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for candidate in items:
            if _stop_requested(should_stop):
                break
            futures.append(executor.submit(score_one, candidate))

        results: list[MatchResult] = []
        for future in futures:
            results.append(future.result())
            if progress is not None:
                progress.advance(1)
    return results
