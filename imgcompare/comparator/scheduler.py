"""
Fan-out scheduling for the comparator package.

Runs one unit of work per source image on a thread pool. Each unit walks the
whole candidate list, progressively compares every eligible candidate with
its source and hands scores and matches to the shared aggregator.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, Future, as_completed
from typing import Optional, Sequence, Any

from ..errors import ImageDecodeError, InvalidSourcePathError, NoValidSourcesError
from ..models import ComparisonSettings, MatchRecord, RunStats
from .aggregator import MatchAggregator
from .dependencies import HAS_TQDM, _tqdm_class, _logger
from .engine import load_raster
from .file_discovery import is_supported_image, exceeds_size_limit
from .progressive import progressive_compare


def _canonical(path: str) -> str:
    return os.path.normcase(os.path.realpath(path))


def match_source(
    source_path: str,
    candidates: Sequence[str],
    settings: ComparisonSettings,
    aggregator: MatchAggregator,
    cancel_event: Optional[threading.Event] = None,
    logger: Optional[logging.Logger] = None,
) -> RunStats:
    """
    Compare one source image against every eligible candidate.

    Args:
        source_path: Absolute path of the source image
        candidates: Candidate file paths (read only)
        settings: Comparison parameters
        aggregator: Receives streamed scores and confirmed matches
        cancel_event: Checked before each candidate; stops the unit when set
        logger: Logger for diagnostics

    Returns:
        RunStats for this unit

    Notes:
        - Decode failures are logged and skipped, never raised
        - Oversized candidates are skipped before decoding
        - A candidate that is the source itself is never recorded as a match
    """
    logger = logger or _logger
    stats = RunStats()

    if cancel_event is not None and cancel_event.is_set():
        stats.cancelled = True
        return stats

    try:
        source = load_raster(source_path)
    except ImageDecodeError as e:
        logger.warning(f"Skipping source: {e}")
        stats.decode_failures += 1
        stats.sources_skipped += 1
        return stats

    source_canonical = _canonical(source_path)

    try:
        for candidate_path in candidates:
            if cancel_event is not None and cancel_event.is_set():
                stats.cancelled = True
                break

            if not is_supported_image(candidate_path, settings.extensions):
                continue

            try:
                if exceeds_size_limit(candidate_path, settings.max_candidate_bytes):
                    logger.debug(f"Skipping oversized candidate: {candidate_path}")
                    stats.candidates_too_large += 1
                    continue
                test = load_raster(candidate_path)
            except ImageDecodeError as e:
                logger.warning(f"Skipping candidate: {e}")
                stats.decode_failures += 1
                continue
            except OSError as e:
                logger.warning(f"Skipping candidate: cannot read {candidate_path}: {e}")
                stats.decode_failures += 1
                continue

            try:
                result = progressive_compare(
                    source,
                    test,
                    settings.tolerance,
                    settings.threshold,
                    settings.ladder,
                )
            finally:
                test.close()

            stats.candidates_compared += 1
            candidate_abs = os.path.abspath(candidate_path)
            aggregator.stream_score(candidate_abs, result.score)

            if result.is_full_match and _canonical(candidate_abs) != source_canonical:
                aggregator.record(MatchRecord(
                    source_path=source_path,
                    candidate_path=candidate_abs,
                    score=result.score,
                ))
                stats.matches += 1
    finally:
        source.close()

    return stats


def run_all(
    sources: Sequence[str],
    candidates: Sequence[str],
    settings: Optional[ComparisonSettings] = None,
    aggregator: Optional[MatchAggregator] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    show_progress: bool = False,
    logger: Optional[logging.Logger] = None,
) -> RunStats:
    """
    Match every source against the candidate list concurrently.

    Args:
        sources: Source image paths; repeats of the same absolute path run once
        candidates: Candidate file paths, shared read-only by all units
        settings: Comparison parameters (defaults from config)
        aggregator: Collects matches; a console-backed one is created if omitted
        max_workers: Pool size; None or 0 runs one worker per source
        cancel_event: Set to stop all units between candidates
        show_progress: Whether to show tqdm progress bar over sources
        logger: Optional logger for diagnostics

    Returns:
        RunStats summed over all units

    Raises:
        NoValidSourcesError: If no source path resolved to an existing file
    """
    settings = settings or ComparisonSettings()
    aggregator = aggregator if aggregator is not None else MatchAggregator()
    cancel_event = cancel_event or threading.Event()
    logger = logger or _logger

    frozen_candidates = tuple(candidates)
    stats = RunStats(sources_total=len(sources))

    valid_sources: list[str] = []
    for source in sources:
        resolved = os.path.abspath(source)
        if not os.path.isfile(resolved):
            logger.warning(str(InvalidSourcePathError(source)))
            stats.sources_skipped += 1
            continue
        if resolved in valid_sources:
            logger.debug(f"Ignoring repeated source: {source}")
            continue
        valid_sources.append(resolved)

    if not valid_sources:
        raise NoValidSourcesError("No valid source images to compare")

    stats.sources_scheduled = len(valid_sources)
    workers = max_workers or len(valid_sources)
    logger.info(
        f"Comparing {len(valid_sources):,} sources against {len(frozen_candidates):,} "
        f"candidates with {min(workers, len(valid_sources))} workers"
    )

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(
            total=len(valid_sources),
            desc="Matching sources",
            unit="src",
            ncols=80,
        )

    pending: dict[Future, str] = {}

    def collect(future: Future) -> None:
        source = pending.pop(future)
        try:
            stats.merge(future.result())
        except Exception as e:
            logger.error(f"Worker for {source} failed: {e}")
            stats.unit_failures += 1
        if pbar is not None:
            pbar.update(1)

    try:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for source in valid_sources:
                future = executor.submit(
                    match_source,
                    source,
                    frozen_candidates,
                    settings,
                    aggregator,
                    cancel_event,
                    logger,
                )
                pending[future] = source

            try:
                for future in as_completed(list(pending)):
                    collect(future)
            except KeyboardInterrupt:
                logger.warning("Interrupted, stopping workers after their current candidate...")
                cancel_event.set()
                for future in list(pending):
                    collect(future)
    finally:
        if pbar is not None:
            pbar.close()

    stats.cancelled = stats.cancelled or cancel_event.is_set()
    return stats


__all__ = ['match_source', 'run_all']
