"""
Report formatting and display for the CLI interface.

Prints the final matches block once every worker has finished.
"""

from __future__ import annotations

import logging

from ..comparator import MatchAggregator
from ..models import RunStats


def print_match_report(
    aggregator: MatchAggregator,
    stats: RunStats,
    logger: logging.Logger
) -> None:
    """
    Print the matches block and log a run summary.

    Args:
        aggregator: Aggregator holding the run's matches
        stats: Counters for the run
        logger: Logger for the summary

    Notes:
        - Output goes through the aggregator's reporter
        - Each 'Source:' header is followed only by its own matches
    """
    aggregator.reporter.emit("")
    for line in aggregator.report_lines():
        aggregator.reporter.emit(line)

    logger.info(
        f"Compared {stats.candidates_compared:,} candidate images, "
        f"found {len(aggregator):,} matches"
    )
    if stats.sources_skipped:
        logger.info(f"Skipped sources: {stats.sources_skipped:,}")
    if stats.candidates_too_large:
        logger.info(f"Skipped oversized candidates: {stats.candidates_too_large:,}")
    if stats.decode_failures:
        logger.warning(f"Could not decode {stats.decode_failures:,} files")
    if stats.unit_failures:
        logger.warning(f"{stats.unit_failures:,} source workers failed")
    if stats.cancelled:
        logger.warning("Run was cancelled; matches are incomplete")


__all__ = ['print_match_report']
