"""
Result aggregation for the comparator package.

Collects confirmed matches from concurrent workers and streams per-candidate
scores through a reporter sink, so callers and tests decide where output goes.
"""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from ..config import MATCHES_HEADER
from ..models import MatchRecord, format_percent


class Reporter:
    """Output sink for streamed score lines."""

    def emit(self, line: str) -> None:
        raise NotImplementedError


class ConsoleReporter(Reporter):
    """Writes lines to a stream (stdout by default), one whole line at a time."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, line: str) -> None:
        with self._lock:
            print(line, file=self._stream or sys.stdout, flush=True)


class CollectingReporter(Reporter):
    """Keeps emitted lines in memory."""

    def __init__(self):
        self._lock = threading.Lock()
        self._lines: list[str] = []

    def emit(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)


def format_score_line(path: str, score: float) -> str:
    """Format a '[percent%] path' line."""
    return f"[{format_percent(score)}%] {path}"


class MatchAggregator:
    """
    Thread-safe, append-only collection of confirmed matches.

    Workers call record() and stream_score() concurrently. The match list is
    meant to be read once all workers have finished.
    """

    def __init__(self, reporter: Optional[Reporter] = None):
        self.reporter = reporter or ConsoleReporter()
        self._lock = threading.Lock()
        self._matches: list[MatchRecord] = []

    def record(self, match: MatchRecord) -> None:
        """Append a confirmed match."""
        with self._lock:
            self._matches.append(match)

    def stream_score(self, candidate_path: str, score: float) -> None:
        """Emit the score for a processed candidate. No ordering across workers."""
        self.reporter.emit(format_score_line(candidate_path, score))

    @property
    def matches(self) -> list[MatchRecord]:
        """Snapshot of recorded matches in append order."""
        with self._lock:
            return list(self._matches)

    def __len__(self) -> int:
        with self._lock:
            return len(self._matches)

    def grouped(self) -> dict[str, list[MatchRecord]]:
        """
        Group matches by source.

        Sources appear in the order of their first match; matches keep their
        append order within a source.
        """
        groups: dict[str, list[MatchRecord]] = {}
        for match in self.matches:
            groups.setdefault(match.source_path, []).append(match)
        return groups

    def report_lines(self) -> list[str]:
        """
        Build the final matches block.

        Returns:
            The header line, then for each source a 'Source:' line followed
            only by that source's indented match lines
        """
        lines = [MATCHES_HEADER]
        for source_path, matches in self.grouped().items():
            lines.append(f"Source: {source_path}")
            for match in matches:
                lines.append("  " + format_score_line(match.candidate_path, match.score))
        return lines


__all__ = [
    'Reporter',
    'ConsoleReporter',
    'CollectingReporter',
    'MatchAggregator',
    'format_score_line',
]
