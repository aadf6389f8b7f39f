"""
Unit tests for match aggregation and reporting sinks.
"""

import io
import threading

from imgcompare.comparator import (
    MatchAggregator,
    ConsoleReporter,
    CollectingReporter,
    format_score_line,
)
from imgcompare.models import MatchRecord


class TestFormatScoreLine:
    """Test format_score_line."""

    def test_format(self):
        assert format_score_line("/x/a.png", 0.98766) == "[98.77%] /x/a.png"

    def test_whole_percent(self):
        assert format_score_line("/x/a.png", 1.0) == "[100%] /x/a.png"


class TestMatchAggregator:
    """Test MatchAggregator."""

    def test_record_keeps_append_order(self, aggregator):
        first = MatchRecord("/s1.png", "/c1.png", 1.0)
        second = MatchRecord("/s2.png", "/c2.png", 0.9)
        aggregator.record(first)
        aggregator.record(second)
        assert aggregator.matches == [first, second]
        assert len(aggregator) == 2

    def test_matches_is_a_snapshot(self, aggregator):
        aggregator.record(MatchRecord("/s.png", "/c.png", 1.0))
        snapshot = aggregator.matches
        snapshot.clear()
        assert len(aggregator) == 1

    def test_stream_score(self, aggregator, collecting_reporter):
        aggregator.stream_score("/c.png", 0.5)
        assert collecting_reporter.lines == ["[50%] /c.png"]
        assert len(aggregator) == 0

    def test_empty_report(self, aggregator):
        assert aggregator.report_lines() == ["===== Matches ====="]

    def test_report_groups_by_source(self, aggregator):
        aggregator.record(MatchRecord("/s1.png", "/a.png", 1.0))
        aggregator.record(MatchRecord("/s2.png", "/b.png", 0.8))
        aggregator.record(MatchRecord("/s1.png", "/c.png", 0.875))

        assert aggregator.report_lines() == [
            "===== Matches =====",
            "Source: /s1.png",
            "  [100%] /a.png",
            "  [87.5%] /c.png",
            "Source: /s2.png",
            "  [80%] /b.png",
        ]

    def test_concurrent_records(self, aggregator):
        def worker(n):
            for i in range(200):
                aggregator.record(MatchRecord(f"/s{n}.png", f"/c{i}.png", 1.0))
                aggregator.stream_score(f"/c{i}.png", 1.0)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(aggregator) == 1600
        assert len(aggregator.reporter.lines) == 1600
        for n in range(8):
            per_source = [m for m in aggregator.matches if m.source_path == f"/s{n}.png"]
            assert [m.candidate_path for m in per_source] == [f"/c{i}.png" for i in range(200)]


class TestReporters:
    """Test reporter sinks."""

    def test_console_reporter_writes_lines(self):
        stream = io.StringIO()
        reporter = ConsoleReporter(stream)
        reporter.emit("one")
        reporter.emit("two")
        assert stream.getvalue() == "one\ntwo\n"

    def test_console_reporter_defaults_to_stdout(self, capsys):
        ConsoleReporter().emit("hello")
        assert capsys.readouterr().out == "hello\n"

    def test_collecting_reporter(self):
        reporter = CollectingReporter()
        reporter.emit("a")
        lines = reporter.lines
        lines.append("b")
        assert reporter.lines == ["a"]

    def test_default_aggregator_prints(self, capsys):
        MatchAggregator().stream_score("/c.png", 0.25)
        assert capsys.readouterr().out == "[25%] /c.png\n"
