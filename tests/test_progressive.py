"""
Unit tests for the progressive matcher.
"""

import pytest

from imgcompare.comparator import load_raster, progressive_compare
from imgcompare.comparator import progressive as progressive_module
from imgcompare.models import LevelResult


def _scripted_compare(scores, calls):
    """Build a compare_at stand-in returning scores by resolution and recording calls."""
    def fake_compare_at(resolution, image_a, image_b, tolerance, threshold):
        calls.append(resolution)
        score = scores[resolution]
        return LevelResult(resolution=resolution, matched=score >= threshold, score=score)
    return fake_compare_at


class TestProgressiveCompare:
    """Test progressive_compare function."""

    def test_identical_images_match_every_level(self, sample_images):
        a = load_raster(sample_images['red'])
        b = load_raster(sample_images['red_copy'])
        result = progressive_compare(a, b, tolerance=2, threshold=0.75)
        assert result.is_full_match
        assert [level.resolution for level in result.levels] == [16, 128, 512, 1024]
        assert all(level.score == 1.0 for level in result.levels)
        assert result.percent == 100.0

    def test_black_vs_white_stops_at_first_level(self, sample_images):
        a = load_raster(sample_images['black'])
        b = load_raster(sample_images['white'])
        result = progressive_compare(a, b, tolerance=2, threshold=0.75)
        assert len(result.levels) == 1
        assert result.levels[0].resolution == 16
        assert result.levels[0].score == 0.0
        assert not result.is_full_match

    def test_short_circuits_after_failure(self, monkeypatch):
        calls = []
        scores = {16: 0.9, 128: 0.5, 512: 1.0, 1024: 1.0}
        monkeypatch.setattr(progressive_module, 'compare_at', _scripted_compare(scores, calls))

        result = progressive_compare(None, None, tolerance=2, threshold=0.75)

        assert calls == [16, 128]
        assert len(result.levels) == 2
        assert not result.is_full_match

    def test_reports_deepest_level_run(self, monkeypatch):
        calls = []
        scores = {16: 0.95, 128: 0.9, 512: 0.6, 1024: 1.0}
        monkeypatch.setattr(progressive_module, 'compare_at', _scripted_compare(scores, calls))

        result = progressive_compare(None, None, tolerance=2, threshold=0.75)

        # The failed 512 level is reported, not the last matched one
        assert result.score == 0.6
        assert result.deepest.resolution == 512

    def test_never_runs_past_first_failure(self, monkeypatch):
        for failing in (16, 128, 512, 1024):
            calls = []
            scores = {r: (0.1 if r == failing else 0.99) for r in (16, 128, 512, 1024)}
            monkeypatch.setattr(progressive_module, 'compare_at', _scripted_compare(scores, calls))

            result = progressive_compare(None, None, tolerance=2, threshold=0.75)

            assert calls[-1] == failing
            first_failure = next(i for i, level in enumerate(result.levels) if not level.matched)
            assert len(result.levels) == first_failure + 1

    def test_full_match_uses_final_level_score(self, monkeypatch):
        calls = []
        scores = {16: 1.0, 128: 0.99, 512: 0.9, 1024: 0.8}
        monkeypatch.setattr(progressive_module, 'compare_at', _scripted_compare(scores, calls))

        result = progressive_compare(None, None, tolerance=2, threshold=0.75)

        assert result.is_full_match
        assert result.score == 0.8

    def test_custom_ladder(self, sample_images):
        a = load_raster(sample_images['gradient'])
        b = load_raster(sample_images['gradient'])
        result = progressive_compare(a, b, tolerance=0, threshold=1.0, ladder=[4, 8])
        assert result.ladder == (4, 8)
        assert result.is_full_match

    def test_invalid_ladder(self, sample_images):
        a = load_raster(sample_images['red'])
        with pytest.raises(ValueError):
            progressive_compare(a, a, tolerance=2, threshold=0.75, ladder=[128, 16])
