"""
Progressive matching for the comparator package.

Runs the similarity engine up an ascending resolution ladder and stops at the
first level that fails, so clearly different pairs never reach the expensive
high-resolution comparisons.
"""

from __future__ import annotations

from typing import Sequence

from ..config import RESOLUTION_LADDER
from ..models import ProgressiveResult, validate_ladder
from .dependencies import Image, _logger
from .engine import compare_at


def progressive_compare(
    source: Image.Image,
    test: Image.Image,
    tolerance: int,
    threshold: float,
    ladder: Sequence[int] = RESOLUTION_LADDER,
) -> ProgressiveResult:
    """
    Compare two images at each ladder resolution until one fails.

    Args:
        source: Image to be tested against
        test: Image to be tested
        tolerance: Max per-channel difference still counted as a match
        threshold: Min score for a level to match
        ladder: Strictly ascending square resolutions

    Returns:
        ProgressiveResult holding only the levels that were run. A full
        match requires every level to match; otherwise the last entry is
        the level that failed.
    """
    ladder = validate_ladder(ladder)
    result = ProgressiveResult(ladder=ladder)

    for resolution in ladder:
        level = compare_at(resolution, source, test, tolerance, threshold)
        result.levels.append(level)
        _logger.debug(
            f"Level {resolution}x{resolution}: score={level.score:.4f} matched={level.matched}"
        )
        if not level.matched:
            break

    return result


__all__ = ['progressive_compare']
