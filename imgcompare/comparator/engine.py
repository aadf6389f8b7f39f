"""
Similarity engine for the comparator package.

Compares two decoded images at one square resolution using a raw per-channel
RGB tolerance, and loads images from disk into that form.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import ImageDecodeError
from ..models import LevelResult
from .dependencies import Image, np, RESAMPLE_FILTER


def load_raster(filepath: str | Path) -> Image.Image:
    """
    Open an image file and decode it fully into RGB.

    Args:
        filepath: Path to the image file

    Returns:
        A loaded RGB image detached from the file handle

    Raises:
        ImageDecodeError: If the file is missing, unreadable, corrupt or
            exceeds the decompression bomb limit
    """
    filepath = str(filepath)
    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated images early
            img.load()
            return img.convert('RGB')
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        # UnidentifiedImageError is an OSError
        raise ImageDecodeError(filepath, e) from e


def _resized_channels(img: Image.Image, resolution: int):
    """Resize to resolution x resolution and return an int16 (H, W, 3) array."""
    rgb = img if img.mode == 'RGB' else img.convert('RGB')
    try:
        with rgb.resize((resolution, resolution), RESAMPLE_FILTER) as resized:
            # int16 so channel differences cannot wrap around
            return np.asarray(resized, dtype=np.int16)
    finally:
        if rgb is not img:
            rgb.close()


def compare_at(
    resolution: int,
    image_a: Image.Image,
    image_b: Image.Image,
    tolerance: int,
    threshold: float,
) -> LevelResult:
    """
    Compare two images scaled to a square resolution.

    Both images are forced to resolution x resolution with the same filter,
    ignoring aspect ratio. Each channel of each pixel matches when the
    absolute difference is within tolerance; the score is the mean of the
    per-channel match fractions.

    Args:
        resolution: Side length to compare at
        image_a: Source image
        image_b: Image under test
        tolerance: Max per-channel difference still counted as a match
        threshold: Min score for the level to match

    Returns:
        LevelResult with the score and match verdict
    """
    if resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution}")

    a = _resized_channels(image_a, resolution)
    b = _resized_channels(image_b, resolution)

    within = np.abs(a - b) <= tolerance

    total_pixels = resolution * resolution
    channel_matches = within.sum(axis=(0, 1))
    score = float((channel_matches / total_pixels).sum() / 3)

    return LevelResult(resolution=resolution, matched=score >= threshold, score=score)


__all__ = ['load_raster', 'compare_at']
