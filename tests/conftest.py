"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - red.png, red_copy.png (identical 64x64 red squares)
        - red_large.bmp (200x100 red, different size, aspect and format)
        - blue.png, black.png, white.png (solid colors)
        - gradient.png, gradient_noisy.png (gradient and a slightly brighter copy)
        - corrupted.png (not an image despite the extension)
        - notes.txt (unsupported extension)
    """
    images = {}

    def save(name, img, fmt='PNG'):
        path = temp_dir / name
        img.save(path, fmt)
        images[Path(name).stem] = str(path)

    red = Image.new('RGB', (64, 64), color=(255, 0, 0))
    save("red.png", red)
    save("red_copy.png", red)
    save("red_large.bmp", Image.new('RGB', (200, 100), color=(255, 0, 0)), 'BMP')
    save("blue.png", Image.new('RGB', (64, 64), color=(0, 0, 255)))
    save("black.png", Image.new('RGB', (64, 64), color=(0, 0, 0)))
    save("white.png", Image.new('RGB', (64, 64), color=(255, 255, 255)))

    gradient = Image.new('RGB', (64, 64))
    gradient.putdata([(x * 4, y * 4, 128) for y in range(64) for x in range(64)])
    save("gradient.png", gradient)
    noisy = Image.new('RGB', (64, 64))
    noisy.putdata([(x * 4 + 1, y * 4, 128) for y in range(64) for x in range(64)])
    save("gradient_noisy.png", noisy)

    corrupted = temp_dir / "corrupted.png"
    corrupted.write_text("not an image")
    images['corrupted'] = str(corrupted)

    notes = temp_dir / "notes.txt"
    notes.write_text("not an image either")
    images['notes'] = str(notes)

    return images


@pytest.fixture
def collecting_reporter():
    """Reporter that keeps emitted lines in memory."""
    from imgcompare.comparator import CollectingReporter

    return CollectingReporter()


@pytest.fixture
def aggregator(collecting_reporter):
    """MatchAggregator writing to a collecting reporter."""
    from imgcompare.comparator import MatchAggregator

    return MatchAggregator(collecting_reporter)
