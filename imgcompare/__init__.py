"""
Image Comparator
================
Finds near-duplicates of a set of source images in a pool of candidates.

Features:
- Progressive comparison: cheap 16px pass before 128/512/1024px passes
- Raw per-channel RGB tolerance, no perceptual model
- One worker per source, optionally bounded
- Thread-safe match collection with streamed per-candidate scores
- CLI for automation
"""

__version__ = "1.0.0"
__author__ = "Image Comparator contributors"

from .models import (
    LevelResult,
    ProgressiveResult,
    MatchRecord,
    ComparisonSettings,
    RunStats,
    format_percent,
)
from .config import (
    IMAGE_EXTENSIONS,
    DEFAULT_TOLERANCE,
    DEFAULT_THRESHOLD,
    RESOLUTION_LADDER,
    MAX_CANDIDATE_BYTES,
)
from .errors import (
    ComparatorError,
    InvalidSourcePathError,
    ImageDecodeError,
    NoValidSourcesError,
)
from .comparator import (
    find_candidate_files,
    load_raster,
    compare_at,
    progressive_compare,
    match_source,
    run_all,
    MatchAggregator,
    ConsoleReporter,
    CollectingReporter,
)

__all__ = [
    "LevelResult",
    "ProgressiveResult",
    "MatchRecord",
    "ComparisonSettings",
    "RunStats",
    "format_percent",
    "IMAGE_EXTENSIONS",
    "DEFAULT_TOLERANCE",
    "DEFAULT_THRESHOLD",
    "RESOLUTION_LADDER",
    "MAX_CANDIDATE_BYTES",
    "ComparatorError",
    "InvalidSourcePathError",
    "ImageDecodeError",
    "NoValidSourcesError",
    "find_candidate_files",
    "load_raster",
    "compare_at",
    "progressive_compare",
    "match_source",
    "run_all",
    "MatchAggregator",
    "ConsoleReporter",
    "CollectingReporter",
]
