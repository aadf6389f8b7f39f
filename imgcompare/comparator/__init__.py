"""
Comparator package for Image Comparator.

Provides the progressive multi-resolution similarity engine and the
concurrent scheduler that fans it out over source and candidate images.

Public API:
- find_candidate_files: Enumerate candidate files under directories
- is_supported_image: Extension allow-list check
- exceeds_size_limit: Candidate size ceiling check
- load_raster: Decode an image file into RGB
- compare_at: Compare two images at one square resolution
- progressive_compare: Compare up a resolution ladder, stopping at the first failure
- match_source: Compare one source against all candidates
- run_all: Compare every source concurrently
- MatchAggregator: Thread-safe match collection and score streaming
"""

from __future__ import annotations

from .file_discovery import (
    find_candidate_files,
    is_supported_image,
    exceeds_size_limit,
)
from .engine import load_raster, compare_at
from .progressive import progressive_compare
from .aggregator import (
    Reporter,
    ConsoleReporter,
    CollectingReporter,
    MatchAggregator,
    format_score_line,
)
from .scheduler import match_source, run_all


# Public API exports
__all__ = [
    # File discovery
    'find_candidate_files',
    'is_supported_image',
    'exceeds_size_limit',
    # Similarity engine
    'load_raster',
    'compare_at',
    'progressive_compare',
    # Aggregation
    'Reporter',
    'ConsoleReporter',
    'CollectingReporter',
    'MatchAggregator',
    'format_score_line',
    # Scheduling
    'match_source',
    'run_all',
]
