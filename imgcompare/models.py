"""
Data models for Image Comparator.

Contains dataclasses for per-level and progressive comparison results,
confirmed matches, comparison settings and run statistics.
"""

from dataclasses import dataclass, field
from typing import Optional

from .config import (
    DEFAULT_TOLERANCE,
    DEFAULT_THRESHOLD,
    RESOLUTION_LADDER,
    MAX_CANDIDATE_BYTES,
    IMAGE_EXTENSIONS,
)


def format_percent(score: float) -> str:
    """
    Format a 0-1 score as a percentage rounded to two decimals.

    Trailing zeros are dropped, so 1.0 renders as "100" and 0.875 as "87.5".
    """
    value = round(score * 100, 2)
    return f"{value:g}"


def validate_ladder(ladder) -> tuple:
    """Return the ladder as a tuple, raising ValueError if it is not usable."""
    ladder = tuple(ladder)
    if not ladder:
        raise ValueError("Resolution ladder must not be empty")
    for size in ladder:
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValueError(f"Resolution ladder entries must be positive integers, got {size!r}")
    for smaller, larger in zip(ladder, ladder[1:]):
        if larger <= smaller:
            raise ValueError(f"Resolution ladder must be strictly ascending: {ladder}")
    return ladder


@dataclass(frozen=True)
class LevelResult:
    """
    Outcome of comparing two images at one square resolution.

    Attributes:
        resolution: Side length both images were resized to
        matched: True if score reached the threshold
        score: Fraction of matching channels (0-1)
    """
    resolution: int
    matched: bool
    score: float


@dataclass
class ProgressiveResult:
    """
    Levels run by the progressive matcher, in ladder order.

    Only levels that were actually evaluated are present; evaluation stops
    at the first level that did not match.
    """
    ladder: tuple
    levels: list = field(default_factory=list)

    @property
    def is_full_match(self) -> bool:
        """True if every ladder level ran and matched."""
        return (
            len(self.levels) == len(self.ladder)
            and all(level.matched for level in self.levels)
        )

    @property
    def deepest(self) -> Optional[LevelResult]:
        """The last level that was run."""
        return self.levels[-1] if self.levels else None

    @property
    def score(self) -> float:
        """Score of the deepest level run, matched or not."""
        deepest = self.deepest
        return deepest.score if deepest else 0.0

    @property
    def percent(self) -> float:
        return round(self.score * 100, 2)


@dataclass(frozen=True)
class MatchRecord:
    """
    A candidate that matched a source at every ladder level.

    Attributes:
        source_path: Absolute path of the source image
        candidate_path: Absolute path of the matching candidate
        score: Score at the final ladder level (0-1)
    """
    source_path: str
    candidate_path: str
    score: float

    @property
    def final_score_percent(self) -> float:
        """Score as a percentage rounded to two decimals."""
        return round(self.score * 100, 2)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'source_path': self.source_path,
            'candidate_path': self.candidate_path,
            'score': self.score,
            'final_score_percent': self.final_score_percent,
        }


@dataclass(frozen=True)
class ComparisonSettings:
    """
    Tunable parameters shared by every worker in a run.

    Attributes:
        tolerance: Max per-channel difference counted as a match (0-255)
        threshold: Min fraction of matching channels per level (0-1)
        ladder: Strictly ascending square resolutions
        max_candidate_bytes: Candidates larger than this are never decoded
        extensions: Allowed candidate extensions (lower-case, with dot)
    """
    tolerance: int = DEFAULT_TOLERANCE
    threshold: float = DEFAULT_THRESHOLD
    ladder: tuple = RESOLUTION_LADDER
    max_candidate_bytes: int = MAX_CANDIDATE_BYTES
    extensions: frozenset = IMAGE_EXTENSIONS

    def __post_init__(self):
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, int):
            raise ValueError(f"Tolerance must be an integer, got {self.tolerance!r}")
        if not 0 <= self.tolerance <= 255:
            raise ValueError(f"Tolerance must be between 0 and 255, got {self.tolerance}")
        if not 0.0 <= float(self.threshold) <= 1.0:
            raise ValueError(f"Threshold must be between 0 and 1, got {self.threshold}")
        if self.max_candidate_bytes <= 0:
            raise ValueError(f"Candidate size ceiling must be positive, got {self.max_candidate_bytes}")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'threshold', float(self.threshold))
        object.__setattr__(self, 'ladder', validate_ladder(self.ladder))
        object.__setattr__(self, 'extensions', frozenset(
            ext.lower() if ext.startswith('.') else f".{ext.lower()}"
            for ext in self.extensions
        ))


@dataclass
class RunStats:
    """
    Counters for one run, or for one source's unit of work.

    Per-unit stats are merged after all units have finished.
    """
    sources_total: int = 0
    sources_scheduled: int = 0
    sources_skipped: int = 0
    candidates_compared: int = 0
    candidates_too_large: int = 0
    decode_failures: int = 0
    unit_failures: int = 0
    matches: int = 0
    cancelled: bool = False

    def merge(self, other: 'RunStats') -> None:
        """Add another stats object's counters into this one."""
        self.sources_total += other.sources_total
        self.sources_scheduled += other.sources_scheduled
        self.sources_skipped += other.sources_skipped
        self.candidates_compared += other.candidates_compared
        self.candidates_too_large += other.candidates_too_large
        self.decode_failures += other.decode_failures
        self.unit_failures += other.unit_failures
        self.matches += other.matches
        self.cancelled = self.cancelled or other.cancelled
