"""
Configuration constants for Image Comparator.

This module contains all configurable settings including:
- Candidate extensions and size ceiling
- Pixel comparison defaults (tolerance, threshold, resolution ladder)
"""

# Extensions a candidate must carry before it is decoded (compared lower-case)
IMAGE_EXTENSIONS = frozenset({'.png', '.jpg', '.jpeg', '.bmp'})

# Maximum per-channel difference (0-255) for two pixels to count as matching
DEFAULT_TOLERANCE = 2

# Minimum fraction of matching channels for a level to count as a match
DEFAULT_THRESHOLD = 0.75

# Square sizes compared in order; cheap levels reject dissimilar pairs early
RESOLUTION_LADDER = (16, 128, 512, 1024)

# Candidates larger than this (bytes) are skipped without decoding
MAX_CANDIDATE_BYTES = 300_000_000

# Default number of parallel source workers
# 0 = one worker per source
DEFAULT_WORKERS = 4

# Decompression bomb limit passed to Pillow
MAX_IMAGE_PIXELS = 500_000_000

# Header printed above the final match list
MATCHES_HEADER = "===== Matches ====="
