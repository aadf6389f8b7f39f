"""
File discovery module for the comparator package.

Enumerates candidate files under root directories and provides the cheap
per-candidate filters applied before any decode is attempted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from ..config import IMAGE_EXTENSIONS, MAX_CANDIDATE_BYTES


def find_candidate_files(
    roots: Iterable[str | Path],
    recursive: bool = True,
    logger: Optional[logging.Logger] = None,
) -> list[str]:
    """
    Find all files under the given directories.

    Args:
        roots: Directory paths to search
        recursive: If True, search subdirectories recursively
        logger: Optional logger for skipped roots

    Returns:
        List of absolute file paths as strings

    Notes:
        - Files are not filtered by extension; workers do that
        - Handles symlinks by resolving to canonical paths
        - Deduplicates files reachable from several roots
    """
    files = []
    seen = set()  # Track resolved paths to avoid duplicates

    for root_path in roots:
        root = Path(root_path)
        if not root.is_dir():
            if logger:
                logger.warning(f"Not a directory, ignoring: {root}")
            continue

        iterator = root.rglob('*') if recursive else root.glob('*')

        for filepath in sorted(iterator):
            if filepath.is_file():
                resolved = str(filepath.resolve())
                if resolved not in seen:
                    seen.add(resolved)
                    files.append(resolved)

    return files


def is_supported_image(filepath: str | Path, extensions=IMAGE_EXTENSIONS) -> bool:
    """Check whether the file extension is in the allow-list (case-insensitive)."""
    return os.path.splitext(str(filepath))[1].lower() in extensions


def exceeds_size_limit(filepath: str | Path, limit: int = MAX_CANDIDATE_BYTES) -> bool:
    """
    Check whether a file is larger than the size ceiling.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    return os.path.getsize(filepath) > limit


__all__ = ['find_candidate_files', 'is_supported_image', 'exceeds_size_limit']
