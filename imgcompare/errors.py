"""
Exceptions raised by Image Comparator.

Per-source and per-candidate errors are recovered inside the worker that hit
them; only NoValidSourcesError stops a run.
"""

from __future__ import annotations


class ComparatorError(Exception):
    """Base class for all Image Comparator errors."""


class InvalidSourcePathError(ComparatorError):
    """A source path does not resolve to an existing file."""

    def __init__(self, path: str):
        super().__init__(f"Invalid source path: {path}")
        self.path = path


class ImageDecodeError(ComparatorError):
    """A file could not be opened or decoded as an image."""

    def __init__(self, path: str, reason: Exception | str):
        super().__init__(f"Failed to decode image {path}: {reason}")
        self.path = path
        self.reason = reason


class NoValidSourcesError(ComparatorError):
    """None of the requested sources could be scheduled."""


__all__ = [
    'ComparatorError',
    'InvalidSourcePathError',
    'ImageDecodeError',
    'NoValidSourcesError',
]
