"""
Interactive prompts for the CLI interface.

Provides source image selection when no --source was given.
"""

from __future__ import annotations

from ..config import IMAGE_EXTENSIONS


def prompt_for_sources() -> list[str]:
    """
    Interactively prompt user for source image paths.

    Returns:
        List of entered paths, in entry order

    Notes:
        - One path per line, an empty line finishes
        - Handles quoted paths (strips quotes)
        - Paths are not validated here; the scheduler reports invalid ones
    """
    print("\n" + "=" * 50)
    print("  IMAGE COMPARATOR")
    print("=" * 50)
    print(f"Image files ({' '.join('*' + ext for ext in sorted(IMAGE_EXTENSIONS))})")

    sources = []
    while True:
        try:
            entry = input("Source image path (empty line to finish): ").strip()
        except EOFError:
            break
        if not entry:
            break
        # Handle quotes around path (common when copy-pasting)
        sources.append(entry.strip('"\''))

    return sources


__all__ = ['prompt_for_sources']
