"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
image comparator command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..models import ComparisonSettings
from ..user_config import get_user_config


def parse_ladder(value: str) -> tuple:
    """
    Parse a comma separated resolution ladder.

    Examples:
        >>> parse_ladder('16,128,512')
        (16, 128, 512)
    """
    try:
        ladder = tuple(int(part) for part in value.split(',') if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ladder: {value!r} (expected e.g. 16,128,512,1024)")
    if not ladder:
        raise argparse.ArgumentTypeError("ladder must contain at least one resolution")
    return ladder


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance

    Notes:
        - Defaults come from the user configuration (env vars, config file)
        - Sources are prompted for interactively when --source is not given
    """
    config = get_user_config()

    parser = argparse.ArgumentParser(
        description='Find near-duplicates of source images in one or more directories',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos -s original.png
      Find copies of original.png anywhere under /path/to/photos

  %(prog)s dir1 dir2 -s a.jpg -s b.jpg --workers 2
      Compare two sources, at most two at a time

  %(prog)s /path/to/photos -s logo.png --tolerance 8 --threshold 0.9
      Looser per-channel tolerance, stricter pixel threshold

  %(prog)s /path/to/photos -s logo.png --ladder 16,128
      Stop at 128x128 instead of comparing up to 1024x1024
        """
    )

    # Positional argument
    parser.add_argument(
        'directories',
        type=Path,
        nargs='*',
        help='Directories to search for candidate images'
    )

    parser.add_argument(
        '-s', '--source',
        dest='sources',
        action='append',
        default=[],
        metavar='PATH',
        help='Source image to search for (repeatable). Prompted for if omitted'
    )

    parser.add_argument(
        '-r', '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )

    # Comparison options
    parser.add_argument(
        '-t', '--tolerance',
        type=int,
        default=config.default_tolerance,
        help=f'Max per-channel difference (0-255). Default: {config.default_tolerance}'
    )

    parser.add_argument(
        '-T', '--threshold',
        type=float,
        default=config.default_threshold,
        help=f'Min fraction of matching pixels (0-1). Default: {config.default_threshold}'
    )

    parser.add_argument(
        '--ladder',
        type=parse_ladder,
        default=config.resolution_ladder,
        help='Comma separated ascending resolutions. '
             f'Default: {",".join(str(r) for r in config.resolution_ladder)}'
    )

    parser.add_argument(
        '--max-size',
        type=int,
        default=config.max_candidate_bytes,
        help=f'Skip candidates larger than this many bytes. Default: {config.max_candidate_bytes:,}'
    )

    # Performance options
    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=config.default_workers,
        help=f'Number of sources compared in parallel (0 = all). Default: {config.default_workers}'
    )

    # Output options
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object, with the validated
        ComparisonSettings attached as args.settings

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '-s', 'a.png', '--tolerance', '5'])
        >>> args.directories
        [PosixPath('/path/to/photos')]
        >>> args.tolerance
        5
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.workers < 0:
        parser.error("--workers must be 0 or greater")

    try:
        args.settings = ComparisonSettings(
            tolerance=args.tolerance,
            threshold=args.threshold,
            ladder=args.ladder,
            max_candidate_bytes=args.max_size,
        )
    except ValueError as e:
        parser.error(str(e))
    return args


__all__ = [
    'create_parser',
    'parse_arguments',
    'parse_ladder',
]
