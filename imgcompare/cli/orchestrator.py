"""
CLI workflow orchestration for Image Comparator.

Provides the CLIOrchestrator class that coordinates the entire CLI workflow
from argument parsing through the final matches report.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ..comparator import (
    find_candidate_files,
    run_all,
    MatchAggregator,
    Reporter,
)
from ..comparator.dependencies import Image
from ..errors import NoValidSourcesError
from ..models import RunStats
from ..user_config import get_user_config
from .arg_parser import parse_arguments
from .interactive import prompt_for_sources
from .reporting import print_match_report


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI comparison workflow.

    Manages the complete lifecycle from argument parsing through candidate
    discovery, concurrent matching and reporting.
    """

    def __init__(self, argv=None, reporter: Optional[Reporter] = None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
            reporter: Output sink for score lines and the report (default: stdout)
        """
        self.argv = argv
        self.logger = None
        self.args = None
        self.settings = None
        self.show_progress = True
        self.sources = []
        self.candidates = []
        self.aggregator = MatchAggregator(reporter)
        self.stats = RunStats()
        self.cancel_event = threading.Event()

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)

        Workflow phases:
        1. Setup & argument parsing
        2. Source selection (interactive if needed)
        3. Configuration
        4. Candidate scanning
        5. Matching
        6. Reporting
        """
        self._setup_phase()

        exit_code = self._sources_phase()
        if exit_code != 0:
            return exit_code

        self._configure_phase()

        self._scan_phase()

        exit_code = self._match_phase()
        if exit_code != 0:
            return exit_code

        self._report_phase()
        return 0

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _sources_phase(self) -> int:
        """
        Phase 2: Collect source paths, prompting if none were given.

        Returns:
            0 for success, 1 if no sources were entered
        """
        self.sources = list(self.args.sources) or prompt_for_sources()
        if not self.sources:
            self.logger.error("No source images given. Exiting.")
            return 1
        return 0

    def _configure_phase(self) -> None:
        """Phase 3: Apply validated settings and runtime options."""
        self.settings = self.args.settings
        Image.MAX_IMAGE_PIXELS = get_user_config().max_image_pixels
        self.show_progress = not self.args.no_progress

        self.logger.debug(
            f"tolerance={self.settings.tolerance} threshold={self.settings.threshold} "
            f"ladder={self.settings.ladder} max_size={self.settings.max_candidate_bytes:,}"
        )

    def _scan_phase(self) -> None:
        """Phase 4: Enumerate candidate files."""
        if not self.args.directories:
            self.logger.warning("No directories given; there are no candidates to compare")

        recursive = not self.args.no_recursive
        self.candidates = find_candidate_files(
            self.args.directories,
            recursive=recursive,
            logger=self.logger,
        )
        self.logger.info(f"Found {len(self.candidates):,} candidate files")

    def _match_phase(self) -> int:
        """
        Phase 5: Compare every source against the candidates.

        Returns:
            0 for success, 1 if no source could be used
        """
        try:
            self.stats = run_all(
                self.sources,
                self.candidates,
                settings=self.settings,
                aggregator=self.aggregator,
                max_workers=self.args.workers or None,
                cancel_event=self.cancel_event,
                show_progress=self.show_progress,
                logger=self.logger,
            )
        except NoValidSourcesError as e:
            self.logger.error(f"{e}. Exiting.")
            return 1
        return 0

    def _report_phase(self) -> None:
        """Phase 6: Print the matches block."""
        print_match_report(self.aggregator, self.stats, self.logger)


__all__ = ['CLIOrchestrator', 'setup_logging']
