"""
Unified command orchestrator.
Runs exactly one engine per invocation over a progress budget of 100.
No console dependencies. The CLI supplies the reporter and owns the status display.
"""
import logging
from typing import Optional

from brahe.core.comparer import TreeComparatorImpl
from brahe.core.database import DatabaseBuilderImpl, DatabaseCheckerImpl, HashDatabase
from brahe.core.dedupe import DedupeEngineImpl
from brahe.core.gaps import GapFinderImpl
from brahe.core.models import Configuration, Mode, ProgressState
from brahe.core.progress import ProgressTracker, split_progress
from brahe.core.scanner import Reporter

logger = logging.getLogger(__name__)

FULL_PROGRESS = 100.0


class BraheCommand:
    """
    Dispatches a validated Configuration to its engine.

    Usage:
        tracker = ProgressTracker()
        state = BraheCommand().execute(config, tracker, reporter=console.write)
    """

    def execute(
            self,
            config: Configuration,
            tracker: Optional[ProgressTracker] = None,
            reporter: Optional[Reporter] = None
    ) -> ProgressState:
        """
        Returns:
            Final counters of the run

        Raises:
            BraheError: On any unrecoverable filesystem or database failure
        """
        tracker = tracker or ProgressTracker()
        logger.debug(f"Running {config.mode.display_name} on {config.entries}")

        if config.mode is Mode.FIND_GAPS:
            GapFinderImpl(config, tracker, reporter).find_gaps(FULL_PROGRESS, config.entries)

        elif config.mode is Mode.DEDUPE:
            DedupeEngineImpl(config, tracker, reporter).dedupe(FULL_PROGRESS, config.source, config.depth, set())

        elif config.mode is Mode.BUILD_DATABASE:
            database = HashDatabase.under(config.entries[1])
            database.initialize()
            DatabaseBuilderImpl(config, tracker, database, reporter).build(
                FULL_PROGRESS, config.source, config.depth)

        elif config.mode is Mode.CHECK_DATABASE:
            database = HashDatabase.under(config.source)
            database.verify_exists()
            checker = DatabaseCheckerImpl(config, tracker, database, reporter)
            chunk, extra = split_progress(FULL_PROGRESS, len(config.targets))
            for target in config.targets:
                checker.check(chunk, target, config.depth)
            tracker.add_progress(extra)

        else:
            TreeComparatorImpl(config, tracker, reporter).compare(FULL_PROGRESS, config.entries, config.depth)

        return tracker.snapshot()
