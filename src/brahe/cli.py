#!/usr/bin/env python3
"""
brahe CLI: verify that target directory trees hold everything the source tree holds.
Also builds/checks a hash database, deletes duplicates, and finds sequence gaps.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from brahe.aliases import DEPTH_HELP_TEXT, EPILOG_TEXT, GAP_PATTERN_HELP_TEXT, MODE_FLAGS
from brahe.commands import BraheCommand
from brahe.core.errors import BraheError
from brahe.core.models import Configuration, GapPattern, Mode, ProgressState
from brahe.core.progress import ProgressTracker
from brahe.services.console import Console, StatusDisplay

logger = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        # Fix encoding for Windows consoles to prevent UnicodeEncodeError.
        # Undecodable POSIX file names arrive as lone surrogates and are escaped.
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding="utf-8", errors="backslashreplace")

        self.console = Console()
        self.verbose: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="brahe",
            description="Compare a source directory tree against one or more target trees",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "paths",
            nargs="+",
            metavar="path",
            help="[source] [target1] .. [targetN]"
        )

        # Comparison options
        parser.add_argument(
            "--no-data",
            action="store_true",
            help="Don't compare the file contents"
        )
        parser.add_argument(
            "--system-names",
            action="store_true",
            help="Also check system names like $RECYCLE.BIN, System Volume Information, found.000, Thumbs.db"
        )
        parser.add_argument(
            "--depth",
            type=int,
            default=-1,
            help=DEPTH_HELP_TEXT
        )

        # Modes
        modes = parser.add_mutually_exclusive_group()
        modes.add_argument(
            "--build-db",
            action="store_true",
            help="Build a hash database of all entries in [source] into [target1]"
        )
        modes.add_argument(
            "--check-db",
            action="store_true",
            help="Check all files in [target1] .. [targetN] against the hash database in [source]"
        )
        modes.add_argument(
            "--delete-dupes",
            action="store_true",
            help="Delete any duplicate files in [source]"
        )
        modes.add_argument(
            "--find-gaps",
            type=str,
            default=None,
            metavar="PATTERN",
            help=GAP_PATTERN_HELP_TEXT
        )

        parser.add_argument(
            "--copy",
            type=str,
            default=None,
            metavar="DIR",
            help="With --check-db, copy files not found in the database into DIR"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="With --delete-dupes, move duplicates to the system trash instead of deleting them"
        )

        # Output options
        parser.add_argument(
            "--force", "-y",
            action="store_true",
            help="Skip the confirmation prompt (for automation/scripts)"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Enable debug logging"
        )

        return parser.parse_args(args)

    @staticmethod
    def resolve_mode(args: argparse.Namespace) -> Mode:
        for flag, mode in MODE_FLAGS.items():
            if getattr(args, flag):
                return mode
        return Mode.COMPARE

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate paths before building the configuration."""
        for item in args.paths:
            path = Path(item).resolve()
            if not path.exists():
                self.usage_exit(f"Directory not found: {item}")
            if not path.is_dir():
                self.usage_exit(f"Path is not a directory: {item}")

        if args.copy:
            copy_path = Path(args.copy).resolve()
            if copy_path.exists() and not copy_path.is_dir():
                self.usage_exit(f"Copy destination is not a directory: {args.copy}")

    def create_config(self, args: argparse.Namespace) -> Configuration:
        """Create the run Configuration from CLI arguments."""
        try:
            gap_pattern = GapPattern.parse(args.find_gaps) if args.find_gaps is not None else None

            return Configuration(
                entries=[str(Path(item).resolve()) for item in args.paths],
                mode=self.resolve_mode(args),
                depth=args.depth,
                compare_contents=not args.no_data,
                include_system_names=args.system_names,
                gap_pattern=gap_pattern,
                copy_destination=str(Path(args.copy).resolve()) if args.copy else None,
                use_trash=args.trash
            )
        except ValueError as e:
            self.usage_exit(str(e))

    @staticmethod
    def describe_entries(config: Configuration) -> List[str]:
        lines = []
        for i, entry in enumerate(config.entries):
            header = "   Source" if i == 0 else f"Target #{i}"
            lines.append(f"{header}: {entry}")
        return lines

    @staticmethod
    def ask_bool(question: str) -> bool:
        """
        Repeats the question until the answer is Y or N.
        End of input (e.g. Ctrl+D) counts as N.
        """
        while True:
            try:
                answer = input(f"{question} (Y/N) - ").strip().lower()
            except EOFError:
                print()
                return False
            if answer == "n":
                return False
            if answer == "y":
                return True

    def confirm(self, config: Configuration, force: bool) -> bool:
        for line in self.describe_entries(config):
            print(line)
        if config.mode is not Mode.COMPARE:
            print(f"     Mode: {config.mode.display_name}")

        if force:
            return True

        # Prevent interactive confirmation in non-TTY environments
        if not sys.stdin.isatty():
            self.usage_exit(
                "Cannot request interactive confirmation in non-interactive session.\n"
                "Use --force flag to proceed without confirmation when running in scripts."
            )
        return self.ask_bool("Start comparing?")

    def run_command(self, config: Configuration) -> ProgressState:
        """Run the engine with the live status line shown."""
        tracker = ProgressTracker()
        display = StatusDisplay(tracker, self.console)

        self.console.write("Starting work ..")
        self.console.show()
        display.start()
        completed = False
        try:
            state = BraheCommand().execute(config, tracker, reporter=self.console.write)
            completed = True
            return state
        finally:
            display.stop(completed=completed)
            display.join()

    @staticmethod
    def usage_exit(message: str) -> NoReturn:
        """Print an argument problem and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    @staticmethod
    def error_exit(message: str, code: int = EXIT_FATAL) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> Optional[ProgressState]:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        config = self.create_config(args)
        logger.debug(f"Configuration: {config}")

        if not self.confirm(config, force=args.force):
            return None

        try:
            return self.run_command(config)
        except BraheError as e:
            if os.environ.get("DEBUG"):
                raise
            self.error_exit(str(e))


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(EXIT_FATAL)


if __name__ == "__main__":
    main()
