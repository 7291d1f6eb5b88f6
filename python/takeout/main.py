#!/usr/bin/env python3
"""
Takeout - extract MP3 files from a Google Takeout zip and report their tags.

Usage:
    python -m takeout /path/to/takeout.zip [options]
"""

import argparse
import logging
import sys
from typing import List, Optional

from takeout import __version__
from takeout.archive_walker import ArchiveWalker
from takeout.config import (
    TakeoutConfig, ensure_directories, load_config, resolve_config
)
from takeout.errors import ArchiveOpenError, MetadataError, SetupError
from takeout.extractor import Extractor
from takeout.id3_handler import ID3Handler
from takeout.models import ArchiveEntry, ProcessingStats
from takeout.reporter import Reporter

logger = logging.getLogger("takeout")


class TakeoutProcessor:
    """Walks the archive, extracts each MP3 and reports its tags."""

    def __init__(self, config: TakeoutConfig, reporter: Reporter,
                 extractor: Optional[Extractor] = None,
                 id3_handler: Optional[ID3Handler] = None):
        """
        Initialize processor.

        Args:
            config: Resolved paths for this run
            reporter: Operator output handler
            extractor: Entry extractor (default Extractor())
            id3_handler: Tag reader (default ID3Handler())
        """
        self.config = config
        self.reporter = reporter
        self.extractor = extractor or Extractor()
        self.id3_handler = id3_handler or ID3Handler()
        self.stats = ProcessingStats()

    def process(self) -> ProcessingStats:
        """
        Extract and report every MP3 entry of the archive.

        One bad entry never stops the walk: extraction and metadata
        failures are reported, counted and skipped.

        Raises:
            ArchiveOpenError: If the archive cannot be opened.
        """
        with ArchiveWalker(self.config.archive_path) as walker:
            for entry in walker.entries():
                self._process_entry(entry)
            self.stats.entries_ignored = walker.ignored

        self.reporter.show_summary(self.stats)
        return self.stats

    def _process_entry(self, entry: ArchiveEntry) -> None:
        """Extract one entry and read its metadata."""
        self.stats.entries_seen += 1

        result = self.extractor.extract(entry, self.config.work_dir)
        self.stats.record_extraction(result, entry.name)
        self.reporter.show_extraction(entry, result)

        if not result.has_file:
            logger.debug(f"Skipping metadata for {entry.name}: {result.reason}")
            return

        try:
            metadata = self.id3_handler.read_metadata(result.path)
        except MetadataError as e:
            self.stats.metadata_failures += 1
            self.stats.errors.append(f"{result.path.name}: {e}")
            self.reporter.show_metadata_error(e)
            return

        self.stats.metadata_read += 1
        self.reporter.show_metadata(metadata)

    def list_archive(self) -> List[ArchiveEntry]:
        """Show the MP3 entries of the archive without extracting."""
        with ArchiveWalker(self.config.archive_path) as walker:
            entries = walker.list_entries()
        self.reporter.show_entries(entries)
        return entries


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the takeout logger with a console handler."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="takeout",
        description="Extract MP3 files from a Google Takeout zip archive "
                    "and report their ID3 tags.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract into ~/Music/takeout/tmp
  python -m takeout ~/Downloads/takeout-001.zip

  # List the MP3 files without extracting
  python -m takeout ~/Downloads/takeout-001.zip --list

  # Choose where files go
  python -m takeout takeout.zip -o ~/Music/import --work-dir /tmp/takeout

Paths can also come from TAKEOUT_ARCHIVE, TAKEOUT_OUTPUT_DIR and
TAKEOUT_WORK_DIR, set in the environment or in the .env file.
"""
    )

    parser.add_argument(
        "archive",
        nargs="?",
        help="Path to the Takeout zip file (default: ~/Downloads/takeout.zip)"
    )

    parser.add_argument(
        "--output-dir", "-o",
        help="Output root directory (default: ~/Music/takeout)"
    )

    parser.add_argument(
        "--work-dir",
        help="Directory extracted files are written to (default: OUTPUT_DIR/tmp)"
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List MP3 entries in the archive without extracting"
    )

    # Configuration
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: ./.env)"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    # Verbosity
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print errors and the summary"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger.info(f"Takeout {__version__}")

    env = load_config(args.env_file)

    try:
        config = resolve_config(
            archive=args.archive,
            output_dir=args.output_dir,
            work_dir=args.work_dir,
            env=env,
        )
        if not args.list:
            ensure_directories(config)
    except SetupError as e:
        logger.error(e)
        return 1

    reporter = Reporter(no_color=args.no_color, quiet=args.quiet)
    processor = TakeoutProcessor(config, reporter)

    try:
        if args.list:
            processor.list_archive()
        else:
            processor.process()
    except ArchiveOpenError as e:
        logger.error(e)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 130

    logger.info("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
