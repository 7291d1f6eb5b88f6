"""Operator-facing progress and metadata report."""

from typing import List

from takeout.models import (
    ArchiveEntry, ExtractionResult, ExtractOutcome, ProcessingStats, TrackMetadata
)

MAX_LISTED_ERRORS = 10


class Reporter:
    """Prints per-file progress, tag metadata and the run summary."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "dim": "\033[2m",
    }

    def __init__(self, no_color: bool = False, quiet: bool = False):
        """
        Initialize reporter.

        Args:
            no_color: Disable colored output
            quiet: Only print errors and the final summary
        """
        self.no_color = no_color
        self.quiet = quiet

        if no_color:
            self.COLORS = {k: "" for k in self.COLORS}

    def _c(self, color: str, text: str) -> str:
        """Apply color to text."""
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def print(self, *args, **kwargs):
        """Print unless quiet mode."""
        if not self.quiet:
            print(*args, **kwargs)

    def show_extraction(self, entry: ArchiveEntry, result: ExtractionResult) -> None:
        """Show the 'Unzipping ...' line with its outcome, then the path."""
        prefix = f"   Unzipping {entry.name}... "
        if result.outcome == ExtractOutcome.CREATED:
            self.print(prefix + self._c("green", "Done"))
        elif result.outcome == ExtractOutcome.ALREADY_EXISTS:
            self.print(prefix + self._c("yellow", f"SKIPPED - File exists: {result.path}"))
        else:
            print(prefix + self._c("red", f"ERROR - {result.reason}"))
            return
        self.print(result.path)

    def show_metadata(self, metadata: TrackMetadata) -> None:
        """Display the tag fields of one file."""
        self.print(f"        Format: {metadata.format}")
        self.print(f"         Title: {metadata.title}")
        self.print(f"          Disc: {metadata.disc_number} of {metadata.total_discs}")
        self.print(f"         Track: {metadata.track_number} of {metadata.total_tracks}")
        self.print(f"         Album: {metadata.album}")
        self.print(f"        Artist: {metadata.artist}")
        self.print(f"   AlbumArtist: {metadata.album_artist}")

    def show_metadata_error(self, error: Exception) -> None:
        """Report a file whose tags could not be read."""
        print(f"        {self._c('red', 'Metadata error:')} {error}")

    def show_entries(self, entries: List[ArchiveEntry]) -> None:
        """List archive entries without extracting them."""
        print(f"\n{self._c('cyan', 'MP3 entries:')}")
        for entry in entries:
            print(f"  {entry.size:>12,}  {entry.name}")
        print(f"\n{len(entries)} MP3 file(s)")

    def show_summary(self, stats: ProcessingStats) -> None:
        """Display final processing summary."""
        print(f"\n{self._c('bold', '=' * 60)}")
        print(f"{self._c('bold', 'Processing Summary')}")
        print("=" * 60)

        print(f"MP3 entries:         {stats.entries_seen}")
        print(f"Other entries:       {stats.entries_ignored}")
        print(f"Extracted:           {self._c('green', str(stats.files_created))}")
        print(f"Already present:     {stats.files_existing}")
        print(f"Tags read:           {stats.metadata_read}")
        print(f"Extraction failures: {stats.extraction_failures}")
        print(f"Metadata failures:   {stats.metadata_failures}")

        if stats.errors:
            print(f"\n{self._c('red', 'Errors:')}")
            for error in stats.errors[:MAX_LISTED_ERRORS]:
                print(f"  - {error}")
            if len(stats.errors) > MAX_LISTED_ERRORS:
                print(f"  ... and {len(stats.errors) - MAX_LISTED_ERRORS} more errors")
