"""Extraction of single archive entries into the working directory."""

import logging
import os
import zipfile
import zlib
from pathlib import Path

from takeout.errors import CopyError, DestinationCreateError, ExtractionError
from takeout.models import ArchiveEntry, ExtractionResult, ExtractOutcome

logger = logging.getLogger(__name__)

CHUNK_SIZE = 128 * 1024  # 128 KB

# Errors zipfile can raise while opening or reading a member stream
READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, OSError,
               RuntimeError, NotImplementedError)


class Extractor:
    """Copies archive entries into a flat destination directory."""

    def extract(self, entry: ArchiveEntry, destination_dir: Path) -> ExtractionResult:
        """
        Extract one entry to destination_dir / entry.base_name.

        An existing regular file at the destination is left untouched and
        reported as ALREADY_EXISTS. Failures are returned as FAILED with
        the error attached instead of being raised.

        Args:
            entry: Archive entry to extract
            destination_dir: Directory the file is written into

        Returns:
            ExtractionResult with the destination path and outcome
        """
        dest_path = Path(destination_dir) / entry.base_name

        if dest_path.is_file():
            return ExtractionResult(dest_path, ExtractOutcome.ALREADY_EXISTS)

        try:
            fd = self._create_exclusive(dest_path, entry.mode)
        except FileExistsError:
            if dest_path.is_file():
                return ExtractionResult(dest_path, ExtractOutcome.ALREADY_EXISTS)
            return self._failed(dest_path, DestinationCreateError(
                f"Destination exists and is not a regular file: {dest_path}"))
        except OSError as e:
            return self._failed(dest_path, DestinationCreateError(
                f"Cannot create {dest_path}: {e}"))

        try:
            with os.fdopen(fd, "wb") as dest_file:
                self._copy(entry, dest_file, dest_path)
        except ExtractionError as e:
            self._remove_partial(dest_path)
            return self._failed(dest_path, e)
        except OSError as e:
            # Raised by close() when buffered data cannot be flushed
            self._remove_partial(dest_path)
            return self._failed(dest_path, DestinationCreateError(
                f"Cannot write {dest_path}: {e}"))

        return ExtractionResult(dest_path, ExtractOutcome.CREATED)

    def _create_exclusive(self, dest_path: Path, mode: int) -> int:
        """Create the file only if nothing exists there yet, in one step."""
        flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
        return os.open(dest_path, flags, mode)

    def _copy(self, entry: ArchiveEntry, dest_file, dest_path: Path) -> None:
        """Stream the entry into dest_file, keeping read and write failures apart."""
        try:
            source = entry.open()
        except READ_ERRORS as e:
            raise CopyError(f"Cannot read {entry.name} from archive: {e}") from e

        with source:
            while True:
                try:
                    chunk = source.read(CHUNK_SIZE)
                except READ_ERRORS as e:
                    raise CopyError(f"Corrupt or truncated entry {entry.name}: {e}") from e
                if not chunk:
                    break
                try:
                    dest_file.write(chunk)
                except OSError as e:
                    raise DestinationCreateError(f"Cannot write {dest_path}: {e}") from e

    def _remove_partial(self, dest_path: Path) -> None:
        try:
            dest_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial file {dest_path}: {e}")

    def _failed(self, dest_path: Path, error: ExtractionError) -> ExtractionResult:
        logger.debug(f"Extraction failed for {dest_path}: {error}")
        return ExtractionResult(dest_path, ExtractOutcome.FAILED, error)
