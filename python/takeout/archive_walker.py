"""Zip archive walker that yields the MP3 entries of an archive."""

import logging
import zipfile
from pathlib import Path
from typing import Iterator, List, Optional

from takeout.errors import ArchiveOpenError
from takeout.id3_handler import ID3Handler
from takeout.models import ArchiveEntry

logger = logging.getLogger(__name__)


class ArchiveWalker:
    """
    Walks a zip archive and presents its MP3 entries.

    The archive stays open between open() and close(); use it as a
    context manager so the handle is released when the walk ends.

    Attributes:
        archive_path (Path): Location of the zip file.
        ignored (int): Number of file entries filtered out as non-MP3.
        archive (zipfile.ZipFile | None): The open archive, if any.
    """

    def __init__(self, archive_path: Path) -> None:
        self.archive_path = Path(archive_path)
        self.ignored = 0
        self.archive: Optional[zipfile.ZipFile] = None

    def __enter__(self) -> "ArchiveWalker":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """
        Open the archive for reading.

        Raises:
            ArchiveOpenError: If the path is missing, not a file, or not a zip.
        """
        if not self.archive_path.is_file():
            raise ArchiveOpenError(f"Archive not found: {self.archive_path}")
        try:
            self.archive = zipfile.ZipFile(self.archive_path)
        except zipfile.BadZipFile as e:
            raise ArchiveOpenError(f"Not a valid zip archive: {self.archive_path} ({e})") from e
        except OSError as e:
            raise ArchiveOpenError(f"Cannot open archive {self.archive_path}: {e}") from e
        logger.debug(f"Opened archive {self.archive_path} "
                     f"({len(self.archive.infolist())} entries)")

    def close(self) -> None:
        """Release the archive handle. Safe to call more than once."""
        if self.archive is not None:
            self.archive.close()
            self.archive = None

    def entries(self) -> Iterator[ArchiveEntry]:
        """
        Lazily yield the MP3 entries of the archive, in archive order.

        Directory entries are skipped and other file entries are counted
        in ``ignored``. The returned generator is single-use.

        Raises:
            ArchiveOpenError: If the walker has not been opened.
        """
        if self.archive is None:
            raise ArchiveOpenError(f"Archive is not open: {self.archive_path}")
        return self._walk(self.archive)

    def _walk(self, archive: zipfile.ZipFile) -> Iterator[ArchiveEntry]:
        for info in archive.infolist():
            if info.is_dir():
                continue
            entry = ArchiveEntry.from_zip_info(archive, info)
            if not ID3Handler.is_supported(entry.base_name):
                self.ignored += 1
                logger.debug(f"Ignoring non-MP3 entry: {entry.name}")
                continue
            yield entry

    def list_entries(self) -> List[ArchiveEntry]:
        """Return all MP3 entries at once."""
        return list(self.entries())
