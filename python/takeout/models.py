"""Data models for Takeout."""

import posixpath
import stat
import zipfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO, List, Optional

from takeout.errors import ExtractionError

# DOS attribute bit for read-only entries (low byte of external_attr)
DOS_READ_ONLY = 0x01
DEFAULT_FILE_MODE = 0o666
READ_ONLY_FILE_MODE = 0o444


class ExtractOutcome(Enum):
    """Outcome of extracting a single archive entry."""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class ArchiveEntry:
    """A file record inside the source zip archive."""
    name: str
    size: int
    mode: int
    _archive: Optional[zipfile.ZipFile] = field(default=None, repr=False, compare=False)
    _info: Optional[zipfile.ZipInfo] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_zip_info(cls, archive: zipfile.ZipFile,
                      info: zipfile.ZipInfo) -> "ArchiveEntry":
        """Build an entry from a ZipInfo record of an open archive."""
        return cls(
            name=info.filename,
            size=info.file_size,
            mode=entry_mode(info),
            _archive=archive,
            _info=info,
        )

    @property
    def base_name(self) -> str:
        """Final path component; directories inside the archive are dropped."""
        return posixpath.basename(self.name.replace("\\", "/"))

    @property
    def extension(self) -> str:
        """Lowercased extension of the base name, including the dot."""
        return posixpath.splitext(self.base_name)[1].lower()

    def open(self) -> IO[bytes]:
        """Open the uncompressed byte stream of this entry."""
        if self._archive is None or self._info is None:
            raise ValueError(f"Entry is not attached to an open archive: {self.name}")
        return self._archive.open(self._info)


def entry_mode(info: zipfile.ZipInfo) -> int:
    """
    Derive file permission bits for a zip entry.

    Unix-created archives store st_mode in the high 16 bits of
    external_attr. Entries without one fall back to DOS semantics.
    """
    unix_mode = info.external_attr >> 16
    if unix_mode:
        return stat.S_IMODE(unix_mode)
    if info.external_attr & DOS_READ_ONLY:
        return READ_ONLY_FILE_MODE
    return DEFAULT_FILE_MODE


@dataclass
class ExtractionResult:
    """Tagged result of an extraction: where the file is and what happened."""
    path: Path
    outcome: ExtractOutcome
    error: Optional[ExtractionError] = None

    @property
    def reason(self) -> Optional[str]:
        return str(self.error) if self.error else None

    @property
    def has_file(self) -> bool:
        """True if a file is available at path for metadata reading."""
        return self.outcome != ExtractOutcome.FAILED


@dataclass(frozen=True)
class TrackMetadata:
    """Read-only view of the tag metadata of one extracted file."""
    format: str = ""
    title: str = ""
    album: str = ""
    artist: str = ""
    album_artist: str = ""
    disc_number: int = 0
    total_discs: int = 0
    track_number: int = 0
    total_tracks: int = 0


@dataclass
class ProcessingStats:
    """Statistics for a processing run."""
    entries_seen: int = 0
    entries_ignored: int = 0
    files_created: int = 0
    files_existing: int = 0
    extraction_failures: int = 0
    metadata_read: int = 0
    metadata_failures: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.extraction_failures + self.metadata_failures

    def record_extraction(self, result: ExtractionResult, entry_name: str) -> None:
        """Count an extraction outcome."""
        if result.outcome == ExtractOutcome.CREATED:
            self.files_created += 1
        elif result.outcome == ExtractOutcome.ALREADY_EXISTS:
            self.files_existing += 1
        else:
            self.extraction_failures += 1
            self.errors.append(f"{entry_name}: {result.reason}")
