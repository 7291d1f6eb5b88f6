"""ID3 tag reader using mutagen."""

from pathlib import Path
from typing import Optional, Tuple, Union

from mutagen import MutagenError
from mutagen.id3 import ID3

from takeout.errors import FileOpenError, TagParseError
from takeout.models import TrackMetadata


class ID3Handler:
    """Reads ID3 tags from extracted MP3 files. Never writes."""

    SUPPORTED_EXTENSIONS = {".mp3"}

    @classmethod
    def is_supported(cls, file_path: Union[str, Path]) -> bool:
        """Check if file format is supported (case-insensitive)."""
        name = str(file_path).lower()
        return any(name.endswith(ext) for ext in cls.SUPPORTED_EXTENSIONS)

    def read_metadata(self, file_path: Union[str, Path]) -> TrackMetadata:
        """
        Read tag metadata from an MP3 file.

        Args:
            file_path: Path to audio file

        Returns:
            TrackMetadata with the file's tags; absent strings are ""
            and absent numbers are 0.

        Raises:
            FileOpenError: If the file cannot be opened.
            TagParseError: If there is no ID3 block or it is malformed.
        """
        try:
            fileobj = open(file_path, "rb")
        except OSError as e:
            raise FileOpenError(f"Cannot open {file_path}: {e}") from e

        with fileobj:
            try:
                tags = ID3(fileobj)
            except (MutagenError, ValueError) as e:
                raise TagParseError(f"No readable ID3 tag in {file_path}: {e}") from e

        track_num, total_tracks = self._parse_track_disc(self._get_tag_str(tags, "TRCK"))
        disc_num, total_discs = self._parse_track_disc(self._get_tag_str(tags, "TPOS"))

        return TrackMetadata(
            format=self._format_name(tags.version),
            title=self._get_tag_str(tags, "TIT2"),
            album=self._get_tag_str(tags, "TALB"),
            artist=self._get_tag_str(tags, "TPE1"),
            album_artist=self._get_tag_str(tags, "TPE2"),
            disc_number=disc_num,
            total_discs=total_discs,
            track_number=track_num,
            total_tracks=total_tracks,
        )

    def _format_name(self, version: Optional[Tuple[int, ...]]) -> str:
        """Format identifier like 'ID3v2.3' from mutagen's version tuple."""
        if not version:
            return "ID3"
        return "ID3v" + ".".join(str(v) for v in version[:2])

    def _get_tag_str(self, tags: ID3, key: str) -> str:
        """Get first string value of a text frame, or ''."""
        frame = tags.get(key)
        if frame is None:
            return ""
        text = getattr(frame, "text", None)
        if not text:
            return ""
        return str(text[0]).strip()

    def _parse_track_disc(self, value: str) -> Tuple[int, int]:
        """
        Parse track/disc string like '3/12' or '3'.

        Returns:
            (number, total) tuple, 0 for missing or unparseable parts
        """
        if not value:
            return 0, 0

        parts = value.split("/")
        number = self._to_int(parts[0])
        total = self._to_int(parts[1]) if len(parts) > 1 else 0
        return number, total

    def _to_int(self, value: str) -> int:
        try:
            return max(int(value.strip()), 0)
        except ValueError:
            return 0
