"""Tests for archive_walker.py."""

import zipfile

import pytest

from conftest import make_zip
from takeout.archive_walker import ArchiveWalker
from takeout.errors import ArchiveOpenError


class TestOpen:
    """Tests for opening archives."""

    def test_missing_archive_raises(self, tmp_path):
        """Should raise ArchiveOpenError for a path that does not exist."""
        walker = ArchiveWalker(tmp_path / "nope.zip")
        with pytest.raises(ArchiveOpenError):
            walker.open()

    def test_directory_raises(self, tmp_path):
        """Should refuse a directory path."""
        with pytest.raises(ArchiveOpenError):
            ArchiveWalker(tmp_path).open()

    def test_not_a_zip_raises(self, tmp_path):
        """Should raise ArchiveOpenError for a file that is not a zip."""
        bogus = tmp_path / "bogus.zip"
        bogus.write_bytes(b"this is not a zip archive")
        with pytest.raises(ArchiveOpenError):
            ArchiveWalker(bogus).open()

    def test_zero_byte_archive_raises(self, tmp_path):
        """Should raise ArchiveOpenError for an empty file."""
        empty = tmp_path / "empty.zip"
        empty.write_bytes(b"")
        with pytest.raises(ArchiveOpenError):
            ArchiveWalker(empty).open()

    def test_context_manager_releases_handle(self, mixed_archive):
        """Should close the archive when the with block exits."""
        with ArchiveWalker(mixed_archive) as walker:
            assert walker.archive is not None
        assert walker.archive is None

    def test_releases_handle_on_error(self, mixed_archive):
        """Should close the archive even if the walk raises."""
        with pytest.raises(KeyError):
            with ArchiveWalker(mixed_archive) as walker:
                raise KeyError("boom")
        assert walker.archive is None

    def test_close_is_idempotent(self, mixed_archive):
        """Should allow close() twice."""
        walker = ArchiveWalker(mixed_archive)
        walker.open()
        walker.close()
        walker.close()

    def test_entries_requires_open(self, mixed_archive):
        """Should raise when walking an unopened archive."""
        with pytest.raises(ArchiveOpenError):
            ArchiveWalker(mixed_archive).entries()


class TestEntries:
    """Tests for MP3 filtering."""

    def test_yields_only_mp3_entries(self, mixed_archive):
        """Should yield MP3 entries in archive order, case-insensitively."""
        with ArchiveWalker(mixed_archive) as walker:
            names = [e.name for e in walker.entries()]
        assert names == [
            "Takeout/Music/a/b/Track01.mp3",
            "Takeout/Music/c/Track01.mp3",
            "Takeout/Music/LOUD.MP3",
        ]

    def test_counts_ignored_entries(self, mixed_archive):
        """Should count non-MP3 files but not directories."""
        with ArchiveWalker(mixed_archive) as walker:
            list(walker.entries())
            assert walker.ignored == 2

    def test_entries_is_lazy(self, mixed_archive):
        """Should not scan anything until iterated."""
        with ArchiveWalker(mixed_archive) as walker:
            gen = walker.entries()
            assert walker.ignored == 0
            next(gen)
            assert walker.ignored == 0

    def test_generator_is_single_use(self, mixed_archive):
        """Should be exhausted after one pass."""
        with ArchiveWalker(mixed_archive) as walker:
            gen = walker.entries()
            assert len(list(gen)) == 3
            assert list(gen) == []

    def test_entry_exposes_size_and_stream(self, mixed_archive, tagged_mp3_bytes):
        """Should expose uncompressed size and content stream."""
        with ArchiveWalker(mixed_archive) as walker:
            entry = next(walker.entries())
            assert entry.size == len(tagged_mp3_bytes)
            assert entry.extension == ".mp3"
            with entry.open() as stream:
                assert stream.read() == tagged_mp3_bytes

    def test_empty_archive(self, tmp_path):
        """Should yield nothing for an archive without members."""
        archive = make_zip(tmp_path / "empty.zip", [])
        with ArchiveWalker(archive) as walker:
            assert walker.list_entries() == []

    def test_list_entries(self, mixed_archive):
        """Should return all MP3 entries as a list."""
        with ArchiveWalker(mixed_archive) as walker:
            entries = walker.list_entries()
        assert [e.base_name for e in entries] == ["Track01.mp3", "Track01.mp3", "LOUD.MP3"]

    def test_stored_entries(self, tmp_path):
        """Should handle uncompressed members too."""
        archive = make_zip(tmp_path / "stored.zip", [("x.mp3", b"data")],
                           compression=zipfile.ZIP_STORED)
        with ArchiveWalker(archive) as walker:
            assert [e.name for e in walker.entries()] == ["x.mp3"]
