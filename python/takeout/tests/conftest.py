"""Shared test fixtures for takeout tests."""

import zipfile
from pathlib import Path

import pytest
from mutagen.id3 import ID3, TALB, TIT2, TPE1, TPE2, TPOS, TRCK

from takeout.config import TakeoutConfig


def make_tagged_mp3(path: Path, title="Song", album="Album", artist="Artist",
                    album_artist="Various", track="3/12", disc="1/2",
                    v2_version=4) -> bytes:
    """Write a file with an ID3v2 block followed by filler audio bytes."""
    path.write_bytes(b"\x00" * 512)
    tags = ID3()
    if title:
        tags.add(TIT2(encoding=3, text=title))
    if album:
        tags.add(TALB(encoding=3, text=album))
    if artist:
        tags.add(TPE1(encoding=3, text=artist))
    if album_artist:
        tags.add(TPE2(encoding=3, text=album_artist))
    if track:
        tags.add(TRCK(encoding=3, text=track))
    if disc:
        tags.add(TPOS(encoding=3, text=disc))
    tags.save(str(path), v2_version=v2_version)
    return path.read_bytes()


def make_zip(path: Path, members, compression=zipfile.ZIP_DEFLATED) -> Path:
    """Write a zip from (name, data) pairs; name may be a str or a ZipInfo."""
    with zipfile.ZipFile(path, "w", compression=compression) as zf:
        for name, data in members:
            zf.writestr(name, data)
    return path


@pytest.fixture
def tagged_mp3_bytes(tmp_path):
    """Bytes of an MP3 tagged Song/Album/Artist/Various, track 3/12, disc 1/2."""
    return make_tagged_mp3(tmp_path / "source.mp3")


@pytest.fixture
def work_dir(tmp_path):
    """Empty extraction directory."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture
def takeout_config(tmp_path, work_dir):
    """Config pointing at tmp_path/takeout.zip and the work fixture."""
    return TakeoutConfig(
        archive_path=tmp_path / "takeout.zip",
        output_dir=tmp_path,
        work_dir=work_dir,
    )


@pytest.fixture
def mixed_archive(tmp_path, tagged_mp3_bytes):
    """Archive with MP3s, a duplicate base name, non-MP3 files and a directory."""
    return make_zip(tmp_path / "takeout.zip", [
        ("Takeout/Music/", b""),
        ("Takeout/Music/a/b/Track01.mp3", tagged_mp3_bytes),
        ("Takeout/Music/cover.jpg", b"\xff\xd8\xff\xe0 not really a jpeg"),
        ("Takeout/Music/c/Track01.mp3", b"second copy"),
        ("Takeout/Music/LOUD.MP3", tagged_mp3_bytes),
        ("Takeout/Music/playlist.csv", b"Title,Artist\n"),
    ])
