"""Test configuration and fixtures"""

import logging
import tempfile
from pathlib import Path

import pytest

from m3u_migrator.core.logger import shutdown_logging


EXAMPLE_PLAYLIST = "#EXTM3U\r#EXTINF:100,SongA\rsongA.mp3\r#EXTINF:100,SongB\rsongB.mp3\r"


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def example_text():
    """Two-song playlist text with carriage-return separators"""
    return EXAMPLE_PLAYLIST


@pytest.fixture
def make_playlist(temp_dir):
    """Write a carriage-return separated playlist into temp_dir"""
    def _make(entries, name="mix.m3u", header=True):
        lines = ["#EXTM3U"] if header else []
        for metadata_line, source_path in entries:
            lines.append(metadata_line)
            lines.append(source_path)
        path = temp_dir / name
        path.write_bytes("".join(f"{line}\r" for line in lines).encode("utf-8"))
        return path
    return _make


@pytest.fixture
def example_library(temp_dir):
    """The two-song playlist with its media files next to it"""
    (temp_dir / "songA.mp3").write_bytes(b"song A audio")
    (temp_dir / "songB.mp3").write_bytes(b"song B audio")
    playlist = temp_dir / "example.m3u"
    playlist.write_bytes(EXAMPLE_PLAYLIST.encode("utf-8"))
    return playlist


@pytest.fixture
def reset_logging():
    """Close any handlers setup_logging() installed during the test"""
    yield
    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)
