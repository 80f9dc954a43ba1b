"""
Playlist module for m3u-migrator.

Reading and writing of carriage-return separated extended M3U playlists:
    - models: TrackRecord
    - parser: parse_playlist, read_playlist, destination name helpers
    - writer: serialize_playlist, write_playlist
"""

from m3u_migrator.playlist.models import TrackRecord
from m3u_migrator.playlist.parser import (
    EXTINF_MARKER,
    EXTM3U_HEADER,
    LINE_SEPARATOR,
    make_dest_name,
    parse_playlist,
    read_playlist,
    source_extension,
)
from m3u_migrator.playlist.writer import serialize_playlist, write_playlist

__all__ = [
    "TrackRecord",
    "EXTM3U_HEADER",
    "EXTINF_MARKER",
    "LINE_SEPARATOR",
    "make_dest_name",
    "source_extension",
    "parse_playlist",
    "read_playlist",
    "serialize_playlist",
    "write_playlist",
]
