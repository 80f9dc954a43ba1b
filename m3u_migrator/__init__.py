"""
m3u-migrator: Migrate an extended M3U playlist into a self-contained folder.

A migration run reads a playlist, copies every media file it references
into a destination directory under a sequential name (00001.mp3,
00002.flac, ...) and writes a new playlist that points at those names.

Architecture:
    Steps run strictly in order, one file at a time:

    1. Parse (playlist/parser.py)
        - Split the playlist on carriage returns
        - Pair each #EXTINF line with the source path line that follows it
        - Assign each record its normalized destination name

    2. Prepare (utils/)
        - Create the destination directory if it doesn't exist

    3. Copy (migrate/)
        - Copy each source file to <dest>/<dest_name>
        - Failures are logged and counted, never fatal

    4. Rewrite (playlist/writer.py)
        - Write #EXTM3U, then each metadata line and destination name

Modules:
    core/       - Configuration, logging, progress, exceptions
    playlist/   - Track record model, parser and writer
    migrate/    - Migration driver
    utils/      - Path helpers
    cli.py      - Command-line interface

Usage:
    Command Line:
        m3u-migrate --src "Road Trip.m3u"
        m3u-migrate --src mix.m3u8 --dest /media/usb/mix --dest-playlist mix.m3u8

    Python API:
        from m3u_migrator import resolve_options, migrate_playlist

        report = migrate_playlist(resolve_options("Road Trip.m3u"))

Dependencies:
    - click / rich-click: CLI framework and colors
    - rich: Progress bar
    - tqdm: Progress-safe console logging
    - pyyaml: Configuration file parsing
"""

__version__ = "0.1.0"
__author__ = "m3u-migrator"
__license__ = "MIT"

from m3u_migrator.core import (
    Config,
    ConfigError,
    CopyError,
    DestinationError,
    FailedRecordPolicy,
    M3UMigratorError,
    NotADirectoryError,
    ReadError,
    TruncatedRecordError,
    WriteError,
    get_logger,
    load_config,
    setup_logging,
)
from m3u_migrator.playlist import TrackRecord, parse_playlist, read_playlist, write_playlist
from m3u_migrator.migrate import MigrationOptions, MigrationReport, migrate_playlist, resolve_options

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "FailedRecordPolicy",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "M3UMigratorError",
    "ConfigError",
    "ReadError",
    "TruncatedRecordError",
    "DestinationError",
    "NotADirectoryError",
    "CopyError",
    "WriteError",
    # Playlist
    "TrackRecord",
    "parse_playlist",
    "read_playlist",
    "write_playlist",
    # Migration
    "MigrationOptions",
    "MigrationReport",
    "migrate_playlist",
    "resolve_options",
]
