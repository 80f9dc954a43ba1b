"""
Migration module for m3u-migrator.

Orchestrates a migration run: parse, prepare destination, copy, rewrite.

Usage:
    from m3u_migrator.migrate import resolve_options, migrate_playlist
"""

from m3u_migrator.migrate.migrator import (
    MigrationOptions,
    MigrationReport,
    copy_record,
    migrate_playlist,
    resolve_options,
)

__all__ = [
    "MigrationOptions",
    "MigrationReport",
    "copy_record",
    "migrate_playlist",
    "resolve_options",
]
