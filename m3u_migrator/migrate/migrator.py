"""
Migration driver.

Runs one migration: parse the source playlist, prepare the destination
directory, copy every referenced media file under its normalized name,
then write the rewritten playlist next to the copies.

Error Policy:
    - Reading/parsing the playlist, preparing the destination and writing
      the final playlist are fatal: their exceptions propagate.
    - A single media file failing to copy is not: the CopyError is logged,
      recorded in the report, and the remaining records are still copied.

Failed Records:
    With FailedRecordPolicy.INCLUDE (default) the rewritten playlist lists
    every record, including those whose copy failed. It describes the
    intended final state of the directory, so it may reference missing
    files. FailedRecordPolicy.SKIP leaves failed records out; the remaining
    records keep the names they were copied under.

Usage:
    from m3u_migrator.migrate import resolve_options, migrate_playlist

    options = resolve_options("Road Trip.m3u")
    report = migrate_playlist(options)
    print(f"{report.copied_count} copied, {report.failed_count} failed")
"""

import os
import shutil
import stat
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path

from m3u_migrator.core.config import Config, FailedRecordPolicy, default_config
from m3u_migrator.core.exceptions import CopyError
from m3u_migrator.core.logger import get_logger, log_copy_failure
from m3u_migrator.core.progress import CopyProgressBar
from m3u_migrator.playlist.models import TrackRecord
from m3u_migrator.playlist.parser import read_playlist
from m3u_migrator.playlist.writer import write_playlist
from m3u_migrator.utils import name_without_extension, prepare_destination, resolve_source_path

logger = get_logger(__name__)


@dataclass(frozen=True)
class MigrationOptions:
    """
    Fully resolved inputs of one migration run.

    Attributes:
        source_playlist: Playlist file to migrate.
        destination_dir: Directory receiving the copies and the new playlist.
        destination_playlist: File name of the new playlist inside destination_dir.
        failed_records: What the new playlist does with records that failed to copy.
    """
    source_playlist: Path
    destination_dir: Path
    destination_playlist: str
    failed_records: FailedRecordPolicy = FailedRecordPolicy.INCLUDE

    @property
    def playlist_path(self) -> Path:
        """Full path of the playlist that will be written."""
        return self.destination_dir / self.destination_playlist


@dataclass
class MigrationReport:
    """
    Outcome of a migration run.

    Attributes:
        records: All records parsed from the source playlist, in order.
        written_records: Records written to the new playlist, in order.
        errors: One CopyError per record whose media file was not copied.
        playlist_path: Path of the playlist that was written.
    """
    records: list[TrackRecord]
    written_records: list[TrackRecord]
    errors: list[CopyError] = field(default_factory=list)
    playlist_path: Path | None = None

    @property
    def failed_count(self) -> int:
        return len(self.errors)

    @property
    def copied_count(self) -> int:
        return len(self.records) - len(self.errors)

    @property
    def has_failures(self) -> bool:
        return bool(self.errors)


def resolve_options(
    source_playlist: str | Path,
    destination_dir: str | Path | None = None,
    destination_playlist: str | None = None,
    failed_records: FailedRecordPolicy = FailedRecordPolicy.INCLUDE
) -> MigrationOptions:
    """
    Apply the defaulting rules to the command inputs.

    Args:
        source_playlist: Playlist file to migrate (required).
        destination_dir: Destination directory. Defaults to the source
                         file name without its extension, relative to the
                         working directory.
        destination_playlist: New playlist file name. Defaults to the
                              source file name.
        failed_records: Policy for records whose copy fails.

    Returns:
        MigrationOptions with every path filled in.

    Raises:
        ValueError: If source_playlist is empty.

    Example:
        resolve_options("lists/Road Trip.m3u")
        # destination_dir=Path("Road Trip"), destination_playlist="Road Trip.m3u"
    """
    if not str(source_playlist):
        raise ValueError("source playlist is required")

    source = Path(source_playlist)

    if not destination_dir:
        destination_dir = name_without_extension(source)
    if not destination_playlist:
        destination_playlist = source.name

    return MigrationOptions(
        source_playlist=source,
        destination_dir=Path(destination_dir),
        destination_playlist=destination_playlist,
        failed_records=failed_records,
    )


def copy_record(record: TrackRecord, destination_dir: Path, base_dir: Path) -> Path:
    """
    Copy one record's media file to destination_dir/dest_name.

    Args:
        record: Record to copy.
        destination_dir: Existing destination directory.
        base_dir: Directory that relative source paths are resolved against.

    Returns:
        Path of the copied file.

    Raises:
        CopyError: If the source is unsupported, missing, not a regular
                   file, unreadable, or the destination cannot be written.

    Behavior:
        Source and destination handles are opened in nested with blocks,
        so both are closed whether the copy succeeds or fails.
        If the destination already is the source file (a playlist migrated
        again into its own directory), nothing is copied.
    """
    destination = destination_dir / record.dest_name

    try:
        source = resolve_source_path(record.source_path, base_dir)
    except ValueError as e:
        raise _copy_error(record, destination, str(e)) from e

    # ValueError covers paths the OS rejects outright (embedded NUL)
    try:
        source_stat = source.stat()
    except (OSError, ValueError) as e:
        raise _copy_error(record, destination, _cause(e)) from e

    if not stat.S_ISREG(source_stat.st_mode):
        raise _copy_error(record, destination, f"{source} is not a regular file")

    # Re-migrating in place: the file is already where it belongs
    if _is_same_file(source_stat, destination):
        logger.debug(f"{destination} is already the source file, not copying")
        return destination

    try:
        with open(source, "rb") as src, open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except (OSError, ValueError) as e:
        raise _copy_error(record, destination, _cause(e)) from e

    return destination


def _is_same_file(source_stat: os.stat_result, destination: Path) -> bool:
    """True if destination exists and is the file described by source_stat."""
    try:
        destination_stat = destination.stat()
    except (OSError, ValueError):
        # Not there yet, so not the same file
        return False
    return os.path.samestat(source_stat, destination_stat)


def _cause(error: Exception) -> str:
    """Short failure reason for an OS-level error."""
    return getattr(error, "strerror", None) or str(error)


def _copy_error(record: TrackRecord, destination: Path, cause: str) -> CopyError:
    """Build a CopyError for a record."""
    return CopyError(
        f"Error copying {record.source_path} to {destination}: {cause}",
        details={
            "source": record.source_path,
            "destination": str(destination),
            "dest_name": record.dest_name,
        },
        source=record.source_path,
        destination=str(destination),
        cause=cause
    )


def migrate_playlist(
    options: MigrationOptions,
    config: Config | None = None,
    show_progress: bool = True
) -> MigrationReport:
    """
    Run one migration.

    Args:
        options: Resolved migration inputs.
        config: Application configuration (encoding, index width).
                Defaults are used when None.
        show_progress: Show a progress bar while copying.

    Returns:
        MigrationReport describing what was copied and written.

    Raises:
        ReadError: If the source playlist cannot be read.
        TruncatedRecordError: If the source playlist ends on an #EXTINF line.
        NotADirectoryError: If the destination exists and is not a directory.
        DestinationError: If the destination directory cannot be created.
        WriteError: If the new playlist cannot be written.

    Behavior:
        1. Parse the source playlist
        2. Log the number of records found
        3. Create the destination directory if needed
        4. Copy records one at a time, in order, recording each CopyError
        5. Write the new playlist once, filtered by the failed-record policy
    """
    config = config or default_config()

    records = read_playlist(
        options.source_playlist,
        encoding=config.playlist.encoding,
        index_width=config.playlist.index_width
    )
    logger.info(f"Found {len(records)} music files")

    prepare_destination(options.destination_dir)

    base_dir = options.source_playlist.parent
    errors: list[CopyError] = []

    progress_bar = CopyProgressBar(total=len(records)) if show_progress and records else nullcontext()
    with progress_bar as progress:
        for record in records:
            try:
                destination = copy_record(record, options.destination_dir, base_dir)
                logger.debug(f"Copied {record.source_path} -> {destination}")
                success = True
            except CopyError as e:
                log_copy_failure(logger, e.source, e.destination, e.cause)
                errors.append(e)
                success = False

            if progress is not None:
                progress.update(success=success)

    if options.failed_records is FailedRecordPolicy.SKIP:
        failed_names = {e.details["dest_name"] for e in errors}
        written_records = [r for r in records if r.dest_name not in failed_names]
    else:
        written_records = list(records)

    playlist_path = write_playlist(
        options.playlist_path,
        written_records,
        encoding=config.playlist.encoding
    )
    logger.info(f"Wrote playlist {playlist_path} with {len(written_records)} entries")

    return MigrationReport(
        records=records,
        written_records=written_records,
        errors=errors,
        playlist_path=playlist_path,
    )
