"""
Command-line interface for m3u-migrator.

This module implements the CLI using Click. rich-click is used for the
output colors.

Usage:
    # Copy everything referenced by "Road Trip.m3u" into ./Road Trip/
    m3u-migrate --src "Road Trip.m3u"

    # Choose the destination directory and playlist name
    m3u-migrate --src lists/mix.m3u8 --dest /media/usb/mix --dest-playlist mix.m3u8

    # Leave failed copies out of the new playlist and fail the run on them
    m3u-migrate --src mix.m3u --skip-failed --strict

Exit Status:
    0    Success (copy failures alone do not change this unless --strict)
    1    Configuration or unexpected error
    2    Usage error, or the source playlist cannot be read or parsed
    3    Destination directory cannot be prepared
    4    Destination playlist cannot be written
    5    Some copies failed and --strict is set
    130  Interrupted by user
"""

import sys
from pathlib import Path

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "m3u-migrate": [
        {
            "name": "Paths",
            "options": ["--src", "--dest", "--dest-playlist"],
        },
        {
            "name": "Failure Handling",
            "options": ["--skip-failed", "--strict"],
        },
        {
            "name": "Advanced Options",
            "options": ["--config", "--log-dir", "--no-progress"],
        },
        {
            "name": "Info",
            "options": ["--version", "--help"],
        },
    ],
}

from m3u_migrator import __version__
from m3u_migrator.core import (
    ConfigError,
    DestinationError,
    FailedRecordPolicy,
    M3UMigratorError,
    ReadError,
    TruncatedRecordError,
    WriteError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from m3u_migrator.migrate import MigrationReport, migrate_playlist, resolve_options

logger = get_logger(__name__)


EXIT_CONFIG_ERROR = 1
EXIT_READ_ERROR = 2
EXIT_DESTINATION_ERROR = 3
EXIT_WRITE_ERROR = 4
EXIT_PARTIAL_FAILURE = 5
EXIT_INTERRUPTED = 130


@click.command(name="m3u-migrate")
@click.option(
    "--src",
    "src",
    required=True,
    type=click.Path(path_type=Path),
    metavar="<playlist.m3u>",
    help="Source m3u / m3u8 playlist file"
)
@click.option(
    "--dest",
    type=click.Path(path_type=Path),
    default=None,
    metavar="<dir>",
    help="Destination directory, defaults to source file name without extension"
)
@click.option(
    "--dest-playlist",
    type=str,
    default=None,
    metavar="<name>",
    help="Destination m3u / m3u8 playlist file name, defaults to source file name"
)
@click.option(
    "--skip-failed",
    is_flag=True,
    help="Leave records whose copy failed out of the new playlist"
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 5 if any file failed to copy"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./m3u_migrator.yaml if present)"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Write log files to <dir>/logs"
)
@click.option(
    "--no-progress",
    is_flag=True,
    help="Don't show the copy progress bar"
)
@click.version_option(__version__, "--version", prog_name="m3u-migrate")
def cli(
    src: Path,
    dest: Path | None,
    dest_playlist: str | None,
    skip_failed: bool,
    strict: bool,
    config_path: Path | None,
    log_dir: Path | None,
    no_progress: bool
) -> None:
    """
    m3u-migrate: Copy a playlist and its music into one folder.

    Every file referenced by the source playlist is copied into the
    destination directory as 00001.<ext>, 00002.<ext>, ... in playlist
    order, and a new playlist pointing at those names is written next
    to them.

    \b
    BASIC USAGE:
        m3u-migrate --src "Road Trip.m3u"
        m3u-migrate --src mix.m3u8 --dest /media/usb/mix
    """
    _run_migration({
        "src": src,
        "dest": dest,
        "dest_playlist": dest_playlist,
        "skip_failed": skip_failed,
        "strict": strict,
        "config_path": config_path,
        "log_dir": log_dir,
        "no_progress": no_progress,
    })


def _run_migration(options: dict) -> None:
    """
    Execute a migration run based on CLI options.

    This is the main orchestration function that:
    1. Loads configuration
    2. Sets up logging
    3. Resolves paths and runs the migration
    4. Reports results

    Args:
        options: Dictionary with CLI options.

    Raises:
        SystemExit: On fatal errors, or partial failure in strict mode.
    """
    try:
        config = load_config(options["config_path"])

        setup_logging(options["log_dir"] or config.logging.directory, config.logging.level)
        logger.debug(f"m3u-migrator {__version__} starting")

        if options["skip_failed"]:
            policy = FailedRecordPolicy.SKIP
        else:
            policy = config.migration.failed_records
        strict = options["strict"] or config.migration.strict

        migration_options = resolve_options(
            options["src"],
            destination_dir=options["dest"],
            destination_playlist=options["dest_playlist"],
            failed_records=policy
        )

        report = migrate_playlist(
            migration_options,
            config=config,
            show_progress=not options["no_progress"]
        )

        _print_summary(report)

        if strict and report.has_failures:
            click.echo(
                f"Error: {report.failed_count} of {len(report.records)} files failed to copy",
                err=True
            )
            sys.exit(EXIT_PARTIAL_FAILURE)

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    except (ReadError, TruncatedRecordError) as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.debug(f"Playlist error details: {e.details}")
        sys.exit(EXIT_READ_ERROR)

    except DestinationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_DESTINATION_ERROR)

    except WriteError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Write error: {e.message}", exc_info=True)
        sys.exit(EXIT_WRITE_ERROR)

    except M3UMigratorError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(EXIT_CONFIG_ERROR)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(EXIT_INTERRUPTED)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(EXIT_CONFIG_ERROR)

    finally:
        shutdown_logging()


def _print_summary(report: MigrationReport) -> None:
    """
    Print final migration statistics.

    Args:
        report: Result of the migration run.
    """
    logger.info("=" * 60)
    logger.info("MIGRATION SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Records:           {len(report.records)}")
    logger.info(f"Copied:            {report.copied_count}")
    logger.info(f"Failed:            {report.failed_count}")
    logger.info(f"Playlist entries:  {len(report.written_records)}")
    logger.info(f"Playlist:          {report.playlist_path}")
    logger.info("=" * 60)


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `m3u-migrate` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
