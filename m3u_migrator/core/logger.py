"""
Logging configuration for m3u-migrator.

This module sets up the logging system with multiple outputs:
    - Console: Real-time progress with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - copy_failures.log: Records whose media file could not be copied

File outputs are only created when a log directory is configured. The
destination directory of a migration never receives log files, so it
stays self-contained.

Usage:
    from m3u_migrator.core.logger import setup_logging, get_logger

    setup_logging(log_dir)  # Call once at startup (log_dir may be None)
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Found 12 music files")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log file name prefixes (created in <log_dir>/logs)
LOG_FULL_FILENAME = "log_full"
LOG_ERRORS_FILENAME = "log_errors"
COPY_FAILURES_FILENAME = "copy_failures"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking progress bars.

    Uses tqdm.write() so messages appear above any active progress bar
    instead of being interleaved with its carriage-return redraws.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            # Resolve stderr at emit time so redirected streams are honored
            tqdm.write(msg, file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


class CopyFailedRecordHandler(logging.Handler):
    """
    Handler that captures copy failures for the copy report file.

    Writes one block per failed record in a simple, human-readable format:

        00003.mp3
        source: /music/Artist/Song.mp3
        cause: No such file or directory

    The handler looks for specific extra fields in log records:
        - 'copy_failed_source': Source path as written in the playlist
        - 'copy_failed_destination': Destination file path
        - 'copy_failed_cause': Reason for the failure

    Only records containing these fields are written to the report.

    Attributes:
        report_path: Path to the copy_failures log file.
        report_file: Open file handle (opened by open()).

    Usage:
        log_copy_failure(logger, source, destination, cause)
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "copy_failed_source"):
            return

        if self.report_file is None:
            return

        try:
            source = getattr(record, "copy_failed_source", "")
            destination = getattr(record, "copy_failed_destination", "")
            cause = getattr(record, "copy_failed_cause", "Unknown")

            self.report_file.write(f"{Path(destination).name}\n")
            self.report_file.write(f"source: {source}\n")
            self.report_file.write(f"cause: {cause}\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """
        Close the report file handle.

        Called automatically when logging is shut down.
        Safe to call multiple times.
        """
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """
    Filter that only allows ERROR and CRITICAL level records.

    Used by the error log file handler to exclude DEBUG, INFO, and WARNING.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, console_level: str = "INFO") -> Path | None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        log_dir: Directory where log files will be created, inside a 'logs'
                 subdirectory. None means console output only.
        console_level: Level name for the console handler.

    Returns:
        The logs directory that was created, or None for console only.

    Behavior:
        1. Configure root logger level to DEBUG and clear old handlers
        2. Add console handler (TqdmLoggingHandler, colored, console_level)
        3. If log_dir is given:
           a. Create log_dir/logs
           b. Add full log file handler (DEBUG)
           c. Add error log file handler (ERROR+ via ErrorOnlyFilter)
           d. Add copy failure report handler
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    logs_dir = log_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Each run gets its own set of files
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_log_path = logs_dir / f"{LOG_FULL_FILENAME}_{timestamp}.log"
    full_handler = logging.FileHandler(full_log_path, mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_log_path = logs_dir / f"{LOG_ERRORS_FILENAME}_{timestamp}.log"
    error_handler = logging.FileHandler(error_log_path, mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    copy_failures_path = logs_dir / f"{COPY_FAILURES_FILENAME}_{timestamp}.log"
    copy_handler = CopyFailedRecordHandler(copy_failures_path)
    copy_handler.open()
    root_logger.addHandler(copy_handler)

    return logs_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called still work,
        they simply propagate to whatever the root logger has.
    """
    return logging.getLogger(name)


def format_copy_failure_message(source: str, destination: str, cause: str) -> str:
    """
    Format a copy failure message with colors.

    Args:
        source: Source path as written in the playlist.
        destination: Destination file path.
        cause: Failure reason.

    Returns:
        Colored message string.
    """
    return (
        f"{Colors.RED}Error copying{Colors.RESET} {source} to {destination}: "
        f"{Colors.YELLOW}{cause}{Colors.RESET}"
    )


def log_copy_failure(
    logger: logging.Logger,
    source: str,
    destination: str,
    cause: str
) -> None:
    """
    Log a copy failure with the extra fields the report handler expects.

    Args:
        logger: Logger to emit the record on.
        source: Source path as written in the playlist.
        destination: Destination file path.
        cause: Failure reason.
    """
    logger.error(
        format_copy_failure_message(source, destination, cause),
        extra={
            "copy_failed_source": source,
            "copy_failed_destination": destination,
            "copy_failed_cause": cause,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    Flushes and closes every handler on the root logger, then removes
    them. Typically called in a finally block.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass
        root_logger.removeHandler(handler)
