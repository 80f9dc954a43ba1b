"""
Exception classes for m3u-migrator.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message plus an optional details
dictionary, so the CLI can print a short diagnostic while the log file
keeps the full context.

Exception Hierarchy:
    M3UMigratorError (base)
        ConfigError - Configuration file issues
        ReadError - Source playlist cannot be read or decoded
        TruncatedRecordError - #EXTINF line without a following path line
        DestinationError - Destination directory cannot be prepared
            NotADirectoryError - Destination exists but is not a directory
        CopyError - A single media file failed to copy (NON-CRITICAL)
        WriteError - Destination playlist cannot be written

Note:
    NotADirectoryError intentionally shares its name with the builtin.
    Modules that import it from here shadow the builtin, which is what
    they want: the migrator only ever raises this one.
"""


class M3UMigratorError(Exception):
    """
    Base exception for all m3u-migrator errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (paths, line numbers).

    Example:
        try:
            migrate_playlist(options)
        except M3UMigratorError as e:
            logger.error(f"Migration failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'file_path': Path of the file involved
                     - 'line_number': 1-based line in the source playlist
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(M3UMigratorError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - Explicit --config path does not exist
        - Invalid YAML syntax
        - Wrong value types (e.g., index_width is not a positive integer)
        - Unknown failed_records policy
    """
    pass


class ReadError(M3UMigratorError):
    """
    Raised when the source playlist cannot be read.

    This is a CRITICAL error: without records there is nothing to migrate.

    Common causes:
        - File not found or permission denied
        - Content is not valid in the configured encoding
    """
    pass


class TruncatedRecordError(M3UMigratorError):
    """
    Raised when an #EXTINF metadata line is the last line of the playlist.

    Every metadata line must be followed by the line holding the source
    path. A playlist that ends right after a metadata line is treated as
    corrupt rather than producing a record with no source.

    Attributes:
        line_number: 1-based line number of the dangling metadata line.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        line_number: int | None = None
    ) -> None:
        super().__init__(message, details)
        self.line_number = line_number


class DestinationError(M3UMigratorError):
    """
    Raised when the destination directory cannot be prepared.

    This is a CRITICAL error that aborts the run before any copy.
    """
    pass


class NotADirectoryError(DestinationError):
    """
    Raised when the destination path exists but is not a directory.

    Example:
        raise NotADirectoryError(
            "out is not a directory",
            details={'path': 'out'}
        )
    """
    pass


class CopyError(M3UMigratorError):
    """
    Raised when a single media file cannot be copied.

    This is a NON-CRITICAL error: the driver logs it, counts it and
    continues with the remaining records.

    Attributes:
        source: Source path as it appeared in the playlist.
        destination: Destination file path.
        cause: Short description of the underlying failure.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        source: str = "",
        destination: str = "",
        cause: str = ""
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.destination = destination
        self.cause = cause


class WriteError(M3UMigratorError):
    """
    Raised when the destination playlist cannot be created or written.

    This is a CRITICAL error.
    """
    pass
