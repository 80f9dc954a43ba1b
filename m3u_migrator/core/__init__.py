"""
Core module for m3u-migrator.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and optional file outputs
    - progress: Progress bar for the copy phase

Usage:
    from m3u_migrator.core import (
        Config, load_config,
        setup_logging, get_logger,
        M3UMigratorError, ReadError, CopyError
    )
"""

from m3u_migrator.core.config import (
    Config,
    FailedRecordPolicy,
    LoggingConfig,
    MigrationConfig,
    PlaylistConfig,
    default_config,
    load_config,
)
from m3u_migrator.core.exceptions import (
    ConfigError,
    CopyError,
    DestinationError,
    M3UMigratorError,
    NotADirectoryError,
    ReadError,
    TruncatedRecordError,
    WriteError,
)
from m3u_migrator.core.logger import (
    get_logger,
    log_copy_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "PlaylistConfig",
    "MigrationConfig",
    "LoggingConfig",
    "FailedRecordPolicy",
    "default_config",
    "load_config",
    # Exceptions
    "M3UMigratorError",
    "ConfigError",
    "ReadError",
    "TruncatedRecordError",
    "DestinationError",
    "NotADirectoryError",
    "CopyError",
    "WriteError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_copy_failure",
    "shutdown_logging",
]
