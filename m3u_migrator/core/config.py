"""
Configuration management for m3u-migrator.

This module handles loading, validating, and providing access to the
optional YAML configuration file. Every setting has a default, so the
tool works without any configuration file at all.

Configuration File Location:
    1. The path given with --config (must exist)
    2. m3u_migrator.yaml in the current working directory, if present
    3. Built-in defaults otherwise

Example m3u_migrator.yaml:
    playlist:
      encoding: utf-8
      index_width: 5

    migration:
      failed_records: include   # include | skip
      strict: false             # exit with status 5 when any copy failed

    logging:
      directory: null           # e.g. "~/.local/state/m3u-migrator"
      level: INFO
"""

import codecs
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from m3u_migrator.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "m3u_migrator.yaml"

DEFAULT_ENCODING = "utf-8"
DEFAULT_INDEX_WIDTH = 5
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FailedRecordPolicy(str, Enum):
    """
    What the rewritten playlist does with records whose copy failed.

    INCLUDE: Keep them. The playlist describes the intended final state,
             so it may reference files that are missing on disk.
    SKIP: Drop them. The playlist only references files that were copied.
    """
    INCLUDE = "include"
    SKIP = "skip"


@dataclass(frozen=True)
class PlaylistConfig:
    """
    Playlist format settings.

    Attributes:
        encoding: Text encoding used to read the source and write the result.
        index_width: Zero-padding width of destination names. Default: 5.
    """
    encoding: str
    index_width: int


@dataclass(frozen=True)
class MigrationConfig:
    """
    Migration behavior settings.

    Attributes:
        failed_records: Policy for records whose copy failed.
        strict: If True, any copy failure makes the run exit non-zero.
    """
    failed_records: FailedRecordPolicy
    strict: bool


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings.

    Attributes:
        directory: Where the logs/ folder is created, or None for console only.
        level: Console log level name.
    """
    directory: Path | None
    level: str


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable.

    Example:
        config = load_config()
        print(f"Padding names to {config.playlist.index_width} digits")
    """
    playlist: PlaylistConfig
    migration: MigrationConfig
    logging: LoggingConfig


def default_config() -> Config:
    """Return the configuration used when no file is present."""
    return Config(
        playlist=PlaylistConfig(encoding=DEFAULT_ENCODING, index_width=DEFAULT_INDEX_WIDTH),
        migration=MigrationConfig(failed_records=FailedRecordPolicy.INCLUDE, strict=False),
        logging=LoggingConfig(directory=None, level=DEFAULT_LOG_LEVEL),
    )


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from a YAML file.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for m3u_migrator.yaml in the current
                     working directory and falls back to defaults when
                     it is not there.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, the file has
                     invalid YAML syntax, or contains invalid values.

    Behavior:
        1. Locate config file (explicit path or CWD/m3u_migrator.yaml)
        2. Read and parse YAML content
        3. Validate each section, applying defaults for missing keys
        4. Create and return frozen Config object
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return default_config()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "use the defaults" file
    if raw_config is None:
        return default_config()

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return Config(
        playlist=_parse_playlist_config(_section(raw_config, "playlist")),
        migration=_parse_migration_config(_section(raw_config, "migration")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    """
    Return a config section, or an empty dict if the section is absent.

    Raises:
        ConfigError: If the section is present but is not a dictionary.
    """
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _parse_playlist_config(section: dict[str, Any]) -> PlaylistConfig:
    """
    Parse and validate the playlist section.

    Raises:
        ConfigError: If encoding is unknown or index_width is not a positive integer.
    """
    encoding = section.get("encoding", DEFAULT_ENCODING)
    if not isinstance(encoding, str) or not encoding.strip():
        raise ConfigError(
            "'playlist.encoding' must be a non-empty string",
            details={"field": "playlist.encoding"}
        )
    try:
        codecs.lookup(encoding.strip())
    except LookupError as e:
        raise ConfigError(
            f"Unknown encoding: {encoding}",
            details={"field": "playlist.encoding", "value": encoding}
        ) from e

    index_width = section.get("index_width", DEFAULT_INDEX_WIDTH)
    # bool is an int subclass, reject it explicitly
    if isinstance(index_width, bool) or not isinstance(index_width, int) or index_width < 1:
        raise ConfigError(
            "'playlist.index_width' must be a positive integer",
            details={"field": "playlist.index_width", "value": index_width}
        )

    return PlaylistConfig(encoding=encoding.strip(), index_width=index_width)


def _parse_migration_config(section: dict[str, Any]) -> MigrationConfig:
    """
    Parse and validate the migration section.

    Raises:
        ConfigError: If failed_records is not 'include'/'skip' or strict is not a bool.
    """
    raw_policy = section.get("failed_records", FailedRecordPolicy.INCLUDE.value)
    try:
        policy = FailedRecordPolicy(str(raw_policy).strip().lower())
    except ValueError as e:
        raise ConfigError(
            "'migration.failed_records' must be 'include' or 'skip'",
            details={"field": "migration.failed_records", "value": raw_policy}
        ) from e

    strict = section.get("strict", False)
    if not isinstance(strict, bool):
        raise ConfigError(
            "'migration.strict' must be true or false",
            details={"field": "migration.strict", "value": strict}
        )

    return MigrationConfig(failed_records=policy, strict=strict)


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    """
    Parse and validate the logging section.

    Expands ~ in the directory. Does NOT create the directory
    (that happens in setup_logging()).

    Raises:
        ConfigError: If directory is not a string or level is unknown.
    """
    directory = None
    raw_directory = section.get("directory")
    if raw_directory is not None:
        if not isinstance(raw_directory, str) or not raw_directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string or null",
                details={"field": "logging.directory"}
            )
        directory = Path(raw_directory.strip()).expanduser().resolve()

    level = section.get("level", DEFAULT_LOG_LEVEL)
    if not isinstance(level, str) or level.strip().upper() not in _LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of {', '.join(_LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    return LoggingConfig(directory=directory, level=level.strip().upper())
