"""
Utility functions for m3u-migrator.

This module provides path helpers used by the migration driver and the CLI:
    - Default name derivation for destination directories
    - Resolution of playlist source paths to local files
    - Destination directory preparation

Usage:
    from m3u_migrator.utils import (
        name_without_extension,
        resolve_source_path,
        prepare_destination
    )
"""

from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

from m3u_migrator.core.exceptions import DestinationError, NotADirectoryError
from m3u_migrator.core.logger import get_logger
from m3u_migrator.playlist.parser import is_uri

logger = get_logger(__name__)


# Hosts that refer to this machine in a file:// URI
_LOCAL_FILE_HOSTS = ("", "localhost")


def name_without_extension(name: str | Path) -> str:
    """
    Return the final component of a path without its last extension.

    Args:
        name: File name or path.

    Returns:
        The base name minus its final extension. A name whose only dot
        is its first character is returned whole.

    Examples:
        name_without_extension("lists/Road Trip.m3u8")  # "Road Trip"
        name_without_extension("mix.2024.m3u")          # "mix.2024"
        name_without_extension(".m3u")                  # ".m3u"
    """
    return Path(name).stem


def resolve_source_path(source_path: str, base_dir: Path) -> Path:
    """
    Turn a playlist source path into a local filesystem path.

    Args:
        source_path: Path as written in the playlist. Surrounding
                     whitespace is ignored.
        base_dir: Directory that relative paths are resolved against
                  (the directory of the source playlist).

    Returns:
        Local path to the media file. The file is not checked for existence.

    Raises:
        ValueError: If the path is empty, uses a non-local URI
                    (http://, a file:// URI on another host, ...), or
                    names the home directory of an unknown user.

    Examples:
        resolve_source_path("a.mp3", Path("/lists"))          # /lists/a.mp3
        resolve_source_path("/music/a.mp3", Path("/lists"))   # /music/a.mp3
        resolve_source_path("file:///music/a%20b.mp3", ...)   # /music/a b.mp3
    """
    value = source_path.strip()
    if not value:
        raise ValueError("empty source path")

    if is_uri(value):
        parts = urlsplit(value)
        if parts.scheme.lower() != "file" or parts.netloc.lower() not in _LOCAL_FILE_HOSTS:
            raise ValueError(f"unsupported source location '{value}'")
        return Path(url2pathname(parts.path))

    try:
        path = Path(value).expanduser()
    except RuntimeError as e:
        # ~user with no such user
        raise ValueError(f"cannot expand home directory in '{value}'") from e
    if not path.is_absolute():
        path = base_dir / path
    return path


def prepare_destination(path: Path) -> Path:
    """
    Ensure the destination directory exists.

    Args:
        path: Destination directory.

    Returns:
        The same path (for chaining).

    Raises:
        NotADirectoryError: If the path exists but is not a directory.
        DestinationError: If the directory cannot be created.

    Behavior:
        Creates the directory and all missing parents. Does nothing if the
        directory already exists.
    """
    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(
                f"{path} is not a directory",
                details={"path": str(path)}
            )
        return path

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationError(
            f"Failed to create destination directory {path}: {e}",
            details={"path": str(path), "original_error": str(e)}
        ) from e

    logger.debug(f"Created destination directory {path}")
    return path
