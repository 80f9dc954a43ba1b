"""
Extended M3U playlist writer.

Serializes track records back into the format read by the parser: the
"#EXTM3U" header, then each record's metadata line and destination name,
every line terminated by a single carriage return.
"""

from pathlib import Path
from typing import Iterable

from m3u_migrator.core.exceptions import WriteError
from m3u_migrator.core.logger import get_logger
from m3u_migrator.playlist.models import TrackRecord
from m3u_migrator.playlist.parser import EXTM3U_HEADER, LINE_SEPARATOR

logger = get_logger(__name__)


def serialize_playlist(records: Iterable[TrackRecord]) -> str:
    """
    Render records as playlist text, preserving their order.

    Example:
        serialize_playlist([TrackRecord("a.mp3", "00001.mp3", "#EXTINF:1,A")])
        # "#EXTM3U\\r#EXTINF:1,A\\r00001.mp3\\r"
    """
    lines = [EXTM3U_HEADER]
    for record in records:
        lines.append(record.metadata_line)
        lines.append(record.dest_name)
    return "".join(f"{line}{LINE_SEPARATOR}" for line in lines)


def write_playlist(path: Path, records: Iterable[TrackRecord], encoding: str = "utf-8") -> Path:
    """
    Create or overwrite a playlist file.

    Args:
        path: Destination playlist file.
        records: Records to write, in order.
        encoding: Text encoding of the output file.

    Returns:
        The path that was written.

    Raises:
        WriteError: If the file cannot be created or written.
    """
    content = serialize_playlist(records)

    try:
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)
    except (OSError, UnicodeEncodeError) as e:
        raise WriteError(
            f"Failed to write playlist {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    logger.debug(f"Wrote playlist {path}")
    return path
