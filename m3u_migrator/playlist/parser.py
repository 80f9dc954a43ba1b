"""
Extended M3U playlist parser.

Converts playlist text into an ordered list of TrackRecord objects and
assigns each record its normalized destination name.

Format:
    Lines are separated by a single carriage return ("\\r"), the same
    separator the writer emits. The first line is normally the "#EXTM3U"
    header. Each entry is a "#EXTINF..." metadata line immediately followed
    by the line holding the source path:

        #EXTM3U\\r#EXTINF:100,SongA\\rsongA.mp3\\r#EXTINF:100,SongB\\rsongB.mp3\\r

    Lines that are not part of an #EXTINF pair are ignored (header, blank
    lines, other directives). A line feed left at the start of a line by
    CRLF input is dropped, so CRLF playlists parse the same way.

Destination Names:
    {index:05d}{extension}, e.g. "00001.mp3". Index is the 1-based
    position in the playlist, so lexicographic order equals playback
    order. A playlist with more records than the padding can hold is
    padded to the digit count of its record count instead.

Usage:
    from m3u_migrator.playlist.parser import read_playlist

    records = read_playlist(Path("Road Trip.m3u"))
"""

import re
from pathlib import Path
from urllib.parse import urlsplit

from m3u_migrator.core.exceptions import ReadError, TruncatedRecordError
from m3u_migrator.core.logger import get_logger
from m3u_migrator.playlist.models import TrackRecord

logger = get_logger(__name__)


EXTM3U_HEADER = "#EXTM3U"
EXTINF_MARKER = "#EXTINF"
LINE_SEPARATOR = "\r"

DEFAULT_INDEX_WIDTH = 5

_BYTE_ORDER_MARK = "\ufeff"
_URI_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_PATH_SEPARATOR_PATTERN = re.compile(r"[/\\]")


def is_uri(source_path: str) -> bool:
    """Return True if source_path looks like "scheme://..."."""
    return _URI_SCHEME_PATTERN.match(source_path.strip()) is not None


def source_extension(source_path: str) -> str:
    """
    Extract the file extension of a playlist source path.

    Args:
        source_path: Path as written in the playlist.

    Returns:
        The extension including its dot (e.g. ".mp3"), or "" if none.

    Rules:
        - Surrounding whitespace is ignored
        - For URIs, the query string and fragment are ignored
        - Only the last path segment is considered ("/" and "\\" both separate)
        - The extension starts at the last "." of that segment
        - No extension if the segment has no ".", starts with its only "."
          (".hidden"), or ends with "."

    Examples:
        source_extension("Music/Queen/Song.mp3")       # ".mp3"
        source_extension("C:\\\\Music\\\\song.FLAC")       # ".FLAC"
        source_extension("http://host/a.ogg?x=1")     # ".ogg"
        source_extension("album.v2/track")            # ""
    """
    path = source_path.strip()
    if is_uri(path):
        path = urlsplit(path).path

    segment = _PATH_SEPARATOR_PATTERN.split(path)[-1]
    dot = segment.rfind(".")
    if dot <= 0 or dot == len(segment) - 1:
        return ""
    return segment[dot:]


def make_dest_name(index: int, source_path: str, width: int = DEFAULT_INDEX_WIDTH) -> str:
    """
    Build the normalized destination file name for a record.

    Args:
        index: 1-based position of the record in the playlist.
        source_path: Source path, used only for its extension.
        width: Zero-padding width of the index.

    Returns:
        File name such as "00042.flac".
    """
    return f"{index:0{width}d}{source_extension(source_path)}"


def split_lines(text: str) -> list[str]:
    """
    Split playlist text on the carriage-return separator.

    A leading byte-order mark is removed, a line feed at the start of a
    line is dropped, and a trailing separator does not produce an extra
    empty line.
    """
    if text.startswith(_BYTE_ORDER_MARK):
        text = text[len(_BYTE_ORDER_MARK):]

    lines = [
        line[1:] if line.startswith("\n") else line
        for line in text.split(LINE_SEPARATOR)
    ]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _effective_width(count: int, index_width: int) -> int:
    """Widen the padding when the record count doesn't fit in index_width digits."""
    if count < 10 ** index_width:
        return index_width

    width = len(str(count))
    logger.warning(
        f"{count} records exceed {index_width}-digit names, padding to {width} digits"
    )
    return width


def parse_playlist(text: str, index_width: int = DEFAULT_INDEX_WIDTH) -> list[TrackRecord]:
    """
    Parse playlist text into an ordered list of track records.

    This is a pure function: it does no I/O.

    Args:
        text: Full playlist content.
        index_width: Zero-padding width for destination names.

    Returns:
        Records in playlist order. Empty if the playlist has no entries.

    Raises:
        TruncatedRecordError: If an #EXTINF line is the last line.

    Behavior:
        A cursor walks the lines. On an #EXTINF line it reads the next line
        as the source path, emits one record and moves past both lines.
        Any other line moves the cursor by one.
    """
    lines = split_lines(text)
    entries: list[tuple[str, str]] = []

    cursor = 0
    while cursor < len(lines):
        line = lines[cursor]
        if not line.startswith(EXTINF_MARKER):
            cursor += 1
            continue

        if cursor + 1 >= len(lines):
            raise TruncatedRecordError(
                f"Metadata line {cursor + 1} has no following source path line",
                details={"line_number": cursor + 1, "metadata_line": line},
                line_number=cursor + 1
            )

        entries.append((line, lines[cursor + 1]))
        cursor += 2

    width = _effective_width(len(entries), index_width)

    return [
        TrackRecord(
            source_path=source_path,
            dest_name=make_dest_name(index, source_path, width),
            metadata_line=metadata_line,
        )
        for index, (metadata_line, source_path) in enumerate(entries, start=1)
    ]


def read_playlist(
    path: Path,
    encoding: str = "utf-8",
    index_width: int = DEFAULT_INDEX_WIDTH
) -> list[TrackRecord]:
    """
    Read and parse a playlist file.

    Args:
        path: Playlist file to read.
        encoding: Text encoding of the file.
        index_width: Zero-padding width for destination names.

    Returns:
        Records in playlist order.

    Raises:
        ReadError: If the file cannot be opened, read, or decoded.
        TruncatedRecordError: If an #EXTINF line is the last line.
    """
    try:
        # newline="" keeps the "\r" separators intact
        with open(path, "r", encoding=encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(
            f"Failed to read playlist {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    records = parse_playlist(text, index_width)
    logger.debug(f"Parsed {len(records)} records from {path}")
    return records
