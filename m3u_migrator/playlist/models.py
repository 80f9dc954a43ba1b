"""
Data model for playlist entries.

A migration run parses the source playlist once into an ordered list of
TrackRecord objects. The list is then consumed read-only by the copy step
and by the playlist writer, so records are frozen dataclasses.

Usage:
    from m3u_migrator.playlist.models import TrackRecord

    record = TrackRecord(
        source_path="/music/Queen/Bohemian Rhapsody.mp3",
        dest_name="00001.mp3",
        metadata_line="#EXTINF:354,Queen - Bohemian Rhapsody",
    )
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackRecord:
    """
    Immutable representation of one playlist entry.

    Attributes:
        source_path: Location of the media file exactly as it appeared in
                     the playlist. May be absolute, relative, or a URI.
                     Example: "../Music/Queen/Bohemian Rhapsody.mp3"

        dest_name: Normalized file name assigned at parse time: the 1-based
                   position zero-padded to the index width, followed by the
                   source extension. Unique within a playlist.
                   Example: "00001.mp3"

        metadata_line: The verbatim #EXTINF line that preceded the source
                       path. Opaque to the migrator, written back unchanged.
                       Example: "#EXTINF:354,Queen - Bohemian Rhapsody"
    """
    source_path: str
    dest_name: str
    metadata_line: str

    @property
    def index(self) -> int:
        """1-based playlist position encoded in dest_name."""
        return int(self.dest_name.split(".", 1)[0])

    @property
    def extension(self) -> str:
        """Extension of dest_name including the dot, or "" if it has none."""
        _, dot, extension = self.dest_name.partition(".")
        return f"{dot}{extension}"
