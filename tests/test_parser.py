"""Test playlist parsing and destination names"""

import dataclasses
import logging

import pytest

from m3u_migrator.core.exceptions import ReadError, TruncatedRecordError
from m3u_migrator.playlist.models import TrackRecord
from m3u_migrator.playlist.parser import (
    make_dest_name,
    parse_playlist,
    read_playlist,
    source_extension,
    split_lines,
)


class TestParsePlaylist:
    """Test parse_playlist"""

    def test_example_playlist(self, example_text):
        """Test the two-song playlist yields both records in order"""
        records = parse_playlist(example_text)

        assert records == [
            TrackRecord("songA.mp3", "00001.mp3", "#EXTINF:100,SongA"),
            TrackRecord("songB.mp3", "00002.mp3", "#EXTINF:100,SongB"),
        ]

    def test_empty_and_header_only(self):
        """Test playlists without entries yield no records"""
        assert parse_playlist("") == []
        assert parse_playlist("#EXTM3U\r") == []
        assert parse_playlist("#EXTM3U") == []

    def test_names_follow_source_order(self):
        """Test N entries give 00001..0000N with each source's extension"""
        extensions = [".mp3", ".flac", ".ogg", ".m4a", "", ".wav"] * 2
        text = "#EXTM3U\r" + "".join(
            f"#EXTINF:{i},Track {i}\rtrack{i}{ext}\r"
            for i, ext in enumerate(extensions, start=1)
        )

        records = parse_playlist(text)

        assert len(records) == len(extensions)
        assert [r.dest_name for r in records] == [
            f"{i:05d}{ext}" for i, ext in enumerate(extensions, start=1)
        ]
        assert [r.metadata_line for r in records] == [
            f"#EXTINF:{i},Track {i}" for i in range(1, len(extensions) + 1)
        ]

    def test_ignores_unrelated_lines(self):
        """Test blank lines and other directives are skipped"""
        text = "#EXTM3U\r\r#PLAYLIST:Mix\r#EXTINF:1,A\ra.mp3\r\rstray.mp3\r#EXTINF:2,B\rb.mp3\r"

        records = parse_playlist(text)

        assert [r.source_path for r in records] == ["a.mp3", "b.mp3"]
        assert [r.dest_name for r in records] == ["00001.mp3", "00002.mp3"]

    def test_missing_header_still_parses(self):
        """Test the header line is optional"""
        records = parse_playlist("#EXTINF:1,A\ra.mp3\r")
        assert len(records) == 1

    def test_no_trailing_separator(self):
        """Test the last path line doesn't need a separator"""
        records = parse_playlist("#EXTM3U\r#EXTINF:1,A\ra.mp3")
        assert records[0].source_path == "a.mp3"

    def test_source_path_kept_verbatim(self):
        """Test source paths keep their exact text"""
        records = parse_playlist("#EXTINF:1,A\r../Music/My Song.mp3 \r")
        assert records[0].source_path == "../Music/My Song.mp3 "
        assert records[0].dest_name == "00001.mp3"

    def test_truncated_record(self):
        """Test a metadata line at the end raises TruncatedRecordError"""
        with pytest.raises(TruncatedRecordError) as exc_info:
            parse_playlist("#EXTM3U\r#EXTINF:1,A\ra.mp3\r#EXTINF:2,B\r")

        assert exc_info.value.line_number == 4
        assert exc_info.value.details["metadata_line"] == "#EXTINF:2,B"

    def test_truncated_without_trailing_separator(self):
        """Test truncation is detected without a final separator too"""
        with pytest.raises(TruncatedRecordError):
            parse_playlist("#EXTM3U\r#EXTINF:1,A")

    def test_crlf_input(self):
        """Test CRLF playlists parse like CR playlists"""
        records = parse_playlist("#EXTM3U\r\n#EXTINF:1,A\r\na.mp3\r\n#EXTINF:2,B\r\nb.ogg\r\n")

        assert [r.metadata_line for r in records] == ["#EXTINF:1,A", "#EXTINF:2,B"]
        assert [r.dest_name for r in records] == ["00001.mp3", "00002.ogg"]

    def test_lf_only_input_has_no_records(self):
        """Test LF-only text is a single line"""
        assert parse_playlist("#EXTM3U\n#EXTINF:1,A\na.mp3\n") == []

    def test_byte_order_mark(self):
        """Test a leading BOM doesn't hide the first line"""
        records = parse_playlist("\ufeff#EXTINF:1,A\ra.mp3\r")
        assert records[0].metadata_line == "#EXTINF:1,A"

    def test_custom_index_width(self, example_text):
        """Test names use the configured padding"""
        records = parse_playlist(example_text, index_width=3)
        assert [r.dest_name for r in records] == ["001.mp3", "002.mp3"]

    def test_width_widens_on_overflow(self, caplog):
        """Test padding grows so names still sort in playlist order"""
        text = "".join(f"#EXTINF:1,T{i}\rt{i}.mp3\r" for i in range(12))

        with caplog.at_level(logging.WARNING):
            records = parse_playlist(text, index_width=1)

        assert records[0].dest_name == "01.mp3"
        assert records[-1].dest_name == "12.mp3"
        names = [r.dest_name for r in records]
        assert names == sorted(names)
        assert "padding to 2 digits" in caplog.text

    def test_width_exactly_full(self):
        """Test 9 records still fit in one digit"""
        text = "".join(f"#EXTINF:1,T{i}\rt{i}.mp3\r" for i in range(9))
        records = parse_playlist(text, index_width=1)
        assert records[-1].dest_name == "9.mp3"


class TestSplitLines:
    """Test split_lines"""

    def test_split(self):
        """Test separators, trailing separator and CRLF"""
        assert split_lines("a\rb\r") == ["a", "b"]
        assert split_lines("a\r\rb") == ["a", "", "b"]
        assert split_lines("a\r\nb\r\n") == ["a", "b"]
        assert split_lines("") == []


class TestSourceExtension:
    """Test source_extension"""

    def test_plain_paths(self):
        """Test ordinary relative and absolute paths"""
        assert source_extension("song.mp3") == ".mp3"
        assert source_extension("/music/Queen/Song.FLAC") == ".FLAC"
        assert source_extension("C:\\Music\\song.ogg") == ".ogg"
        assert source_extension("mix.2024.m4a") == ".m4a"

    def test_no_extension(self):
        """Test paths without an extension"""
        assert source_extension("track") == ""
        assert source_extension("album.v2/track") == ""
        assert source_extension(".hidden") == ""
        assert source_extension("track.") == ""
        assert source_extension("") == ""

    def test_surrounding_whitespace(self):
        """Test trailing characters don't leak into the extension"""
        assert source_extension("song.mp3 ") == ".mp3"
        assert source_extension("  song.mp3\t") == ".mp3"

    def test_uris(self):
        """Test query and fragment are ignored for URIs"""
        assert source_extension("http://host/a.flac?x=1") == ".flac"
        assert source_extension("file:///music/a.opus#t=10") == ".opus"
        assert source_extension("http://host/stream") == ""


class TestMakeDestName:
    """Test make_dest_name"""

    def test_dest_name(self):
        """Test the dot is not duplicated"""
        assert make_dest_name(1, "a.mp3") == "00001.mp3"
        assert make_dest_name(42, "dir/b.flac") == "00042.flac"
        assert make_dest_name(7, "noext") == "00007"
        assert make_dest_name(3, "a.mp3", width=2) == "03.mp3"


class TestTrackRecord:
    """Test TrackRecord"""

    def test_properties(self):
        """Test index and extension decoded from dest_name"""
        record = TrackRecord("a.mp3", "00042.mp3", "#EXTINF:1,A")
        assert record.index == 42
        assert record.extension == ".mp3"

        bare = TrackRecord("noext", "00007", "#EXTINF:1,B")
        assert bare.index == 7
        assert bare.extension == ""

    def test_frozen(self):
        """Test records can't be modified"""
        record = TrackRecord("a.mp3", "00001.mp3", "#EXTINF:1,A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.dest_name = "x"


class TestReadPlaylist:
    """Test read_playlist"""

    def test_reads_file(self, example_library):
        """Test the file is read with its carriage returns intact"""
        records = read_playlist(example_library)
        assert [r.dest_name for r in records] == ["00001.mp3", "00002.mp3"]

    def test_missing_file(self, temp_dir):
        """Test a missing playlist raises ReadError"""
        with pytest.raises(ReadError) as exc_info:
            read_playlist(temp_dir / "missing.m3u")
        assert exc_info.value.details["file_path"].endswith("missing.m3u")

    def test_directory(self, temp_dir):
        """Test a directory raises ReadError"""
        with pytest.raises(ReadError):
            read_playlist(temp_dir)

    def test_undecodable(self, temp_dir):
        """Test bytes invalid in the encoding raise ReadError"""
        path = temp_dir / "bad.m3u"
        path.write_bytes(b"#EXTM3U\r#EXTINF:1,\xff\xfe\ra.mp3\r")
        with pytest.raises(ReadError):
            read_playlist(path)

    def test_other_encoding(self, temp_dir):
        """Test the encoding parameter is honored"""
        path = temp_dir / "latin.m3u"
        path.write_bytes("#EXTM3U\r#EXTINF:1,Café\rcafé.mp3\r".encode("latin-1"))
        records = read_playlist(path, encoding="latin-1")
        assert records[0].metadata_line == "#EXTINF:1,Café"
