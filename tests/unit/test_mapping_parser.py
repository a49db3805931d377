"""
Unit tests for the mapping file parser.

Tests the two-field, line-oriented mapping format.
"""

import pytest

from parsers.mapping_parser import (
    parse_mapping_line,
    read_mapping_lines,
    read_mapping_file,
    write_mapping_file,
)
from exceptions import MalformedEntryError, MappingFileError
from models.mapping import FailureKind, MappingEntry


# ===================
# LINE PARSING TESTS
# ===================

class TestParseMappingLine:
    """Tests for parse_mapping_line()"""

    def test_parses_two_fields(self):
        """Splits filename and destination."""
        entry = parse_mapping_line("a1.txt,folder_a")
        assert entry == MappingEntry(filename="a1.txt", destination="folder_a")

    def test_strips_newline_and_whitespace(self):
        """Trailing newline and padding around fields are dropped."""
        entry = parse_mapping_line("  a1.txt , folder_a \r\n")
        assert entry.filename == "a1.txt"
        assert entry.destination == "folder_a"

    def test_keeps_inner_spaces(self):
        """Spaces inside a field are part of the name."""
        entry = parse_mapping_line("my report.pdf,Reports 2026")
        assert entry.filename == "my report.pdf"
        assert entry.destination == "Reports 2026"

    @pytest.mark.parametrize("line,count", [
        ("", 0),
        ("   ", 0),
        ("a1.txt", 1),
        ("a1.txt,folder_a,extra", 3),
        ("a,b,c,d", 4),
    ])
    def test_wrong_field_count(self, line, count):
        """Anything but two fields is malformed."""
        with pytest.raises(MalformedEntryError) as exc_info:
            parse_mapping_line(line, position=7)

        error = exc_info.value
        assert error.kind == FailureKind.MALFORMED_ENTRY
        assert error.details["field_count"] == count
        assert error.details["position"] == 7

    @pytest.mark.parametrize("line", ["a1.txt,", ",folder_a", " , "])
    def test_empty_field(self, line):
        """Two fields, one of them empty, is still malformed."""
        with pytest.raises(MalformedEntryError):
            parse_mapping_line(line)


# ===================
# FILE READ TESTS
# ===================

class TestReadMapping:
    """Tests for read_mapping_lines() and read_mapping_file()"""

    def test_reads_lines_in_order(self, tmp_path):
        path = tmp_path / "mapping.csv"
        path.write_text("a1.txt,folder_a\nb1.txt,folder_b\n", encoding="utf-8")

        assert read_mapping_lines(path) == ["a1.txt,folder_a", "b1.txt,folder_b"]

    def test_skips_blank_and_comment_lines(self, tmp_path):
        path = tmp_path / "mapping.csv"
        path.write_text("# generated\n\na1.txt,folder_a\n   \n", encoding="utf-8")

        assert read_mapping_lines(path) == ["a1.txt,folder_a"]

    def test_keeps_malformed_lines_unparsed(self, tmp_path):
        """Raw lines are returned as-is for the dispatcher to judge."""
        path = tmp_path / "mapping.csv"
        path.write_text("a1.txt\nb1.txt,folder_b\n", encoding="utf-8")

        assert read_mapping_lines(path) == ["a1.txt", "b1.txt,folder_b"]

    def test_handles_crlf(self, tmp_path):
        path = tmp_path / "mapping.csv"
        path.write_bytes(b"a1.txt,folder_a\r\n")

        assert read_mapping_file(path) == [MappingEntry(filename="a1.txt", destination="folder_a")]

    def test_strict_read_raises_on_malformed(self, tmp_path):
        path = tmp_path / "mapping.csv"
        path.write_text("a1.txt,folder_a\nbroken\n", encoding="utf-8")

        with pytest.raises(MalformedEntryError) as exc_info:
            read_mapping_file(path)
        assert exc_info.value.details["position"] == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(MappingFileError) as exc_info:
            read_mapping_lines(tmp_path / "nope.csv")
        assert exc_info.value.code == "MAPPING_FILE_ERROR"


# ===================
# FILE WRITE TESTS
# ===================

class TestWriteMappingFile:
    """Tests for write_mapping_file()"""

    def test_writes_one_line_per_entry(self, tmp_path):
        path = tmp_path / "mapping.csv"
        entries = [
            MappingEntry(filename="a1.txt", destination="folder_a"),
            MappingEntry(filename="b1.txt", destination="folder_b"),
        ]

        write_mapping_file(entries, path)

        assert path.read_text(encoding="utf-8") == "a1.txt,folder_a\nb1.txt,folder_b\n"

    def test_empty_mapping_set(self, tmp_path):
        path = write_mapping_file([], tmp_path / "mapping.csv")
        assert path.read_text(encoding="utf-8") == ""

    def test_read_back(self, tmp_path):
        """What is written reads back as the same entries."""
        path = tmp_path / "mapping.csv"
        entries = [MappingEntry(filename="notes v2.md", destination="/abs/Notes")]

        write_mapping_file(entries, path)

        assert read_mapping_file(path) == entries

    @pytest.mark.parametrize("filename,destination", [
        ("a,1.txt", "folder_a"),
        ("a1.txt", "folder,a"),
    ])
    def test_rejects_comma(self, tmp_path, filename, destination):
        """Commas cannot be represented; nothing is written."""
        path = tmp_path / "mapping.csv"
        path.write_text("previous\n", encoding="utf-8")
        entries = [
            MappingEntry(filename="ok.txt", destination="fine"),
            MappingEntry(filename=filename, destination=destination),
        ]

        with pytest.raises(MappingFileError) as exc_info:
            write_mapping_file(entries, path)

        assert exc_info.value.details["position"] == 2
        assert path.read_text(encoding="utf-8") == "previous\n"

    @pytest.mark.parametrize("filename", ["#notes.txt", "  #notes.txt"])
    def test_rejects_comment_prefixed_filename(self, tmp_path, filename):
        """A filename starting with '#' would read back as a comment; nothing is written."""
        path = tmp_path / "mapping.csv"
        entries = [
            MappingEntry(filename=filename, destination="folder_x"),
            MappingEntry(filename="a1.txt", destination="folder_a"),
        ]

        with pytest.raises(MappingFileError) as exc_info:
            write_mapping_file(entries, path)

        assert exc_info.value.details["field"] == "filename"
        assert exc_info.value.details["position"] == 1
        assert not path.exists()

    def test_hash_inside_names_round_trips(self, tmp_path):
        """'#' is only special at the start of a line."""
        path = tmp_path / "mapping.csv"
        entries = [MappingEntry(filename="track#2.mp3", destination="#music")]

        write_mapping_file(entries, path)

        assert read_mapping_file(path) == entries

    def test_unwritable_location(self, tmp_path):
        with pytest.raises(MappingFileError):
            write_mapping_file([], tmp_path / "missing-dir" / "mapping.csv")
