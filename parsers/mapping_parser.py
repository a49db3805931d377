"""
Mapping file parser.

One entry per line, two comma-separated fields, no header:

    a1.txt,folder_a
    b1.txt,folder_b

There is no quoting, so a filename or destination containing a comma or a
line break, or a filename starting with '#', cannot be represented. Blank
lines and lines starting with '#' are ignored on read.
"""

from pathlib import Path
from typing import Iterable, Union
import structlog

from exceptions import MalformedEntryError, MappingFileError
from models.mapping import MappingEntry

logger = structlog.get_logger(__name__)

FIELD_SEPARATOR = ","
COMMENT_PREFIX = "#"


def parse_mapping_line(line: str, position: int = None) -> MappingEntry:
    """
    Split one mapping line into a MappingEntry.

    Args:
        line: Raw line, with or without trailing newline
        position: 1-based line/entry number, carried into the error

    Raises:
        MalformedEntryError: Not exactly two fields, or an empty field
    """
    text = line.rstrip("\r\n")
    fields = [f.strip() for f in text.split(FIELD_SEPARATOR)] if text.strip() else []

    if len(fields) != 2 or not all(fields):
        raise MalformedEntryError(raw=text, field_count=len(fields), position=position)

    return MappingEntry(filename=fields[0], destination=fields[1])


def _is_content_line(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIX)


def read_mapping_lines(path: Union[str, Path]) -> list[str]:
    """
    Read the raw entry lines of a mapping file, unparsed.

    The dispatcher parses each line itself, so a malformed line fails only
    that entry.

    Raises:
        MappingFileError: File missing or unreadable
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = [line.rstrip("\r\n") for line in f if _is_content_line(line)]
    except (OSError, UnicodeDecodeError) as e:
        logger.error("mapping_file_read_failed", path=str(path), error=str(e))
        raise MappingFileError(
            f"Cannot read mapping file {path}: {e}",
            details={"path": str(path)}
        )

    logger.debug("mapping_file_read", path=str(path), lines=len(lines))
    return lines


def read_mapping_file(path: Union[str, Path]) -> list[MappingEntry]:
    """Read and parse a mapping file; the first malformed line raises."""
    return [
        parse_mapping_line(line, position)
        for position, line in enumerate(read_mapping_lines(path), start=1)
    ]


def _check_field(value: str, name: str, position: int) -> None:
    if FIELD_SEPARATOR in value or "\n" in value or "\r" in value:
        raise MappingFileError(
            f"{name} cannot be written to a mapping file: {value!r}",
            details={"field": name, "value": value, "position": position}
        )
    # A leading '#' would be read back as a comment line
    if name == "filename" and value.strip().startswith(COMMENT_PREFIX):
        raise MappingFileError(
            f"{name} cannot start with {COMMENT_PREFIX!r} in a mapping file: {value!r}",
            details={"field": name, "value": value, "position": position}
        )


def write_mapping_file(entries: Iterable[MappingEntry], path: Union[str, Path]) -> Path:
    """
    Write entries as a mapping file, replacing any existing one.

    Every entry is checked before the file is opened, so an unrepresentable
    entry leaves the previous file untouched.

    Raises:
        MappingFileError: A field contains a comma or line break, a filename
            starts with '#', or the file cannot be written
    """
    path = Path(path)
    entries = list(entries)

    for position, entry in enumerate(entries, start=1):
        _check_field(entry.filename, "filename", position)
        _check_field(entry.destination, "destination", position)

    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            for entry in entries:
                f.write(entry.to_line() + "\n")
    except OSError as e:
        logger.error("mapping_file_write_failed", path=str(path), error=str(e))
        raise MappingFileError(
            f"Cannot write mapping file {path}: {e}",
            details={"path": str(path)}
        )

    logger.info("mapping_file_written", path=str(path), entries=len(entries))
    return path
