"""
Mapping file parsers module.
"""

from parsers.mapping_parser import (
    parse_mapping_line,
    read_mapping_lines,
    read_mapping_file,
    write_mapping_file,
)

__all__ = [
    "parse_mapping_line",
    "read_mapping_lines",
    "read_mapping_file",
    "write_mapping_file",
]
