"""
Derives destination folder names from filenames.

A regex is matched at the start of each filename and its groups are
formatted into a folder template:

    pattern  ^([A-Za-z]+)\\d*\\.
    template folder_{0}
    a1.txt   -> folder_a
"""

import re
from typing import Iterable, Optional, Union
import structlog

from exceptions import PatternError
from models.mapping import MappingEntry

logger = structlog.get_logger(__name__)

DEFAULT_PATTERN = r"^([A-Za-z]+)\d*\."
DEFAULT_TEMPLATE = "folder_{0}"


def compile_pattern(pattern: Union[str, re.Pattern]) -> re.Pattern:
    """Compile a folder pattern, raising PatternError on bad syntax."""
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e))


def derive_destination(
    filename: str,
    pattern: Union[str, re.Pattern] = DEFAULT_PATTERN,
    template: str = DEFAULT_TEMPLATE,
) -> Optional[str]:
    """
    Folder name for filename, or None when the pattern does not match.

    Positional groups fill {0}, {1}...; named groups fill {name}. With no
    groups, {0} is the whole match.

    Raises:
        PatternError: Bad regex, or a template referencing a missing group
    """
    regex = compile_pattern(pattern)
    match = regex.match(filename)
    if match is None:
        return None

    groups = match.groups(default="") or (match.group(0),)
    try:
        folder = template.format(*groups, **match.groupdict(default=""))
    except (IndexError, KeyError, ValueError) as e:
        raise PatternError(regex.pattern, f"template {template!r} cannot be formatted: {e}")

    return folder.strip() or None


def build_mapping(
    filenames: Iterable[str],
    pattern: Union[str, re.Pattern] = DEFAULT_PATTERN,
    template: str = DEFAULT_TEMPLATE,
) -> tuple[list[MappingEntry], list[str]]:
    """
    Build a mapping set from filenames, preserving their order.

    Returns:
        (entries, unmatched filenames)
    """
    regex = compile_pattern(pattern)
    entries: list[MappingEntry] = []
    unmatched: list[str] = []

    for filename in filenames:
        destination = derive_destination(filename, regex, template)
        if destination is None:
            unmatched.append(filename)
            logger.debug("filename_unmatched", filename=filename, pattern=regex.pattern)
            continue
        entries.append(MappingEntry(filename=filename, destination=destination))

    logger.info("mapping_built", entries=len(entries), unmatched=len(unmatched))
    return entries, unmatched
