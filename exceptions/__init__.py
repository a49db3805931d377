"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Placement (collected per entry)
    PlacementError,
    MalformedEntryError,
    DirectoryCreateError,
    CopyError,
    DeleteError,

    # Mapping file / derivation
    MappingFileError,
    PatternError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Placement
    "PlacementError",
    "MalformedEntryError",
    "DirectoryCreateError",
    "CopyError",
    "DeleteError",

    # Mapping file / derivation
    "MappingFileError",
    "PatternError",
]
