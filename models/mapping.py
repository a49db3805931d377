"""
Mapping and dispatch models.

A Mapping Entry pairs one source filename with the directory it belongs in.
The dispatcher reports what it did as a PlacementResult; the cleanup step
reports as a CleanupResult.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field

from models.base import BaseSchema


class FailureKind(str, Enum):
    """Why a single entry could not be processed."""

    MALFORMED_ENTRY = "MALFORMED_ENTRY"
    DIRECTORY_CREATE_ERROR = "DIRECTORY_CREATE_ERROR"
    COPY_ERROR = "COPY_ERROR"
    DELETE_ERROR = "DELETE_ERROR"


class MappingEntry(BaseSchema):
    """One (source filename, destination directory) pairing."""

    filename: str = Field(..., min_length=1, description="File name in the work root")
    destination: str = Field(..., min_length=1, description="Directory name, relative or absolute")

    def to_line(self) -> str:
        """Render as a mapping file line (without newline)."""
        return f"{self.filename},{self.destination}"


class PlacementFailure(BaseSchema):
    """An entry that failed during place() or plan()."""

    position: int = Field(..., ge=1, description="1-based index in the mapping set")
    raw: str = Field(..., description="The entry as given, rendered as text")
    filename: Optional[str] = Field(None, description="Parsed filename, if parsing succeeded")
    destination: Optional[str] = Field(None, description="Parsed destination, if parsing succeeded")
    kind: FailureKind
    message: str


class PlannedPlacement(BaseSchema):
    """What place() would do for one entry."""

    entry: MappingEntry
    source: Path
    target: Path
    source_exists: bool
    creates_directory: bool
    overwrites: bool


class PlacementResult(BaseSchema):
    """Outcome of one place() call."""

    placed: list[MappingEntry] = Field(default_factory=list)
    failures: list[PlacementFailure] = Field(default_factory=list)
    created_directories: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def placed_filenames(self) -> list[str]:
        """Filenames confirmed copied; the only ones safe to clean up."""
        return [entry.filename for entry in self.placed]

    def failures_of(self, kind: FailureKind) -> list[PlacementFailure]:
        return [f for f in self.failures if f.kind == kind]


class CleanupFailure(BaseSchema):
    """A source file that could not be removed."""

    filename: str
    kind: FailureKind = FailureKind.DELETE_ERROR
    message: str


class CleanupResult(BaseSchema):
    """Outcome of one cleanup_sources() call."""

    removed: list[str] = Field(default_factory=list)
    failures: list[CleanupFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
