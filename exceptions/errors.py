"""
Custom exception classes for the application.

Placement errors are raised per entry by the dispatcher and collected into
its result; they never abort a batch. The remaining errors propagate to the
caller.
"""

from typing import Optional, Any
from datetime import datetime, timezone

from models.mapping import FailureKind


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "COPY_ERROR")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a serializable error record."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Invalid input or configuration."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details=details
        )


# ===================
# PLACEMENT ERRORS
# ===================

class PlacementError(AppError):
    """A single mapping entry could not be processed."""

    kind: FailureKind

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        destination: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.filename = filename
        self.destination = destination
        super().__init__(
            code=self.kind.value,
            message=message,
            details={"filename": filename, "destination": destination, **(details or {})}
        )


class MalformedEntryError(PlacementError):
    """Entry does not split into exactly two non-empty fields."""

    kind = FailureKind.MALFORMED_ENTRY

    def __init__(self, raw: str, field_count: int, position: Optional[int] = None):
        super().__init__(
            message=f"Expected 2 non-empty fields, got {field_count}: {raw!r}",
            details={"raw": raw, "field_count": field_count, "position": position}
        )


class DirectoryCreateError(PlacementError):
    """Destination directory could not be created."""

    kind = FailureKind.DIRECTORY_CREATE_ERROR

    def __init__(self, destination: str, reason: str):
        super().__init__(
            message=f"Cannot create directory {destination}: {reason}",
            destination=destination
        )


class CopyError(PlacementError):
    """Source unreadable or destination unwritable."""

    kind = FailureKind.COPY_ERROR

    def __init__(self, filename: str, destination: str, reason: str):
        super().__init__(
            message=f"Cannot copy {filename} into {destination}: {reason}",
            filename=filename,
            destination=destination
        )


class DeleteError(PlacementError):
    """Source file could not be removed during cleanup."""

    kind = FailureKind.DELETE_ERROR

    def __init__(self, filename: str, reason: str):
        super().__init__(
            message=f"Cannot remove {filename}: {reason}",
            filename=filename
        )


# ===================
# MAPPING FILE ERRORS
# ===================

class MappingFileError(ValidationError):
    """Mapping file cannot be read or an entry cannot be written to it."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="MAPPING_FILE_ERROR",
            message=message,
            details=details
        )


class PatternError(ValidationError):
    """Folder pattern or template is unusable."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(
            code="INVALID_FOLDER_PATTERN",
            message=f"Invalid folder pattern: {reason}",
            details={"pattern": pattern}
        )
