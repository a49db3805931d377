"""
Unit tests for the error hierarchy.
"""

from exceptions import (
    AppError,
    PlacementError,
    MalformedEntryError,
    DirectoryCreateError,
    CopyError,
    DeleteError,
    MappingFileError,
    ValidationError,
)
from models.mapping import FailureKind


class TestPlacementErrors:
    """Each placement error carries its failure kind as code."""

    def test_kinds(self):
        assert MalformedEntryError("x", 1).kind == FailureKind.MALFORMED_ENTRY
        assert DirectoryCreateError("d", "denied").kind == FailureKind.DIRECTORY_CREATE_ERROR
        assert CopyError("f", "d", "gone").kind == FailureKind.COPY_ERROR
        assert DeleteError("f", "busy").kind == FailureKind.DELETE_ERROR

    def test_code_matches_kind(self):
        error = CopyError("a1.txt", "folder_a", "source file not found")

        assert error.code == "COPY_ERROR"
        assert error.filename == "a1.txt"
        assert error.destination == "folder_a"
        assert "a1.txt" in error.message

    def test_hierarchy(self):
        assert isinstance(DeleteError("f", "busy"), PlacementError)
        assert isinstance(DeleteError("f", "busy"), AppError)
        assert isinstance(MappingFileError("bad"), ValidationError)

    def test_to_dict(self):
        payload = DirectoryCreateError("folder_a", "Permission denied").to_dict()

        assert payload["error"]["code"] == "DIRECTORY_CREATE_ERROR"
        assert payload["error"]["details"]["destination"] == "folder_a"
        assert "timestamp" in payload["error"]
