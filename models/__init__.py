"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.mapping import (
    MappingEntry,
    FailureKind,
    PlacementFailure,
    PlacementResult,
    PlannedPlacement,
    CleanupFailure,
    CleanupResult,
)

__all__ = [
    # Base
    "BaseSchema",

    # Mapping / dispatch
    "MappingEntry",
    "FailureKind",
    "PlacementFailure",
    "PlacementResult",
    "PlannedPlacement",
    "CleanupFailure",
    "CleanupResult",
]
