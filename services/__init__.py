"""
Business logic services.

Each service handles one domain area.
"""

from services.dispatch_service import DispatchService, get_dispatch_service
from services.naming_service import derive_destination, build_mapping
from services.workspace_service import (
    create_demo_files,
    list_source_files,
    directory_listing,
    format_listing,
)

__all__ = [
    "DispatchService",
    "get_dispatch_service",
    "derive_destination",
    "build_mapping",
    "create_demo_files",
    "list_source_files",
    "directory_listing",
    "format_listing",
]
