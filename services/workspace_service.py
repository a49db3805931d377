"""
Work root helpers: demo files and listings.
"""

from pathlib import Path
from typing import Iterable, Optional, Union
import structlog

logger = structlog.get_logger(__name__)

DEMO_FILENAMES = ("a1.txt", "b1.txt", "c1.txt")


def create_demo_files(root: Union[str, Path], names: Iterable[str] = DEMO_FILENAMES) -> list[Path]:
    """Create empty demonstration files in root (existing files are truncated)."""
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)

    created = []
    for name in names:
        path = root / name
        path.write_bytes(b"")
        created.append(path)

    logger.info("demo_files_created", root=str(root), count=len(created))
    return created


def list_source_files(root: Union[str, Path], exclude: Iterable[str] = ()) -> list[str]:
    """
    Regular, non-hidden files directly inside root, sorted by name.

    No recursion: files already in subdirectories are not sources.
    """
    root = Path(root)
    excluded = set(exclude)
    return sorted(
        p.name for p in root.iterdir()
        if p.is_file() and not p.name.startswith(".") and p.name not in excluded
    )


def directory_listing(root: Union[str, Path]) -> dict[str, list[str]]:
    """
    Files in root and in each immediate subdirectory.

    Returns:
        {".": [...], "folder_a": [...], ...} with sorted file names
    """
    root = Path(root)
    listing = {".": sorted(p.name for p in root.iterdir() if p.is_file())}
    for sub in sorted(p for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")):
        listing[sub.name] = sorted(p.name for p in sub.iterdir() if p.is_file())
    return listing


def format_listing(listing: dict[str, list[str]], title: Optional[str] = None) -> str:
    lines = [title] if title else []
    for directory, files in listing.items():
        lines.append(f"{directory}/")
        if not files:
            lines.append("    (empty)")
        lines.extend(f"    {name}" for name in files)
    return "\n".join(lines)
