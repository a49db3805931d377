"""
Dispatcher: places files into directories according to a mapping set.

Best-effort batch: each entry is parsed, its destination directory is
created if missing, and the file is copied in. A failure on one entry is
recorded and the batch moves on. Source files are never removed here;
cleanup_sources() is a separate call the caller makes once it has decided
which placements it trusts.
"""

import filecmp
import shutil
from pathlib import Path
from typing import Any, Iterable, Optional, Union
import structlog

from config import get_settings
from exceptions import (
    PlacementError,
    MalformedEntryError,
    DirectoryCreateError,
    CopyError,
    DeleteError,
)
from models.mapping import (
    MappingEntry,
    PlacementFailure,
    PlacementResult,
    PlannedPlacement,
    CleanupFailure,
    CleanupResult,
)
from parsers.mapping_parser import parse_mapping_line, FIELD_SEPARATOR

logger = structlog.get_logger(__name__)

# A mapping set item: a parsed entry, a raw mapping line, or a 2-sequence.
EntryLike = Union[MappingEntry, str, tuple, list]


def _render(item: Any) -> str:
    """Text form of a mapping set item, for failure reports."""
    if isinstance(item, MappingEntry):
        return item.to_line()
    if isinstance(item, str):
        return item.rstrip("\r\n")
    if isinstance(item, (tuple, list)):
        return FIELD_SEPARATOR.join(str(v) for v in item)
    return repr(item)


def _reason(error: Exception) -> str:
    return getattr(error, "strerror", None) or str(error)


class DispatchService:
    """
    Places files from a single work root into destination directories.

    Args:
        root: Directory the source filenames are relative to. Relative
            destinations are resolved against it too.
        create_parents: Create missing parents of a destination directory
            instead of failing.
    """

    def __init__(self, root: Union[str, Path], create_parents: bool = False):
        self.root = Path(root)
        self.create_parents = create_parents

    # ===================
    # RESOLUTION
    # ===================

    def coerce_entry(self, item: EntryLike, position: Optional[int] = None) -> MappingEntry:
        """
        Turn a mapping set item into a MappingEntry.

        Raises:
            MalformedEntryError: Not exactly two non-empty fields
        """
        if isinstance(item, MappingEntry):
            return item
        if isinstance(item, str):
            return parse_mapping_line(item, position)
        if isinstance(item, (tuple, list)):
            fields = [str(v).strip() if v is not None else "" for v in item]
            if len(fields) != 2 or not all(fields):
                raise MalformedEntryError(raw=_render(item), field_count=len(fields), position=position)
            return MappingEntry(filename=fields[0], destination=fields[1])
        raise MalformedEntryError(raw=_render(item), field_count=0, position=position)

    def source_path(self, entry: MappingEntry) -> Path:
        return self.root / entry.filename

    def destination_path(self, entry: MappingEntry) -> Path:
        destination = Path(entry.destination)
        if destination.is_absolute():
            return destination
        return self.root / destination

    def target_path(self, entry: MappingEntry) -> Path:
        """Where the copy of entry.filename lands."""
        return self.destination_path(entry) / Path(entry.filename).name

    # ===================
    # PLACEMENT
    # ===================

    def _ensure_directory(self, entry: MappingEntry, result: PlacementResult) -> Path:
        """Reuse the destination directory or create it."""
        directory = self.destination_path(entry)
        if directory.is_dir():
            return directory

        try:
            directory.mkdir(parents=self.create_parents)
        except FileExistsError:
            raise DirectoryCreateError(entry.destination, "path exists and is not a directory")
        except (OSError, ValueError) as e:
            raise DirectoryCreateError(entry.destination, _reason(e))

        result.created_directories.append(directory)
        logger.info("directory_created", destination=entry.destination, path=str(directory))
        return directory

    def _copy(self, entry: MappingEntry, directory: Path) -> Path:
        """Copy the source file's bytes into directory, overwriting."""
        source = self.source_path(entry)
        target = directory / Path(entry.filename).name

        if not source.is_file():
            raise CopyError(entry.filename, entry.destination, "source file not found")

        try:
            shutil.copyfile(source, target)
        except (OSError, ValueError) as e:
            raise CopyError(entry.filename, entry.destination, _reason(e))

        return target

    def place(self, entries: Iterable[EntryLike]) -> PlacementResult:
        """
        Place every entry of a mapping set, in order.

        Never raises for a single entry: malformed entries, directory
        creation failures and copy failures are collected in the result.
        Running it again with the same mapping set is safe; existing
        directories are reused and existing copies overwritten.

        Args:
            entries: MappingEntry objects, raw mapping lines, or
                (filename, destination) pairs

        Returns:
            PlacementResult with placed entries, failures, and the
            directories this call created
        """
        result = PlacementResult()

        for position, item in enumerate(entries, start=1):
            entry = None
            try:
                entry = self.coerce_entry(item, position)
                directory = self._ensure_directory(entry, result)
                target = self._copy(entry, directory)
            except PlacementError as e:
                result.failures.append(PlacementFailure(
                    position=position,
                    raw=_render(item),
                    filename=entry.filename if entry else None,
                    destination=entry.destination if entry else None,
                    kind=e.kind,
                    message=e.message,
                ))
                logger.warning(
                    "placement_failed",
                    position=position,
                    kind=e.kind.value,
                    error=e.message,
                )
                continue

            result.placed.append(entry)
            logger.debug("file_placed", filename=entry.filename, target=str(target))

        logger.info(
            "placement_complete",
            root=str(self.root),
            placed=len(result.placed),
            failed=len(result.failures),
            directories_created=len(result.created_directories),
        )
        return result

    def plan(self, entries: Iterable[EntryLike]) -> tuple[list[PlannedPlacement], list[PlacementFailure]]:
        """
        Dry run of place(): report what would happen without touching disk.

        Only malformed entries fail here; missing sources are flagged via
        PlannedPlacement.source_exists.
        """
        planned: list[PlannedPlacement] = []
        failures: list[PlacementFailure] = []
        pending_dirs: set[Path] = set()

        for position, item in enumerate(entries, start=1):
            try:
                entry = self.coerce_entry(item, position)
            except MalformedEntryError as e:
                failures.append(PlacementFailure(
                    position=position,
                    raw=_render(item),
                    kind=e.kind,
                    message=e.message,
                ))
                continue

            directory = self.destination_path(entry)
            creates = not directory.is_dir() and directory not in pending_dirs
            if creates:
                pending_dirs.add(directory)

            target = self.target_path(entry)
            planned.append(PlannedPlacement(
                entry=entry,
                source=self.source_path(entry),
                target=target,
                source_exists=self.source_path(entry).is_file(),
                creates_directory=creates,
                overwrites=target.exists(),
            ))

        return planned, failures

    def verify(self, entries: Iterable[MappingEntry]) -> list[MappingEntry]:
        """
        Check placed entries against their sources.

        Returns:
            Entries whose copy is missing or differs byte-wise from the
            source (a missing source counts as unverifiable)
        """
        mismatched = []
        for entry in entries:
            source = self.source_path(entry)
            target = self.target_path(entry)
            try:
                same = target.is_file() and filecmp.cmp(source, target, shallow=False)
            except (OSError, ValueError):
                same = False
            if not same:
                logger.warning("placement_unverified", filename=entry.filename, target=str(target))
                mismatched.append(entry)
        return mismatched

    # ===================
    # CLEANUP
    # ===================

    def _remove(self, filename: str) -> None:
        path = self.root / filename
        if path.is_dir():
            raise DeleteError(filename, "path is a directory")
        try:
            path.unlink()
        except FileNotFoundError:
            raise DeleteError(filename, "source file not found")
        except (OSError, ValueError) as e:
            raise DeleteError(filename, _reason(e))

    def cleanup_sources(self, filenames: Iterable[str]) -> CleanupResult:
        """
        Delete source files from the work root.

        Call this only with filenames whose placement was confirmed, e.g.
        PlacementResult.placed_filenames. Failures are collected, never
        raised.
        """
        result = CleanupResult()

        for filename in filenames:
            try:
                self._remove(filename)
            except DeleteError as e:
                result.failures.append(CleanupFailure(filename=filename, message=e.message))
                logger.warning("source_removal_failed", filename=filename, error=e.message)
                continue

            result.removed.append(filename)
            logger.debug("source_removed", filename=filename)

        logger.info(
            "cleanup_complete",
            root=str(self.root),
            removed=len(result.removed),
            failed=len(result.failures),
        )
        return result


_service: Optional[DispatchService] = None


def get_dispatch_service() -> DispatchService:
    """Singleton dispatcher bound to the configured work root."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = DispatchService(settings.work_root, create_parents=settings.create_parents)
    return _service
