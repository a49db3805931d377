"""
File Dispatcher — command line entry point.

Sorts the flat files of a work root into folders:

    1. (optional) create demo files
    2. derive a folder per file from a filename pattern, or take an
       externally written mapping file
    3. write the mapping file, then read it back line by line
    4. place every entry (copy into its folder)
    5. verify the copies and remove only the verified sources
    6. print the resulting directory listing

Usage:
    python main.py --root ./inbox --demo
    python main.py --root ./inbox --dry-run
    python main.py --root ./inbox --from-mapping --keep-sources
"""

import argparse
import sys
from typing import Optional

import structlog
from pydantic import ValidationError as SettingsValidationError

from config import Settings, configure_logging
from exceptions import ValidationError
from parsers.mapping_parser import read_mapping_lines, write_mapping_file
from services.dispatch_service import DispatchService
from services.naming_service import build_mapping
from services.workspace_service import (
    create_demo_files,
    list_source_files,
    directory_listing,
    format_listing,
)

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sort the files of a directory into folders using a filename mapping.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--root", help="Work root holding the source files (default: WORK_ROOT or .)")
    parser.add_argument("--mapping", help="Mapping file name, relative to the root (default: mapping.csv)")
    parser.add_argument("--pattern", help="Regex matched against filenames to derive the folder")
    parser.add_argument("--template", help="Folder name template, e.g. 'folder_{0}'")
    parser.add_argument("--demo", action="store_true", help="Create a1.txt, b1.txt, c1.txt in the root first")
    parser.add_argument(
        "--from-mapping",
        action="store_true",
        help="Use the existing mapping file instead of deriving one",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would happen and exit")
    parser.add_argument("--keep-sources", action="store_true", help="Do not remove placed source files")
    parser.add_argument(
        "--create-parents",
        action="store_true",
        default=None,
        help="Create missing parent directories of destinations",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from env/.env, overridden by any CLI flag that was given."""
    overrides = {
        "work_root": args.root,
        "mapping_file": args.mapping,
        "folder_pattern": args.pattern,
        "folder_template": args.template,
        "create_parents": args.create_parents,
        "log_level": args.log_level,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def print_plan(service: DispatchService, lines: list[str]) -> None:
    planned, failures = service.plan(lines)
    print(f"Planned placements: {len(planned)}")
    for p in planned:
        flags = []
        if p.creates_directory:
            flags.append("new folder")
        if p.overwrites:
            flags.append("overwrite")
        if not p.source_exists:
            flags.append("MISSING SOURCE")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        print(f"  {p.entry.filename} -> {p.entry.destination}/{suffix}")
    for f in failures:
        print(f"  entry {f.position}: {f.kind.value}: {f.message}")
    print("\nDry run only. No files copied or removed.")


def run(settings: Settings, demo: bool = False, from_mapping: bool = False,
        dry_run: bool = False, keep_sources: bool = False) -> int:
    """Run the whole flow against settings.work_root and return an exit code."""
    root = settings.work_root
    mapping_path = settings.mapping_path

    if not root.is_dir() and not demo:
        logger.error("work_root_missing", root=str(root))
        print(f"ERROR: work root does not exist: {root}")
        return EXIT_CONFIG_ERROR

    if demo:
        create_demo_files(root)

    # ── Build or take the mapping set ──
    if from_mapping:
        lines = read_mapping_lines(mapping_path)
    else:
        sources = list_source_files(root, exclude=[mapping_path.name])
        entries, unmatched = build_mapping(sources, settings.folder_pattern, settings.folder_template)
        for name in unmatched:
            print(f"  no folder for {name} (pattern did not match); left in place")
        if dry_run:
            lines = [e.to_line() for e in entries]
        else:
            write_mapping_file(entries, mapping_path)
            lines = read_mapping_lines(mapping_path)

    service = DispatchService(root, create_parents=settings.create_parents)

    if dry_run:
        print_plan(service, lines)
        return EXIT_OK

    # ── Place ──
    result = service.place(lines)
    print(f"Placed {len(result.placed)} of {len(lines)} entries")
    for f in result.failures:
        print(f"  entry {f.position}: {f.kind.value}: {f.message}")

    # ── Verify, then clean up only what is confirmed ──
    unverified = service.verify(result.placed)
    confirmed = [e.filename for e in result.placed if e not in unverified]
    for entry in unverified:
        print(f"  not removing {entry.filename}: copy could not be verified")

    cleanup_ok = True
    if keep_sources:
        print("Sources kept (--keep-sources)")
    elif confirmed:
        cleanup = service.cleanup_sources(confirmed)
        cleanup_ok = cleanup.ok
        print(f"Removed {len(cleanup.removed)} source files")
        for f in cleanup.failures:
            print(f"  {f.kind.value}: {f.message}")

    print()
    print(format_listing(directory_listing(root), title=f"Contents of {root}:"))

    return EXIT_OK if result.ok and not unverified and cleanup_ok else EXIT_FAILURES


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except SettingsValidationError as e:
        print(f"ERROR: invalid configuration:\n{e}")
        return EXIT_CONFIG_ERROR

    configure_logging(settings)
    logger.info("dispatch_starting", root=str(settings.work_root), environment=settings.environment)

    try:
        return run(
            settings,
            demo=args.demo,
            from_mapping=args.from_mapping,
            dry_run=args.dry_run,
            keep_sources=args.keep_sources,
        )
    except ValidationError as e:
        logger.error("dispatch_aborted", code=e.code, error=e.message)
        print(f"ERROR: {e.message}")
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
