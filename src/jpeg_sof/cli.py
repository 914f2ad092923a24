from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .crosscheck import compare_with_reference
from .marker import JpegProcessingError, iter_segments, marker_info, read_metadata
from .primitives import JpegDirectory, Metadata


def _print_directory(directory: JpegDirectory) -> None:
    print(f"[{directory.name}]")
    for tag in sorted(directory.tags):
        print(f"  {directory.get_tag_name(tag)}: {directory.get_description(tag)}")
    for error in directory.errors:
        print(f"  ERROR: {error}")


def cmd_markers(path: Path) -> int:
    with open(path, "rb") as f:
        for marker, payload in iter_segments(f):
            if payload:
                print(f"Found {marker_info(marker)} with length {len(payload) + 2} bytes")
            else:
                print(f"Found {marker_info(marker)}")
    return 0


def cmd_sof(path: Path) -> int:
    metadata = read_metadata(path)
    directories = metadata.get_directories_of_type(JpegDirectory)
    if not directories:
        print("No SOFn segment found", file=sys.stderr)
        return 1
    for directory in directories:
        _print_directory(directory)
    return 0


def cmd_check(path: Path) -> int:
    metadata: Metadata = read_metadata(path)
    directory = metadata.get_first_directory_of_type(JpegDirectory)
    if directory is None:
        print("No SOFn segment found", file=sys.stderr)
        return 1

    mismatches = compare_with_reference(directory, path)
    if directory.has_error or mismatches:
        for error in directory.errors:
            print(f"ERROR: {error}")
        for mismatch in mismatches:
            print(f"MISMATCH: {mismatch}")
        return 1

    print(f"OK: {directory.image_width}x{directory.image_height}, "
          f"{directory.number_of_components} component(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="jpeg-sof", description="JPEG frame header (SOFn) reader")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log segment walking and decode details")

    subparsers = parser.add_subparsers(dest="command")
    for name, help_text in (
        ("markers", "List the JPEG markers found before the first scan"),
        ("sof", "Decode and print every SOFn segment"),
        ("check", "Decode SOFn and cross-check size and channels against OpenCV"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("path", help="Path to the JPEG file")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.path)
    handlers = {"markers": cmd_markers, "sof": cmd_sof, "check": cmd_check}
    try:
        return handlers[args.command](path)
    except (OSError, JpegProcessingError) as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
