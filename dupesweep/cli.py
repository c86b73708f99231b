"""Command-line interface: argument parsing, reporting and deletion."""

from __future__ import annotations

import os
import re
import sys
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .detection import find_duplicates
from .types import DEFAULT_THREAD_COUNT, DuplicateList, FileSize

PROGRAM_NAME = "dupesweep"
OUTPUT_FORMATS = ("text", "json", "csv")
_UNITS = ("B", "KB", "MB", "GB", "TB")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Options:
    """Settings gathered from the command line."""

    root_dir: Path = field(default_factory=Path.cwd)
    dry_run: bool = True
    num_threads: int = 0
    verbose: bool = False
    interactive: bool = True
    include_hidden: bool = False
    output_format: str = "text"


def _fail(message: str) -> None:
    print(message, file=sys.stderr)
    raise SystemExit(1)


def parse_args(argv: Optional[Sequence[str]] = None) -> Options:
    """Parse command-line arguments (without the program name).

    Exits with status 0 after --help and status 1 on invalid input.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    options = Options()
    root: str = str(options.root_dir)

    remaining = iter(args)
    for arg in remaining:
        if arg in ("--help", "-h"):
            show_usage(PROGRAM_NAME)
            raise SystemExit(0)
        elif arg == "--delete":
            options.dry_run = False
        elif arg in ("--threads", "-t"):
            value = next(remaining, None)
            if value is not None:
                match = _LEADING_INT.match(value)
                if match is None:
                    _fail(f"invalid thread count: {value}")
                options.num_threads = int(match.group(1))
        elif arg in ("--verbose", "-v"):
            options.verbose = True
        elif arg == "--non-interactive":
            options.interactive = False
        elif arg == "--include-hidden":
            options.include_hidden = True
        elif arg == "--format":
            value = next(remaining, None)
            if value is not None:
                options.output_format = value.lower()
                if options.output_format not in OUTPUT_FORMATS:
                    _fail(f"invalid output format: {options.output_format}")
        elif not arg.startswith("-"):
            root = arg
        else:
            print(f"unknown option: {arg}", file=sys.stderr)
            show_usage(PROGRAM_NAME)
            raise SystemExit(1)

    if not root or not os.path.exists(root):
        _fail(f'error: Directory does not exist: "{root}"')
    if not os.path.isdir(root):
        _fail(f'error: Not a directory: "{root}"')
    options.root_dir = Path(root)

    if options.num_threads <= 0:
        options.num_threads = os.cpu_count() or DEFAULT_THREAD_COUNT

    return options


def show_usage(program_name: str) -> None:
    """Print usage information."""
    print(f"Usage: {program_name} [options] [directory]")
    print()
    print("Options:")
    print("  -h, --help                Show this help message")
    print("  --delete                  Delete duplicate files (default is dry-run)")
    print("  -t, --threads <num>       Number of threads to use")
    print("  -v, --verbose             Enable verbose output")
    print("  --non-interactive         Disable interactive mode")
    print("  --include-hidden          Include hidden files in scan")
    print("  --format <format>         Output format: text, json, csv")
    print()
    print("If directory is not specified, the current directory is used.")


def display_duplicates(duplicates: DuplicateList) -> None:
    """Print every duplicate group with its numbered files."""
    if not duplicates:
        print("no duplicate files found.")
        return

    for group_number, group in enumerate(duplicates, start=1):
        print(
            f"Duplicate group #{group_number} "
            f"(Size: {format_size(group.file_size)}, Hash: {group.hash})"
        )
        for file_number, path in enumerate(group.files, start=1):
            print(f"  {file_number}. {path}")
        print()


def display_summary(duplicates: DuplicateList) -> None:
    """Print counts of groups and files and the total wasted space."""
    if not duplicates:
        print("No duplicate files found.")
        return

    total_files = sum(len(group.files) for group in duplicates)
    total_wasted = sum(group.wasted_space() for group in duplicates)

    print("Summary:")
    print(f"  Duplicate groups: {len(duplicates)}")
    print(f"  Duplicate files: {total_files}")
    print(f"  Total files (including originals): {total_files}")
    print(f"  Wasted space: {format_size(total_wasted)}")


def _remove(path: Path) -> bool:
    """Remove a file; a file that is already gone counts as removed."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        print(f'error deleting file "{path}": {exc}', file=sys.stderr)
        return False
    return True


def _parse_keep_list(text: str, count: int) -> List[int]:
    """Zero-based indices to keep; reading stops at the first non-number."""
    keep: List[int] = []
    for token in text.split():
        match = re.match(r"[+-]?\d+", token)
        if match is None:
            break
        index = int(match.group(0))
        if 1 <= index <= count:
            keep.append(index - 1)
        if match.end() != len(token):
            break
    return keep


def handle_duplicate_deletion(duplicates: DuplicateList, dry_run: bool, interactive: bool) -> None:
    """Delete duplicate files, either all but the first or as chosen by the user."""
    if not duplicates:
        return

    if dry_run:
        print("Dry run mode - no files will be deleted.")
        return

    deleted_files = 0
    freed_space: FileSize = 0

    if not interactive:
        for group in duplicates:
            for path in group.files[1:]:
                if _remove(path):
                    deleted_files += 1
                    freed_space += group.file_size
        print(f"Deleted {deleted_files} files, freed {format_size(freed_space)} of space.")
        return

    print("Interactive deletion mode:")
    print("For each group, you can:")
    print("  - Choose which files to keep (space-separated numbers)")
    print("  - Type 'all' to keep all files")
    print("  - Type 'skip' to skip this group")
    print("  - Type 'quit' to exit")

    for group_number, group in enumerate(duplicates, start=1):
        print()
        print(f"Group {group_number}/{len(duplicates)} (Size: {format_size(group.file_size)})")
        for file_number, path in enumerate(group.files, start=1):
            print(f"  {file_number}. {path}")

        print(f"Enter files to KEEP (1-{len(group.files)}): ", end="", flush=True)
        answer = sys.stdin.readline().rstrip("\r\n")

        if answer in ("quit", "q"):
            print("Exiting...")
            break
        if answer in ("skip", "s"):
            print("Skipping group...")
            continue
        if answer in ("all", "a"):
            print("Keeping all files in this group.")
            continue

        keep = set(_parse_keep_list(answer, len(group.files)))
        for index, path in enumerate(group.files):
            if index in keep:
                continue
            print(f"Deleting: {path}")
            if _remove(path):
                deleted_files += 1
                freed_space += group.file_size

    print()
    print(f"Deleted {deleted_files} files, freed {format_size(freed_space)} of space.")


def format_size(size: FileSize) -> str:
    """Format a byte count with two decimals and a binary unit, up to TB."""
    adjusted = float(size)
    unit_index = 0
    while adjusted >= 1024.0 and unit_index < len(_UNITS) - 1:
        adjusted /= 1024.0
        unit_index += 1
    return f"{adjusted:.2f} {_UNITS[unit_index]}"


class _ProgressPrinter:
    """Progress callback that prints scan and hashing progress."""

    def __init__(self, verbose: bool) -> None:
        self._verbose = verbose
        self._last_percentage = -1
        self._lock = threading.Lock()

    def __call__(self, message: str, current: int, total: int) -> None:
        with self._lock:
            if self._verbose or current == 0:
                line = message
                if total > 0:
                    line += f" ({current}/{total}"
                    if current > 0:
                        line += f", {current * 100 // total}%"
                    line += ")"
                print(line)
            elif total > 0 and current > 0:
                percentage = current * 100 // total
                if percentage > self._last_percentage or current == total:
                    print(
                        f"\rProgress: {percentage}% completed ({current}/{total})...",
                        end="",
                        flush=True,
                    )
                    self._last_percentage = percentage
                if current == total:
                    print()
            elif total == 0:
                print(message)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the duplicate finder from the command line."""
    options = parse_args(argv)

    print("DupeSweep - Duplicate File Finder")
    print(f"Scanning directory: {options.root_dir}")
    print(f"Using {options.num_threads} threads")

    start = time.monotonic()
    duplicates = find_duplicates(
        options.root_dir,
        options.num_threads,
        _ProgressPrinter(options.verbose),
    )
    elapsed = time.monotonic() - start
    time_message = f"Time taken: {elapsed:.2f} seconds."

    if not options.verbose and duplicates:
        print("\r" + " " * 100 + "\r", end="", flush=True)

    print()
    print("Scan completed.")
    print()

    display_duplicates(duplicates)
    display_summary(duplicates)

    if duplicates:
        print()

    if not options.dry_run:
        handle_duplicate_deletion(duplicates, options.dry_run, options.interactive)
    elif duplicates:
        print("Dry run mode - no files were deleted.")

    print()
    print(time_message)
    return 0


if __name__ == "__main__":
    sys.exit(main())