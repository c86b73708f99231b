"""End-to-end duplicate detection over a directory tree."""

from __future__ import annotations

import os
import sys
from typing import Callable, Iterable, Optional

from . import hashing
from .grouping import filter_potential_duplicates, group_files_by_size
from .traversal import collect_files
from .types import DuplicateGroup, DuplicateList, FileSize, HashGroup, SizeGroup

DetectionProgress = Callable[[str, int, int], None]


def find_duplicates(
    directory: "os.PathLike[str] | str",
    num_threads: int = 0,
    progress_callback: Optional[DetectionProgress] = None,
) -> DuplicateList:
    """Find all groups of identical non-hidden files under directory."""

    def report(message: str, current: int = 0, total: int = 0) -> None:
        if progress_callback is not None:
            progress_callback(message, current, total)

    report("scanning directory... ")
    files = collect_files(directory, lambda path: report("scanning: " + path.name))

    report(f"found {len(files)} files")
    if not files:
        return []

    report("grouping files by size...")
    size_groups = group_files_by_size(files)
    potential = filter_potential_duplicates(size_groups)

    potential_count = sum(len(paths) for paths in potential.values())
    report(f"found {potential_count} potential duplicates")
    if potential_count == 0:
        return []

    report("calculating file hashes...", 0, potential_count)
    hash_groups = hashing.find_duplicates(
        potential,
        num_threads,
        lambda processed, total: report("hashing files... ", processed, total),
    )

    duplicates = hash_group_to_duplicate_list(hash_groups, size_groups)
    report(f"found {len(duplicates)} duplicate groups")
    return duplicates


def calculate_wasted_space(duplicates: Iterable[DuplicateGroup]) -> FileSize:
    """Total bytes that removing all extra copies would free."""
    return sum(group.wasted_space() for group in duplicates)


def hash_group_to_duplicate_list(hash_group: HashGroup, size_groups: SizeGroup) -> DuplicateList:
    """Turn hash groups with more than one file into DuplicateGroup records.

    The size is read from the first file; if that fails it is recorded as 0.
    """
    duplicates: DuplicateList = []
    for digest, paths in hash_group.items():
        if len(paths) <= 1:
            continue
        try:
            size = os.path.getsize(paths[0])
        except OSError as exc:
            print(f"error getting file size: {exc}", file=sys.stderr)
            size = 0
        duplicates.append(DuplicateGroup(hash=digest, files=list(paths), file_size=size))
    return duplicates