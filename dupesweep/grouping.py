"""Grouping of files by size."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from .types import FileInfo, SizeGroup


def group_files_by_size(files: Iterable[FileInfo]) -> SizeGroup:
    """Map each file size to the paths of that size, in input order."""
    groups: defaultdict = defaultdict(list)
    for path, size in files:
        groups[size].append(path)
    return dict(groups)


def filter_potential_duplicates(size_groups: SizeGroup) -> SizeGroup:
    """Keep only size groups holding more than one file."""
    return {size: list(paths) for size, paths in size_groups.items() if len(paths) > 1}