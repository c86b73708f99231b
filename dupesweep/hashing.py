"""Content hashing of candidate files and hash-based duplicate grouping."""

from __future__ import annotations

import os
import sys
import threading
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .types import (
    DEFAULT_THREAD_COUNT,
    HASH_BUFFER_SIZE,
    QUICK_HASH_BYTES,
    XXHASH_SEED,
    HashGroup,
    SizeGroup,
)
from .xxh64 import XXH64

HashProgress = Callable[[int, int], None]
PathLike = "os.PathLike[str] | str"


class _ProgressCounter:
    """Thread-safe running count of hashed files."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value


def quick_hash(path: "os.PathLike[str] | str") -> str:
    """Hash the first QUICK_HASH_BYTES bytes of a file; return lower-case hex."""
    with open(path, "rb") as handle:
        head = handle.read(QUICK_HASH_BYTES)
    hasher = XXH64(XXHASH_SEED)
    hasher.update(head)
    return hasher.hexdigest()


def full_hash(path: "os.PathLike[str] | str") -> str:
    """Hash the whole content of a file; return lower-case hex."""
    hasher = XXH64(XXHASH_SEED)
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(HASH_BUFFER_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def _group_by(files: Iterable[Path], hash_function: Callable[[Path], str]) -> HashGroup:
    groups: defaultdict = defaultdict(list)
    for path in files:
        try:
            digest = hash_function(path)
        except OSError as exc:
            print(f"error hashing file {str(path)!r}: {exc}", file=sys.stderr)
            continue
        groups[digest].append(path)
    return dict(groups)


def group_by_quick_hash(files: Iterable[Path]) -> HashGroup:
    """Group paths by the hash of their leading bytes; unreadable files are skipped."""
    return _group_by(files, quick_hash)


def group_by_full_hash(files: Iterable[Path]) -> HashGroup:
    """Group paths by the hash of their full content; unreadable files are skipped."""
    return _group_by(files, full_hash)


def _resolve_thread_count(num_threads: int) -> int:
    if num_threads > 0:
        return num_threads
    return os.cpu_count() or DEFAULT_THREAD_COUNT


def _process_files_parallel(
    files: Sequence[Path],
    hash_function: Callable[[Path], str],
    num_threads: int,
    counter: _ProgressCounter,
    progress_callback: Optional[HashProgress],
    total_files: int,
) -> HashGroup:
    thread_count = _resolve_thread_count(num_threads)
    batch_size = max(len(files) // thread_count, 1)
    batches = [files[start:start + batch_size] for start in range(0, len(files), batch_size)]

    def work(batch: Sequence[Path]) -> HashGroup:
        local: defaultdict = defaultdict(list)
        for path in batch:
            try:
                digest = hash_function(path)
            except OSError as exc:
                print(f"Error hashing file {str(path)!r}: {exc}", file=sys.stderr)
                continue
            local[digest].append(path)
            processed = counter.increment()
            if progress_callback is not None:
                progress_callback(processed, total_files)
        return local

    merged: defaultdict = defaultdict(list)
    if not batches:
        return {}
    with ThreadPoolExecutor(max_workers=len(batches)) as pool:
        futures = [pool.submit(work, batch) for batch in batches]
        for future in futures:
            for digest, paths in future.result().items():
                merged[digest].extend(paths)
    return dict(merged)


def find_duplicates(
    size_groups: SizeGroup,
    num_threads: int = 0,
    progress_callback: Optional[HashProgress] = None,
) -> HashGroup:
    """Return full-hash groups of two or more identical files.

    Files are narrowed by quick hash within each size group, then fully
    hashed in parallel. Progress is reported as (processed, total) where
    total counts every file in size_groups.
    """
    total_files = sum(len(paths) for paths in size_groups.values())
    counter = _ProgressCounter()
    duplicates: HashGroup = {}

    for paths in size_groups.values():
        if len(paths) <= 1:
            continue
        for quick_paths in group_by_quick_hash(paths).values():
            if len(quick_paths) <= 1:
                continue
            full_groups = _process_files_parallel(
                quick_paths,
                full_hash,
                num_threads,
                counter,
                progress_callback,
                total_files,
            )
            for digest, full_paths in full_groups.items():
                if len(full_paths) > 1:
                    duplicates[digest] = full_paths

    return duplicates