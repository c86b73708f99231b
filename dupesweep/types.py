"""Core data types and tuning constants for duplicate detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

# Number of leading bytes hashed first; files that differ here cannot match.
QUICK_HASH_BYTES = 1024

# Chunk size used when hashing whole files.
HASH_BUFFER_SIZE = 4 * 1024 * 1024

# Worker count used when the machine's CPU count cannot be determined.
DEFAULT_THREAD_COUNT = 4

# Seed for XXH64 so that hashes are reproducible between runs.
XXHASH_SEED = 0

FileSize = int
FileInfo = Tuple[Path, FileSize]
FileList = List[FileInfo]
SizeGroup = Dict[FileSize, List[Path]]
HashGroup = Dict[str, List[Path]]


@dataclass
class DuplicateGroup:
    """A set of files sharing the same content hash."""

    hash: str
    files: List[Path] = field(default_factory=list)
    file_size: FileSize = 0

    def wasted_space(self) -> FileSize:
        """Bytes that would be freed by keeping a single copy."""
        return self.file_size * max(len(self.files) - 1, 0)


DuplicateList = List[DuplicateGroup]