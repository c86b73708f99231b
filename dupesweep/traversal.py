"""Recursive collection of regular files under a directory."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .types import FileList

ProgressCallback = Callable[[Path], None]


def should_process_file(path: "os.PathLike[str] | str") -> bool:
    """Return False for hidden files (names starting with a dot)."""
    name = os.path.basename(os.fspath(path))
    return not name.startswith(".")


def collect_files(
    root_dir: "os.PathLike[str] | str",
    progress_callback: Optional[ProgressCallback] = None,
) -> FileList:
    """Return (path, size) for every non-hidden regular file under root_dir.

    Directory symlinks are not followed; unreadable directories are skipped.
    """
    files: FileList = []
    root = Path(root_dir)

    def walk(directory: Path, is_root: bool) -> None:
        try:
            with os.scandir(directory) as entries:
                listing = list(entries)
        except PermissionError:
            return
        except OSError as exc:
            if is_root:
                print(f"error traversing directory {str(directory)!r}: {exc}", file=sys.stderr)
            else:
                print(f"error accessing directory {str(directory)!r}: {exc}", file=sys.stderr)
            return

        for entry in listing:
            path = directory / entry.name
            try:
                if entry.is_dir(follow_symlinks=False):
                    walk(path, False)
                elif entry.is_file() and should_process_file(path):
                    size = entry.stat().st_size
                    files.append((path, size))
                    if progress_callback is not None:
                        progress_callback(path)
            except OSError as exc:
                print(f"error accessing file {str(path)!r}: {exc}", file=sys.stderr)

    walk(root, True)
    return files