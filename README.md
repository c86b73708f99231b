# dupesweep

A duplicate file finder. It walks a directory tree and groups regular files by
size. Within each size group it compares a quick hash of the first 1 KiB of
each file, and then a full XXH64 hash of the whole content. Files whose full
hashes match are reported as duplicates. Hidden files, whose names start with
`.`, are skipped. Symbolic links to directories are not followed, and
directories that cannot be read are skipped.

## Installation

```
pip install .
```

## Usage

```
dupesweep [options] [directory]
```

If no directory is given, the current directory is scanned. The same command
can also be started as `python -m dupesweep.cli`.

| Option | Meaning |
| --- | --- |
| `-h`, `--help` | Show the help message and exit |
| `--delete` | Delete duplicate files (the default is a dry run) |
| `-t`, `--threads <num>` | Number of threads used for full hashing (default: CPU count) |
| `-v`, `--verbose` | Show every progress message, including each scanned file |
| `--non-interactive` | With `--delete`, keep the first file of each group and delete the rest without asking |
| `--include-hidden` | Accepted, but has no effect yet: hidden files are always skipped |
| `--format <format>` | Accepts `text`, `json` or `csv` (any case); output is always text |

An unknown option, an invalid thread count, an invalid format, or a path that
does not exist or is not a directory makes the command exit with status 1.

The command prints each duplicate group with its size and hash, then a summary
with the number of groups, the number of files and the wasted space, and
finally the time taken.

By default nothing is deleted. With `--delete` you are asked, for each group,
which files to keep. Enter their numbers separated by spaces; every file not
listed is deleted, so an empty answer deletes the whole group. You can also
enter `all` (or `a`) to keep every file, `skip` (or `s`) to leave the group
alone, or `quit` (or `q`) to stop.

```
dupesweep ~/Pictures
dupesweep --delete --non-interactive -t 8 ~/Downloads
```

## Library use

```python
from dupesweep.detection import find_duplicates, calculate_wasted_space
from dupesweep.cli import format_size

groups = find_duplicates("/some/dir", 4, lambda message, current, total: None)
for group in groups:
    print(group.hash, group.file_size, [str(p) for p in group.files])
print(format_size(calculate_wasted_space(groups)))
```

Modules:

- `dupesweep.types`: `DuplicateGroup` (with `wasted_space()`) and the tuning
  constants `QUICK_HASH_BYTES`, `HASH_BUFFER_SIZE`, `DEFAULT_THREAD_COUNT` and
  `XXHASH_SEED`.
- `dupesweep.traversal`: `collect_files` and `should_process_file`.
- `dupesweep.grouping`: `group_files_by_size` and `filter_potential_duplicates`.
- `dupesweep.hashing`: `quick_hash`, `full_hash`, `group_by_quick_hash`,
  `group_by_full_hash` and `find_duplicates`.
- `dupesweep.detection`: `find_duplicates`, `calculate_wasted_space` and
  `hash_group_to_duplicate_list`.
- `dupesweep.xxh64`: a pure-Python XXH64, as the streaming `XXH64` class
  (`update`, `digest`, `hexdigest`) and the one-shot `xxh64(data, seed)`.
- `dupesweep.cli`: `Options`, `parse_args`, `show_usage`, `display_duplicates`,
  `display_summary`, `handle_duplicate_deletion`, `format_size` and `main`.

## Limitations

- Results are only printed as text; there is no JSON or CSV output, even
  though `--format` accepts those names.
- Hidden files cannot be included in a scan; `--include-hidden` is accepted
  but ignored.

## Tests

```
pip install ".[test]"
pytest
```