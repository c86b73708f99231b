import io
import os
from pathlib import Path

import pytest

from dupesweep.cli import (
    Options,
    display_duplicates,
    display_summary,
    format_size,
    handle_duplicate_deletion,
    main,
    parse_args,
    show_usage,
)
from dupesweep.types import DuplicateGroup


def _make_group(tmp_path, names, content=b"hello"):
    paths = []
    for name in names:
        path = tmp_path / name
        path.write_bytes(content)
        paths.append(path)
    return DuplicateGroup(hash="abc", files=paths, file_size=len(content))


def test_format_size_bytes():
    assert format_size(0) == "0.00 B"


def test_format_size_kilobytes():
    assert format_size(1024) == "1.00 KB"


def test_format_size_stays_below_1024_until_tb():
    for size in (5, 2048, 3 * 1024**2, 7 * 1024**3):
        number, unit = format_size(size).split()
        assert float(number) < 1024
        assert unit in ("B", "KB", "MB", "GB")


def test_format_size_caps_at_tb():
    assert format_size(1024**5).endswith(" TB")


def test_parse_args_defaults(tmp_path):
    options = parse_args([str(tmp_path)])
    assert options.root_dir == tmp_path
    assert options.dry_run is True
    assert options.interactive is True
    assert options.verbose is False
    assert options.include_hidden is False
    assert options.output_format == "text"
    assert options.num_threads > 0


def test_parse_args_flags(tmp_path):
    options = parse_args(
        ["--delete", "-t", "3", "-v", "--non-interactive", "--include-hidden",
         "--format", "JSON", str(tmp_path)]
    )
    assert options.dry_run is False
    assert options.num_threads == 3
    assert options.verbose is True
    assert options.interactive is False
    assert options.include_hidden is True
    assert options.output_format == "json"


def test_parse_args_default_dir_is_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    options = parse_args([])
    assert Path(options.root_dir).resolve() == tmp_path.resolve()


def test_parse_args_invalid_format(tmp_path):
    with pytest.raises(SystemExit) as info:
        parse_args(["--format", "xml", str(tmp_path)])
    assert info.value.code == 1


def test_parse_args_invalid_threads(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["--threads", "abc", str(tmp_path)])
    assert info.value.code == 1
    assert "invalid thread count: abc" in capsys.readouterr().err


def test_parse_args_unknown_option(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["--bogus", str(tmp_path)])
    assert info.value.code == 1
    captured = capsys.readouterr()
    assert "unknown option: --bogus" in captured.err
    assert "Usage:" in captured.out


def test_parse_args_missing_directory(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        parse_args([str(tmp_path / "missing")])
    assert info.value.code == 1
    assert "Directory does not exist" in capsys.readouterr().err


def test_parse_args_not_a_directory(tmp_path, capsys):
    target = tmp_path / "file.txt"
    target.write_text("x")
    with pytest.raises(SystemExit) as info:
        parse_args([str(target)])
    assert info.value.code == 1
    assert "Not a directory" in capsys.readouterr().err


def test_parse_args_help(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["--help"])
    assert info.value.code == 0
    assert "Usage:" in capsys.readouterr().out


def test_show_usage_lists_options(capsys):
    show_usage("prog")
    out = capsys.readouterr().out
    assert out.startswith("Usage: prog [options] [directory]")
    assert "--non-interactive" in out


def test_options_defaults():
    options = Options()
    assert options.dry_run is True
    assert options.output_format == "text"


def test_display_duplicates_empty(capsys):
    display_duplicates([])
    assert capsys.readouterr().out == "no duplicate files found.\n"


def test_display_duplicates_lists_files(tmp_path, capsys):
    group = _make_group(tmp_path, ["a.txt", "b.txt"])
    display_duplicates([group])
    out = capsys.readouterr().out
    assert "Duplicate group #1" in out
    assert "Hash: abc" in out
    assert f"  1. {group.files[0]}" in out
    assert f"  2. {group.files[1]}" in out


def test_display_summary_empty(capsys):
    display_summary([])
    assert capsys.readouterr().out == "No duplicate files found.\n"


def test_display_summary_counts(tmp_path, capsys):
    group = _make_group(tmp_path, ["a", "b", "c"])
    display_summary([group])
    out = capsys.readouterr().out
    assert "  Duplicate groups: 1" in out
    assert "  Duplicate files: 3" in out
    assert f"  Wasted space: {format_size(group.wasted_space())}" in out


def test_deletion_dry_run_keeps_files(tmp_path, capsys):
    group = _make_group(tmp_path, ["a", "b"])
    handle_duplicate_deletion([group], True, False)
    assert all(path.exists() for path in group.files)
    assert "Dry run mode" in capsys.readouterr().out


def test_deletion_non_interactive_keeps_first(tmp_path):
    group = _make_group(tmp_path, ["a", "b", "c"])
    handle_duplicate_deletion([group], False, False)
    assert group.files[0].exists()
    assert not group.files[1].exists()
    assert not group.files[2].exists()


def test_deletion_interactive_keep_choice(tmp_path, monkeypatch):
    group = _make_group(tmp_path, ["a", "b", "c"])
    monkeypatch.setattr("sys.stdin", io.StringIO("2\n"))
    handle_duplicate_deletion([group], False, True)
    assert [path.exists() for path in group.files] == [False, True, False]


def test_deletion_interactive_skip_and_all(tmp_path, monkeypatch):
    first = _make_group(tmp_path, ["a", "b"])
    second = _make_group(tmp_path, ["c", "d"], content=b"other")
    monkeypatch.setattr("sys.stdin", io.StringIO("skip\nall\n"))
    handle_duplicate_deletion([first, second], False, True)
    assert all(path.exists() for path in first.files + second.files)


def test_deletion_interactive_quit(tmp_path, monkeypatch, capsys):
    first = _make_group(tmp_path, ["a", "b"])
    second = _make_group(tmp_path, ["c", "d"], content=b"other")
    monkeypatch.setattr("sys.stdin", io.StringIO("quit\n1\n"))
    handle_duplicate_deletion([first, second], False, True)
    assert all(path.exists() for path in first.files + second.files)
    assert "Exiting..." in capsys.readouterr().out


def test_deletion_interactive_stops_at_non_number(tmp_path, monkeypatch):
    group = _make_group(tmp_path, ["a", "b", "c"])
    monkeypatch.setattr("sys.stdin", io.StringIO("1 x 3\n"))
    handle_duplicate_deletion([group], False, True)
    assert [path.exists() for path in group.files] == [True, False, False]


def test_main_dry_run(tmp_path, capsys):
    (tmp_path / "one.txt").write_bytes(b"same content")
    (tmp_path / "two.txt").write_bytes(b"same content")
    (tmp_path / "unique.txt").write_bytes(b"different!!!")
    assert main([str(tmp_path), "-t", "2"]) == 0
    out = capsys.readouterr().out
    assert "Scan completed." in out
    assert "Duplicate group #1" in out
    assert "Dry run mode - no files were deleted." in out
    assert (tmp_path / "one.txt").exists() and (tmp_path / "two.txt").exists()


def test_main_delete_non_interactive(tmp_path):
    (tmp_path / "one.txt").write_bytes(b"same content")
    (tmp_path / "two.txt").write_bytes(b"same content")
    assert main([str(tmp_path), "--delete", "--non-interactive"]) == 0
    remaining = sorted(os.listdir(tmp_path))
    assert len(remaining) == 1
    assert remaining[0] in ("one.txt", "two.txt")


def test_main_no_duplicates(tmp_path, capsys):
    (tmp_path / "a.txt").write_bytes(b"aaa")
    assert main([str(tmp_path), "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "no duplicate files found." in out
    assert "Time taken:" in out