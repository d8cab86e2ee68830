import os

import pytest

from maketorrent.common.errors import ConfigError
from maketorrent.torrent.files import collect_files, is_single_file, total_size


def test_single_file(make_tree):
    root = make_tree("src", {"a.txt": b"hello"})
    entries = collect_files(str(root / "a.txt"))
    assert len(entries) == 1
    assert entries[0].path == ("a.txt",)
    assert entries[0].size == 5
    assert is_single_file(str(root / "a.txt"))


def test_directory_in_lexicographic_order(make_tree):
    root = make_tree(
        "b",
        {
            "2.txt": b"0123456789",
            "1.txt": b"",
            "sub/z": b"z",
            "sub/a": b"aa",
            "Z": b"Z",
            "sub0": b"x",
        },
    )
    entries = collect_files(str(root))
    assert [entry.path for entry in entries] == [
        ("1.txt",),
        ("2.txt",),
        ("Z",),
        ("sub", "a"),
        ("sub", "z"),
        ("sub0",),
    ]
    assert [entry.size for entry in entries] == [0, 10, 1, 2, 1, 1]
    assert total_size(entries) == 15
    assert not is_single_file(str(root))


def test_order_uses_full_path_bytes(make_tree):
    # "-" (0x2d) sorts before "/" (0x2f)
    root = make_tree("t", {"a/b": b"1", "a-b": b"2"})
    entries = collect_files(str(root))
    assert [entry.path for entry in entries] == [("a-b",), ("a", "b")]


def test_trailing_separator_on_source(make_tree):
    root = make_tree("d", {"x": b"1"})
    entries = collect_files(str(root) + os.sep)
    assert [entry.path for entry in entries] == [("x",)]


def test_empty_directory(tmp_path):
    (tmp_path / "empty").mkdir()
    assert collect_files(str(tmp_path / "empty")) == []


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
def test_symlinks_are_skipped(make_tree, caplog):
    root = make_tree("s", {"real.txt": b"data", "dir/inner": b"i"})
    os.symlink(root / "real.txt", root / "link.txt")
    os.symlink(root / "dir", root / "linkdir")
    with caplog.at_level("WARNING"):
        entries = collect_files(str(root))
    assert [entry.path for entry in entries] == [("dir", "inner"), ("real.txt",)]
    assert "link.txt" in caplog.text
    assert "linkdir" in caplog.text


def test_missing_source(tmp_path):
    with pytest.raises(ConfigError):
        collect_files(str(tmp_path / "nope"))


def test_no_source():
    with pytest.raises(ConfigError):
        collect_files("")
