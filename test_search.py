import os
from pathlib import Path

import pytest

from typefinder.search import DirectorySearch


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def _ordered_listing(monkeypatch, reverse=False):
    original = DirectorySearch._list

    def ordered(self, path):
        entries = original(self, path)
        if entries is None:
            return None
        return sorted(entries, key=lambda e: e.name, reverse=reverse)

    monkeypatch.setattr(DirectorySearch, "_list", ordered)


def test_subdirectory_is_walked_before_later_siblings(monkeypatch, tmp_path):
    _write(tmp_path / "A" / "Foo.py")
    _write(tmp_path / "Foo.py")
    _ordered_listing(monkeypatch)

    found = DirectorySearch().find("Foo", tmp_path)

    assert Path(found) == tmp_path / "A" / "Foo.py"


def test_earlier_sibling_file_wins_over_later_subdirectory(monkeypatch, tmp_path):
    _write(tmp_path / "A" / "Foo.py")
    _write(tmp_path / "Foo.py")
    _ordered_listing(monkeypatch, reverse=True)

    found = DirectorySearch().find("Foo", tmp_path)

    assert Path(found) == tmp_path / "Foo.py"


def test_unreadable_root_yields_nothing(tmp_path):
    search = DirectorySearch()

    assert search.find("Foo", tmp_path / "missing") is None
    assert search.listings == 0


def test_listing_counter(tmp_path):
    _write(tmp_path / "a" / "x.py")
    _write(tmp_path / "b" / "y.py")
    search = DirectorySearch()

    assert search.find("Nothing", tmp_path) is None
    assert search.listings == 3


def test_directory_named_like_target_is_not_a_match(tmp_path):
    (tmp_path / "Foo.py").mkdir()

    assert DirectorySearch().find("Foo", tmp_path) is None


def test_max_depth_zero_only_checks_root_files(tmp_path):
    _write(tmp_path / "sub" / "Foo.py")
    search = DirectorySearch(max_depth=0)

    assert search.find("Foo", tmp_path) is None
    assert search.listings == 1

    _write(tmp_path / "Foo.py")
    assert Path(search.find("Foo", tmp_path)) == tmp_path / "Foo.py"


def test_symlink_cycle_terminates(tmp_path):
    root = tmp_path / "root"
    (root / "inner").mkdir(parents=True)
    try:
        os.symlink(root, root / "inner" / "loop", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")

    search = DirectorySearch()

    assert search.find("Foo", root) is None
    assert search.listings == 2


def test_ignored_names_are_read_live():
    ignored: set[str] = set()
    search = DirectorySearch(ignored_names=ignored)
    ignored.add("trash")

    assert "trash" in search.ignored_names
