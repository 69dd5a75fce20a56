import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from lanshare.listing import OutsideRootError, list_directory, resolve_in_root  # noqa: E402
from lanshare.models import ListingFilter  # noqa: E402


def _names(entries):
    return [e.name for e in entries]


@pytest.fixture
def shared(tmp_path):
    for name in ("a.jpg", "b.png", "c.jpg"):
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "photos.jpg").mkdir()
    (tmp_path / "docs").mkdir()
    return tmp_path


def test_no_rules_shows_everything(shared):
    entries = list_directory(shared, ListingFilter())
    assert _names(entries) == ["a.jpg", "b.png", "c.jpg", "docs", "photos.jpg"]
    assert [e.display_name for e in entries if e.is_dir] == ["docs/", "photos.jpg/"]


def test_suffix_filter(shared):
    rules = ListingFilter(suffix=".jpg")
    assert _names(list_directory(shared, rules)) == ["a.jpg", "c.jpg", "photos.jpg"]


def test_hidden_directories_never_shown(shared):
    rules = ListingFilter(suffix=".jpg", show_directories=False)
    assert _names(list_directory(shared, rules)) == ["a.jpg", "c.jpg"]


def test_suffix_and_substring_both_required(shared):
    rules = ListingFilter(suffix=".jpg", contains="c")
    assert _names(list_directory(shared, rules)) == ["c.jpg"]


def test_listing_is_not_cached(shared):
    rules = ListingFilter(suffix=".jpg", show_directories=False)
    assert "d.jpg" not in _names(list_directory(shared, rules))
    (shared / "d.jpg").write_bytes(b"new")
    assert "d.jpg" in _names(list_directory(shared, rules))


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        list_directory(tmp_path / "nope", ListingFilter())


def test_resolve_in_root(tmp_path):
    assert resolve_in_root(tmp_path, "sub/file.txt") == tmp_path.resolve() / "sub" / "file.txt"
    assert resolve_in_root(tmp_path, "") == tmp_path.resolve()
    with pytest.raises(OutsideRootError):
        resolve_in_root(tmp_path, "../outside.txt")
