"""Tests for the on-disk media cache."""

import os

import pytest

from cqcode.cache import FileContentCache


@pytest.fixture
def cache(tmp_path):
    return FileContentCache(str(tmp_path / "media"))


class TestFileContentCache:

    def test_miss(self, cache):
        assert cache.lookup("http://x/a.png") is None

    def test_store_then_lookup(self, cache):
        path = cache.store("http://x/a.png", b"png-bytes")
        assert cache.lookup("http://x/a.png") == path
        with open(path, "rb") as f:
            assert f.read() == b"png-bytes"

    def test_creates_directory(self, cache):
        assert not os.path.isdir(cache.root)
        cache.store("http://x/a.png", b"x")
        assert os.path.isdir(cache.root)

    def test_overwrite(self, cache):
        cache.store("http://x/a.png", b"old")
        path = cache.store("http://x/a.png", b"new")
        with open(path, "rb") as f:
            assert f.read() == b"new"

    def test_no_partial_files_left(self, cache):
        cache.store("http://x/a.png", b"x")
        assert not [n for n in os.listdir(cache.root) if n.endswith(".part")]

    def test_keys_do_not_collide(self, cache):
        assert cache.path_for("http://x/a.png") != cache.path_for("http://y/a.png")

    def test_suffix_from_url_path(self, cache):
        assert cache.path_for("http://x/a.PNG?size=large").endswith(".png")
        assert cache.path_for("http://x/pic.jpeg#frag").endswith(".jpeg")

    def test_suffix_fallback(self, cache):
        assert cache.path_for("http://x/download").endswith(".bin")
        assert cache.path_for("http://x/a.not-an-ext!").endswith(".bin")

    def test_empty_content_rejected(self, cache):
        with pytest.raises(ValueError):
            cache.store("http://x/a.png", b"")
        assert cache.lookup("http://x/a.png") is None

    def test_empty_file_is_miss(self, cache):
        os.makedirs(cache.root)
        open(cache.path_for("http://x/a.png"), "wb").close()
        assert cache.lookup("http://x/a.png") is None

    def test_clear(self, cache):
        cache.store("http://x/a.png", b"1")
        cache.store("http://x/b.png", b"2")
        assert cache.clear() == 2
        assert cache.lookup("http://x/a.png") is None

    def test_clear_missing_dir(self, cache):
        assert cache.clear() == 0

    def test_expands_user(self):
        assert not FileContentCache("~/media").root.startswith("~")
