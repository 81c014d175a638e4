import errno
import os
import sys

import pytest
from pathglob import DirectoryWalker, UnreadableDirectoryError, glob, walk_self_first


def _deny(monkeypatch, suffix):
    real_scandir = os.scandir

    def scandir(path):
        if path.endswith(suffix):
            raise PermissionError(errno.EACCES, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


def test_unreadable_directory_raises_by_default(glob_tree, monkeypatch):
    _deny(monkeypatch, "/js")
    with pytest.raises(UnreadableDirectoryError) as exc_info:
        glob(glob_tree + "/**/*.css")
    assert exc_info.value.path == glob_tree + "/js"


def test_unreadable_directory_is_permission_error(glob_tree, monkeypatch):
    _deny(monkeypatch, "/js")
    with pytest.raises(PermissionError):
        glob(glob_tree + "/**/*.css")


def test_unreadable_directory_ignored_on_request(glob_tree, monkeypatch):
    _deny(monkeypatch, "/js")
    result = glob(glob_tree + "/**/*", ignore_errors=True)
    assert glob_tree + "/js" in result
    assert glob_tree + "/css/style.css" in result
    assert not any(p.startswith(glob_tree + "/js/") for p in result)


def test_unreadable_root_ignored_yields_nothing(glob_tree, monkeypatch):
    _deny(monkeypatch, glob_tree)
    walker = DirectoryWalker(glob_tree, ignore_errors=True)
    assert list(walk_self_first(walker)) == []
    assert walker.closed


def test_read_error_mid_listing(glob_tree, monkeypatch):
    real_scandir = os.scandir

    class FailingHandle:
        def __init__(self, path):
            self._inner = real_scandir(path)
            self.closed = False

        def __next__(self):
            raise PermissionError(errno.EACCES, "Permission denied")

        def close(self):
            self.closed = True
            self._inner.close()

    handles = []

    def scandir(path):
        handles.append(FailingHandle(path))
        return handles[-1]

    monkeypatch.setattr(os, "scandir", scandir)
    walker = DirectoryWalker(glob_tree)
    with pytest.raises(UnreadableDirectoryError):
        walker.rewind()
    assert walker.closed
    assert handles[0].closed


@pytest.mark.skipif(sys.platform == "win32", reason="chmod tests only on POSIX")
@pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root can read everything",
)
def test_chmod_unreadable_directory(glob_tree):
    os.chmod(glob_tree + "/js", 0o111)
    try:
        with pytest.raises(UnreadableDirectoryError):
            glob(glob_tree + "/**/*.css")
        assert glob(glob_tree + "/**/*.css", ignore_errors=True) != []
    finally:
        os.chmod(glob_tree + "/js", 0o755)
