import gc
import warnings

from pathglob import DirectoryWalker, glob, iglob, walk_self_first
from tests.helpers.scandir_spy import install_scandir_spy


def test_glob_releases_every_handle(glob_tree, monkeypatch):
    spy = install_scandir_spy(monkeypatch)
    glob(glob_tree + "/**/*")
    assert len(spy.handles) == 3
    assert spy.open_handles == []


def test_abandoned_iglob_releases_handles(glob_tree, monkeypatch):
    spy = install_scandir_spy(monkeypatch)
    results = iglob(glob_tree + "/**/*.css")
    next(results)
    assert spy.open_handles
    results.close()
    assert spy.open_handles == []


def test_abandoned_walk_releases_handles(glob_tree, monkeypatch):
    spy = install_scandir_spy(monkeypatch)
    tree = walk_self_first(DirectoryWalker(glob_tree))
    for key, _ in tree:
        if key.endswith("/css/reset.css") or key.endswith("/css/style.css"):
            break
    assert len(spy.open_handles) == 2
    tree.close()
    assert spy.open_handles == []


def test_error_inside_consumer_releases_handles(glob_tree, monkeypatch):
    spy = install_scandir_spy(monkeypatch)

    def consume():
        with DirectoryWalker(glob_tree) as walker:
            for _ in walker:
                raise RuntimeError("stop")

    try:
        consume()
    except RuntimeError:
        pass
    assert spy.open_handles == []


def test_exhausted_walk_emits_no_resource_warning(glob_tree):
    with warnings.catch_warnings():
        warnings.simplefilter("error", ResourceWarning)
        list(walk_self_first(DirectoryWalker(glob_tree)))
        gc.collect()
