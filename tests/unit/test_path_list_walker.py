import pytest
from pathglob import IterationMode, PathListWalker, PathNotFoundError, walk_self_first


def test_iterate(glob_tree):
    walker = PathListWalker([f"{glob_tree}/css", f"{glob_tree}/base.css"])
    assert dict(walker) == {
        f"{glob_tree}/css": f"{glob_tree}/css",
        f"{glob_tree}/base.css": f"{glob_tree}/base.css",
    }
    assert not walker.valid
    assert walker.current is None
    assert walker.key is None


def test_iterate_as_file(glob_tree):
    walker = PathListWalker([f"{glob_tree}/css/style.css"], IterationMode.AS_FILE)
    assert dict(walker) == {f"{glob_tree}/css/style.css": "style.css"}


def test_iterate_recursively(glob_tree):
    walker = PathListWalker([f"{glob_tree}/css", f"{glob_tree}/base.css"])
    result = dict(walk_self_first(walker))
    assert sorted(result) == [
        f"{glob_tree}/base.css",
        f"{glob_tree}/css",
        f"{glob_tree}/css/reset.css",
        f"{glob_tree}/css/style.css",
    ]
    assert not walker.valid


def test_children_inherit_mode(glob_tree):
    walker = PathListWalker([f"{glob_tree}/js"], IterationMode.AS_FILE)
    assert dict(walk_self_first(walker)) == {
        f"{glob_tree}/js": "js",
        f"{glob_tree}/js/script.js": "script.js",
    }


def test_empty_list():
    walker = PathListWalker([])
    assert dict(walker) == {}
    assert not walker.valid
    assert walker.current is None
    assert walker.key is None


def test_rewind_fails_if_path_not_found(glob_tree):
    walker = PathListWalker([f"{glob_tree}/foo"])
    with pytest.raises(PathNotFoundError) as exc_info:
        walker.rewind()
    assert exc_info.value.path == f"{glob_tree}/foo"
    assert not walker.valid
    assert walker.current is None
    assert walker.key is None


def test_advance_fails_if_path_not_found(glob_tree):
    walker = PathListWalker([f"{glob_tree}/css", f"{glob_tree}/foo"])
    walker.rewind()
    assert walker.key == f"{glob_tree}/css"
    assert walker.current == f"{glob_tree}/css"
    with pytest.raises(PathNotFoundError):
        walker.advance()
    assert not walker.valid
    assert walker.current is None
    assert walker.key is None


def test_path_not_found_is_file_not_found_error(glob_tree):
    with pytest.raises(FileNotFoundError):
        PathListWalker([f"{glob_tree}/foo"]).rewind()


def test_rewind_after_failure_restarts(glob_tree):
    walker = PathListWalker([f"{glob_tree}/css", f"{glob_tree}/foo"])
    walker.rewind()
    with pytest.raises(PathNotFoundError):
        walker.advance()
    walker.rewind()
    assert walker.valid
    assert walker.key == f"{glob_tree}/css"


def test_file_has_no_children(glob_tree):
    walker = PathListWalker([f"{glob_tree}/base.css"])
    walker.rewind()
    assert not walker.has_children()
    with pytest.raises(NotADirectoryError):
        walker.get_children()


def test_invalid_mode_raises():
    with pytest.raises(ValueError, match="Invalid mode"):
        PathListWalker([], mode=2)
