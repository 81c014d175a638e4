"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["pathglob._pytest_plugin"]

This makes the ``glob_tree`` fixture automatically available::

    def test_something(glob_tree):
        assert pathglob.glob(glob_tree + "/*.css") == [glob_tree + "/base.css"]
"""

import pytest

GLOB_TREE_FILES = (
    "base.css",
    "css/reset.css",
    "css/style.css",
    "js/script.js",
)


@pytest.fixture
def glob_tree(tmp_path) -> str:
    """Directory holding ``base.css``, ``css/{reset,style}.css`` and ``js/script.js``.

    Returned as a string with ``/`` separators.  Provides an independent tree
    per test (function scope).
    """
    for name in GLOB_TREE_FILES:
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(name)
    return tmp_path.as_posix()
