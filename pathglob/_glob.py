"""Searches and matches file paths using Ant-like globs.

Use :func:`glob` to search the filesystem, :func:`match` to test a single
path and :func:`filter` to select paths from a list::

    glob("/project/**/*.twig")
    match("/project/views/index.html.twig", "/project/**/*.twig")
    filter(paths, "/project/**/*.twig")

To test many paths against one glob, compile it once with
:func:`pathglob.compile` and call :meth:`CompiledPattern.match`.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from ._compiler import CompiledPattern
from ._filter import MatchFilter
from ._walker import DirectoryWalker, walk_self_first

logger = logging.getLogger(__name__)


def iglob(
    pattern: str, escape: bool = False, ignore_errors: bool = False
) -> Iterator[str]:
    """Lazily yield the filesystem paths matching *pattern* in scan order.

    The pattern must be canonical: absolute, with ``/`` separators and no
    ``.`` or ``..`` segments.  Only the pattern's base directory is scanned.
    Closing the returned generator releases every open directory handle.

    Raises:
        InvalidPatternError: if the pattern is not absolute and not a URI.
        UnreadableDirectoryError: if a directory cannot be read and
            *ignore_errors* is false.
    """
    return _iglob(CompiledPattern(pattern, escape), ignore_errors)


def _iglob(compiled: CompiledPattern, ignore_errors: bool) -> Iterator[str]:
    if not compiled.dynamic and os.path.exists(compiled.static_prefix):
        yield compiled.static_prefix
        return

    base_path = compiled.base_path
    if not os.path.isdir(base_path):
        logger.debug(
            f"Base path '{base_path}' of '{compiled.pattern}' is not a directory"
        )
        return

    tree = walk_self_first(DirectoryWalker(base_path, ignore_errors=ignore_errors))
    with MatchFilter(compiled.regex, compiled.static_prefix, tree) as matches:
        for _, path in matches:
            yield path


def glob(pattern: str, escape: bool = False, ignore_errors: bool = False) -> list[str]:
    """Return a sorted list of filesystem paths matching *pattern*.

    ``*`` matches within one path segment, ``/**/`` matches zero or more
    segments and ``{a,b}`` matches either alternative.  With *escape* true,
    ``\\*``, ``\\{``, ``\\}`` and ``\\\\`` are literal characters.
    """
    return sorted(iglob(pattern, escape, ignore_errors))


def match(path: str, pattern: str, escape: bool = False) -> bool:
    """Return whether *path* is matched by *pattern*."""
    return CompiledPattern(pattern, escape).match(path)


def filter(paths: list[str], pattern: str, escape: bool = False) -> dict[int, str]:
    """Return the elements of *paths* matching *pattern*, keyed by their index."""
    return CompiledPattern(pattern, escape).filter(paths)
