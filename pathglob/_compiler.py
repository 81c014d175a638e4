"""Glob to regular expression compilation.

The wildcard ``*`` matches any run of characters except ``/``. The sequence
``/**/`` matches zero or more complete path segments. ``{a,b,c}`` is an
alternation that closes at the first ``}``.

With ``escape=True`` a backslash makes the next ``*``, ``{``, ``}`` or ``\\``
literal.  Any other backslash is itself a literal character.
"""
from __future__ import annotations

import re

from ._exceptions import InvalidPatternError
from ._path import is_absolute

_ESCAPABLE = frozenset("*{}\\")
_DOUBLE_WILDCARD = "/**/"
_DOUBLE_WILDCARD_REGEX = "/(.+/)?"
_WILDCARD_REGEX = "[^/]*"


def _check_pattern(pattern: str) -> None:
    if not is_absolute(pattern) and "://" not in pattern:
        raise InvalidPatternError(pattern)


def _find_group_end(pattern: str, start: int, escape: bool) -> int:
    """Return the index of the first unescaped ``}`` at or after *start*, or -1."""
    i = start
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if escape and c == "\\":
            i += 2
            continue
        if c == "}":
            return i
        i += 1
    return -1


def _translate(pattern: str, escape: bool) -> str:
    parts: list[str] = []
    add = parts.append
    group_end = -1
    i = 0
    n = len(pattern)

    while i < n:
        c = pattern[i]

        if escape and c == "\\":
            if i + 1 < n and pattern[i + 1] in _ESCAPABLE:
                add(re.escape(pattern[i + 1]))
                i += 2
            else:
                add(re.escape(c))
                i += 1
            continue

        if i == group_end:
            add(")")
            group_end = -1
        elif c == "{" and group_end == -1:
            group_end = _find_group_end(pattern, i + 1, escape)
            # An unbalanced "{" stays a literal character
            add("(" if group_end != -1 else re.escape(c))
        elif c == "," and group_end != -1:
            add("|")
        elif pattern.startswith(_DOUBLE_WILDCARD, i):
            add(_DOUBLE_WILDCARD_REGEX)
            i += len(_DOUBLE_WILDCARD)
            continue
        elif c == "*":
            add(_WILDCARD_REGEX)
        else:
            add(re.escape(c))
        i += 1

    return "".join(parts)


def _scan_static(pattern: str, escape: bool) -> tuple[str, bool]:
    """Return ``(static_prefix, is_dynamic)`` for *pattern*."""
    if not escape:
        cuts = [pos for pos in (pattern.find("*"), pattern.find("{")) if pos != -1]
        if not cuts:
            return pattern, False
        return pattern[:min(cuts)], True

    chars: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\" and i + 1 < n and pattern[i + 1] in _ESCAPABLE:
            chars.append(pattern[i + 1])
            i += 2
            continue
        if c in ("*", "{"):
            return "".join(chars), True
        chars.append(c)
        i += 1
    return "".join(chars), False


def _base_path(static_prefix: str, pattern: str) -> str:
    pos = static_prefix.rfind("/")
    if pos == -1:
        # No slash on the left of the first wildcard
        return ""

    # Only slash is the leading one
    if pos == 0:
        return "/"

    # Keep the trailing slash of "scheme:///"
    scheme = pattern.find("://")
    if scheme != -1 and pos - 3 == scheme:
        return static_prefix[:pos + 1]

    return static_prefix[:pos]


def to_regex(pattern: str, escape: bool = False) -> str:
    """Convert *pattern* to an anchored regular expression string.

    ``*`` becomes ``[^/]*``, ``/**/`` becomes ``/(.+/)?`` and ``{a,b}``
    becomes ``(a|b)``.  Every other character is quoted with
    :func:`re.escape`.

    Raises:
        InvalidPatternError: if the pattern is not absolute and not a URI.
    """
    _check_pattern(pattern)
    return "^" + _translate(pattern, escape) + "$"


def get_static_prefix(pattern: str, escape: bool = False) -> str:
    """Return the literal part of *pattern* up to the first wildcard.

    If the pattern contains no wildcard, the whole pattern is returned (with
    escape sequences resolved when *escape* is true).
    """
    _check_pattern(pattern)
    return _scan_static(pattern, escape)[0]


def get_base_path(pattern: str, escape: bool = False) -> str:
    """Return the deepest directory that contains every match of *pattern*.

    ``get_base_path("/css/*.css")`` is ``"/css"``, ``get_base_path("/*.css")``
    is ``"/"``.  A pattern without wildcards yields its parent directory.
    """
    return _base_path(get_static_prefix(pattern, escape), pattern)


def is_dynamic(pattern: str, escape: bool = False) -> bool:
    """Return whether *pattern* contains an unescaped ``*`` or ``{``."""
    return _scan_static(pattern, escape)[1]


class CompiledPattern:
    """A glob compiled once and tested against many paths."""

    __slots__ = ("pattern", "escape", "regex", "static_prefix", "dynamic", "_compiled")

    def __init__(self, pattern: str, escape: bool = False) -> None:
        _check_pattern(pattern)
        self.pattern: str = pattern
        self.escape: bool = escape
        self.regex: str = "^" + _translate(pattern, escape) + "$"
        self.static_prefix, self.dynamic = _scan_static(pattern, escape)
        self._compiled: re.Pattern[str] = re.compile(self.regex)

    @property
    def base_path(self) -> str:
        return _base_path(self.static_prefix, self.pattern)

    def match(self, path: str) -> bool:
        if not self.dynamic:
            return path == self.static_prefix
        if not path.startswith(self.static_prefix):
            return False
        return self._compiled.fullmatch(path) is not None

    def filter(self, paths: list[str]) -> dict[int, str]:
        return {index: path for index, path in enumerate(paths) if self.match(path)}

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r}, escape={self.escape!r})"


def compile(pattern: str, escape: bool = False) -> CompiledPattern:
    return CompiledPattern(pattern, escape)
