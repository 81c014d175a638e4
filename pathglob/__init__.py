from ._compiler import (
    CompiledPattern,
    compile,
    get_base_path,
    get_static_prefix,
    is_dynamic,
    to_regex,
)
from ._exceptions import (
    InvalidPatternError,
    PathNotFoundError,
    UnreadableDirectoryError,
)
from ._filter import MatchFilter
from ._glob import filter, glob, iglob, match
from ._path import is_absolute
from ._typing import DirectoryEntry, FilterMode, IterationMode
from ._walker import DirectoryWalker, IWalker, PathListWalker, walk_self_first

__all__ = [
    "glob",
    "iglob",
    "match",
    "filter",
    "compile",
    "to_regex",
    "get_static_prefix",
    "get_base_path",
    "is_dynamic",
    "is_absolute",
    "CompiledPattern",
    "MatchFilter",
    "IWalker",
    "DirectoryWalker",
    "PathListWalker",
    "walk_self_first",
    "DirectoryEntry",
    "IterationMode",
    "FilterMode",
    "InvalidPatternError",
    "UnreadableDirectoryError",
    "PathNotFoundError",
]
__version__ = "0.1.0"
