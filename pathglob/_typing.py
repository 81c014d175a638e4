import enum
from typing import TypedDict


class DirectoryEntry(TypedDict):
    path: str
    name: str
    is_dir: bool


class IterationMode(enum.Enum):
    """What a walker exposes as its current value. The key is always the full path."""
    AS_PATH = "path"
    AS_FILE = "file"


class FilterMode(enum.Enum):
    """Which half of a ``(key, value)`` pair a :class:`MatchFilter` tests."""
    FILTER_VALUE = "value"
    FILTER_KEY = "key"
