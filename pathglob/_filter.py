from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from typing import Any

from ._typing import FilterMode


class MatchFilter:
    """Keeps the ``(key, value)`` pairs of *inner* whose path matches *regex*.

    A candidate is rejected without running the regular expression when it
    does not start with *static_prefix*.  In ``FILTER_VALUE`` mode the value
    is tested, in ``FILTER_KEY`` mode the key.
    """

    def __init__(
        self,
        regex: str,
        static_prefix: str,
        inner: Iterable[tuple[Any, str]],
        mode: FilterMode = FilterMode.FILTER_VALUE,
    ) -> None:
        if not isinstance(mode, FilterMode):
            raise ValueError(
                f"Invalid mode value: {mode!r}. "
                "Expected FilterMode.FILTER_VALUE or FilterMode.FILTER_KEY."
            )
        self._regex: re.Pattern[str] = re.compile(regex)
        self._static_prefix = static_prefix
        self._inner = inner
        self._mode = mode

    def accept(self, key: Any, value: str) -> bool:
        path = value if self._mode is FilterMode.FILTER_VALUE else key
        if not path.startswith(self._static_prefix):
            return False
        return self._regex.fullmatch(path) is not None

    def __iter__(self) -> Iterator[tuple[Any, str]]:
        for key, value in self._inner:
            if self.accept(key, value):
                yield key, value

    def close(self) -> None:
        close = getattr(self._inner, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> MatchFilter:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
