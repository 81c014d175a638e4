from __future__ import annotations

import logging
import os
import warnings
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any

from ._exceptions import PathNotFoundError, UnreadableDirectoryError
from ._typing import DirectoryEntry, IterationMode

logger = logging.getLogger(__name__)


def _join(directory: str, name: str) -> str:
    return directory.rstrip("/") + "/" + name


def _check_mode(mode: IterationMode) -> IterationMode:
    if not isinstance(mode, IterationMode):
        raise ValueError(
            f"Invalid mode value: {mode!r}. "
            "Expected IterationMode.AS_PATH or IterationMode.AS_FILE."
        )
    return mode


class IWalker(ABC):
    """A restartable cursor over one level of paths.

    ``rewind()`` positions the cursor on the first entry, ``advance()`` moves
    it forward.  Directory entries expose a child walker for the next level.
    """

    @abstractmethod
    def rewind(self) -> None: ...

    @abstractmethod
    def advance(self) -> None: ...

    @property
    @abstractmethod
    def valid(self) -> bool: ...

    @property
    @abstractmethod
    def current(self) -> str | None: ...

    @property
    @abstractmethod
    def key(self) -> str | None: ...

    @abstractmethod
    def has_children(self) -> bool: ...

    @abstractmethod
    def get_children(self) -> IWalker: ...

    def close(self) -> None:
        return None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        self.rewind()
        while self.valid:
            yield self.key, self.current  # type: ignore[misc]
            self.advance()

    def __enter__(self) -> IWalker:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class DirectoryWalker(IWalker):
    """Lazy cursor over the live entries of one directory.

    The ``os.scandir`` handle is opened by :meth:`rewind` and closed when the
    listing is exhausted or the walker is closed.  Entries that vanish between
    being listed and being exposed are skipped.

    .. note::
        :meth:`seek` only moves forward.  Seeking backward restarts the scan
        from the first entry; it is not a random-access operation.
    """

    def __init__(
        self,
        path: str,
        mode: IterationMode = IterationMode.AS_PATH,
        ignore_errors: bool = False,
    ) -> None:
        self._handle: Any = None
        self._path = path
        self._mode = _check_mode(mode)
        self._ignore_errors = ignore_errors
        self._entry: DirectoryEntry | None = None
        self._position: int = -1

    @property
    def path(self) -> str:
        return self._path

    @property
    def position(self) -> int:
        return self._position

    @property
    def closed(self) -> bool:
        return self._handle is None

    @property
    def entry(self) -> DirectoryEntry | None:
        return self._entry

    @property
    def valid(self) -> bool:
        return self._entry is not None

    @property
    def current(self) -> str | None:
        if self._entry is None:
            return None
        if self._mode is IterationMode.AS_FILE:
            return self._entry["name"]
        return self._entry["path"]

    @property
    def key(self) -> str | None:
        if self._entry is None:
            return None
        return self._entry["path"]

    def _unreadable(self, exc: PermissionError) -> None:
        self.close()
        if not self._ignore_errors:
            raise UnreadableDirectoryError(self._path, exc.strerror or "") from exc
        logger.debug(f"Skipping unreadable directory '{self._path}': {exc}")

    def rewind(self) -> None:
        self.close()
        self._position = -1
        try:
            self._handle = os.scandir(self._path)
        except PermissionError as exc:
            self._unreadable(exc)
            return
        self.advance()

    def advance(self) -> None:
        if self._handle is None:
            self._entry = None
            return

        while True:
            try:
                raw = next(self._handle)
            except StopIteration:
                self.close()
                return
            except PermissionError as exc:
                self._unreadable(exc)
                return

            path = _join(self._path, raw.name)
            try:
                os.lstat(path)
            except FileNotFoundError:
                logger.debug(f"Skipping vanished entry '{path}'")
                continue

            # Symlinked directories are listed but not descended into
            self._entry = DirectoryEntry(
                path=path, name=raw.name, is_dir=raw.is_dir(follow_symlinks=False)
            )
            self._position += 1
            return

    def seek(self, position: int) -> None:
        if position < 0:
            raise ValueError(f"seek position must be >= 0, got {position}")
        if self._handle is None or position < self._position:
            self.rewind()
        while self.valid and self._position < position:
            self.advance()

    def has_children(self) -> bool:
        return self._entry is not None and self._entry["is_dir"]

    def get_children(self) -> DirectoryWalker:
        if not self.has_children():
            raise NotADirectoryError(f"Not a directory: '{self.key}'")
        return DirectoryWalker(self.key, self._mode, self._ignore_errors)  # type: ignore[arg-type]

    def close(self) -> None:
        handle = self._handle
        self._handle = None
        self._entry = None
        if handle is not None:
            handle.close()

    def __repr__(self) -> str:
        return f"DirectoryWalker({self._path!r}, position={self._position})"

    def __del__(self) -> None:
        if self._handle is not None:
            warnings.warn(
                f"DirectoryWalker for '{self._path}' was not closed properly. "
                "Exhaust it, call close() or use 'with DirectoryWalker(...)'.",
                ResourceWarning,
                stacklevel=1,
            )
            try:
                self.close()
            except Exception:
                pass


class PathListWalker(IWalker):
    """Cursor over a caller-supplied list of paths that must exist.

    Unlike :class:`DirectoryWalker`, a missing path is not skipped: the list
    is assumed to be authoritative, so :class:`PathNotFoundError` is raised
    and the walker becomes invalid.
    """

    def __init__(
        self,
        paths: Iterable[str],
        mode: IterationMode = IterationMode.AS_PATH,
        ignore_errors: bool = False,
    ) -> None:
        self._paths: list[str] = list(paths)
        self._mode = _check_mode(mode)
        self._ignore_errors = ignore_errors
        self._index: int = 0
        self._failed: bool = False

    @property
    def valid(self) -> bool:
        return not self._failed and self._index < len(self._paths)

    @property
    def current(self) -> str | None:
        if not self.valid:
            return None
        path = self._paths[self._index]
        if self._mode is IterationMode.AS_FILE:
            return os.path.basename(path)
        return path

    @property
    def key(self) -> str | None:
        if not self.valid:
            return None
        return self._paths[self._index]

    def _validate(self) -> None:
        if self.valid:
            path = self._paths[self._index]
            if not os.path.exists(path):
                self._failed = True
                raise PathNotFoundError(path)

    def rewind(self) -> None:
        self._index = 0
        self._failed = False
        self._validate()

    def advance(self) -> None:
        if not self.valid:
            return
        self._index += 1
        self._validate()

    def has_children(self) -> bool:
        return self.valid and os.path.isdir(self._paths[self._index])

    def get_children(self) -> DirectoryWalker:
        if not self.has_children():
            raise NotADirectoryError(f"Not a directory: '{self.key}'")
        return DirectoryWalker(self.key, self._mode, self._ignore_errors)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"PathListWalker({len(self._paths)} paths, index={self._index})"


def walk_self_first(walker: IWalker) -> Iterator[tuple[str, str]]:
    """Yield ``(key, current)`` pairs of *walker* and all its descendants.

    Directories are yielded before their children (pre-order).  One walker is
    kept per directory level; all of them are closed when the generator ends,
    fails or is closed early.
    """
    stack: list[IWalker] = [walker]
    try:
        walker.rewind()
        while stack:
            top = stack[-1]
            if not top.valid:
                top.close()
                stack.pop()
                if stack:
                    stack[-1].advance()
                continue

            yield top.key, top.current  # type: ignore[misc]

            if not top.has_children():
                top.advance()
                continue

            child = top.get_children()
            try:
                child.rewind()
            except (FileNotFoundError, NotADirectoryError):
                logger.debug(f"Skipping vanished directory '{top.key}'")
                child.close()
                top.advance()
                continue
            stack.append(child)
    finally:
        for level in reversed(stack):
            level.close()
