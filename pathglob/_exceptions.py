class InvalidPatternError(ValueError):
    """Raised when a glob is neither absolute nor a URI. Subclass of ValueError."""
    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f'The glob "{pattern}" is not absolute and not a URI.')


class UnreadableDirectoryError(PermissionError):
    """Raised when a directory cannot be read during a scan. Subclass of PermissionError."""
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f'Cannot read directory "{path}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PathNotFoundError(FileNotFoundError):
    """Raised when an explicitly supplied path is missing. Subclass of FileNotFoundError."""
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'The path "{path}" was expected to exist.')
