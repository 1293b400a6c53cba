"""Typed exceptions for page buffering and I/O formats."""


class PagingError(ValueError):
    """Base class for pagination related errors."""


class PagingConfigError(PagingError):
    """Raised when a buffer is constructed with invalid parameters."""


class OversizeCommitError(PagingError):
    """Raised when a single commit can never fit within one page.

    The buffer is left untouched: the pending text is still buffered and no
    page was created or modified.
    """

    def __init__(self, size: int, size_limit: int) -> None:
        super().__init__(
            "Commit is too large, could not write a page for this commit "
            f"({size} > {size_limit})"
        )
        self.size = size
        self.size_limit = size_limit


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader is registered for a file format."""
