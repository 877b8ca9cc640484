"""Typed exceptions for loading tables and building similarity graphs."""


class CountrySimilarityError(Exception):
    """Base class for errors raised by this package."""


class FileError(CountrySimilarityError):
    """Raised when a source file is missing or cannot be read."""

    def __init__(self, path, reason: str = "cannot be opened") -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class FormatError(CountrySimilarityError, ValueError):
    """Raised when a file cannot be tokenized as delimited rows."""


class EmptyInputError(CountrySimilarityError, ValueError):
    """Raised when a table has no data rows or no usable feature column."""


class GraphError(CountrySimilarityError, ValueError):
    """Raised on invalid graph operations (self-loops, duplicate edges, unknown nodes)."""


class ParseWarning(UserWarning):
    """Emitted when feature cells fail numeric parsing and are treated as absent."""
