from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures."""


class CatalogIOError(CatalogError):
    """A catalog file could not be opened, read or written."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class MalformedLineError(CatalogError, ValueError):
    """A line of a catalog file does not decode into a book record."""


class IncompleteRecordError(MalformedLineError):
    """A quoted field was still open when the input ran out."""
