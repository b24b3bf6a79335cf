from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from book_catalog.book import Book


class SearchField(str, Enum):
    """Text fields a search can target."""
    TITLE = "title"
    AUTHOR = "author"


def _fold(text: str) -> bytes:
    # bytes.lower() folds ASCII letters only; multi-byte UTF-8 sequences are compared as-is.
    return text.encode("utf-8").lower()


def matches(value: str, query: str) -> bool:
    """Case-insensitive (ASCII only) substring test. An empty query always matches."""
    return _fold(query) in _fold(value)


def find(catalog: Iterable[Book], field: SearchField | str, query: str) -> List[Book]:
    """Return every book whose ``field`` contains ``query``, in catalog order."""
    attribute = SearchField(field).value
    needle = _fold(query)
    return [book for book in catalog if needle in _fold(getattr(book, attribute))]
