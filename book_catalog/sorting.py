from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict

from book_catalog.book import Book
from book_catalog.store import Catalog


class SortKey(str, Enum):
    """Fields a catalog can be ordered by."""
    TITLE = "title"
    AUTHOR = "author"
    EDITION = "edition"


# str comparison is by code point, which matches UTF-8 byte order.
def by_title(book: Book) -> str:
    return book.title


def by_author(book: Book) -> str:
    return book.author


def by_edition(book: Book) -> int:
    return book.edition


KEY_FUNCTIONS: Dict[SortKey, Callable[[Book], Any]] = {
    SortKey.TITLE: by_title,
    SortKey.AUTHOR: by_author,
    SortKey.EDITION: by_edition,
}


def sort(catalog: Catalog, key: SortKey | str) -> None:
    """Reorder ``catalog`` in place by the given key."""
    catalog.sort_by(KEY_FUNCTIONS[SortKey(key)])
