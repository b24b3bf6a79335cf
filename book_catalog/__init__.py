"""Book Catalog - Core Package

This package contains the core catalog modules:
- Book record model (book.py)
- In-memory record store (store.py)
- Semicolon-delimited text codec (csv_codec.py)
- Substring search (search.py)
- Field ordering (sorting.py)
- Catalog file save/load (persistence.py)
- Session facade used by the CLI (library.py)
"""

from book_catalog.book import Book
from book_catalog.errors import CatalogError, CatalogIOError, MalformedLineError
from book_catalog.library import Library
from book_catalog.search import SearchField
from book_catalog.sorting import SortKey
from book_catalog.store import Catalog

__all__ = [
    "Book",
    "Catalog",
    "CatalogError",
    "CatalogIOError",
    "Library",
    "MalformedLineError",
    "SearchField",
    "SortKey",
]
