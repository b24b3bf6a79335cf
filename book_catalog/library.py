from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from book_catalog import persistence
from book_catalog.book import Book
from book_catalog.errors import CatalogIOError
from book_catalog.search import SearchField, find
from book_catalog.sorting import SortKey, sort
from book_catalog.store import Catalog

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "txt")


class Library:
    """Manages the session's book catalog and its file persistence."""

    def __init__(self, catalog_file: Optional[str] = None, encoding: str = "utf-8") -> None:
        self.catalog_file = catalog_file
        self.encoding = encoding
        self.catalog = Catalog()

    # ------------------------- Core operations ------------------------- #
    def add_book(self, title: str, author: str, publisher: str, edition: int) -> int:
        """Append a new record and return its index in the catalog."""
        if title is None or author is None or publisher is None:
            raise ValueError("Title, author and publisher are required (empty text is allowed).")
        if isinstance(edition, bool) or not isinstance(edition, int):
            raise ValueError(f"Edition must be an integer, got {edition!r}.")
        try:
            str(edition)
        except ValueError as exc:
            raise ValueError("Edition has too many digits to be written to a catalog file.") from exc
        book = Book(title=title, author=author, publisher=publisher, edition=edition)
        return self.catalog.append(book)

    def list_books(self) -> List[Book]:
        return self.catalog.books()

    def search_books(self, field: SearchField | str, query: str) -> List[Book]:
        """Search title or author for ``query``, ignoring ASCII case."""
        return find(self.catalog, field, query)

    def sort_books(self, key: SortKey | str) -> None:
        sort(self.catalog, key)

    def get_statistics(self) -> Dict[str, Any]:
        books = self.catalog.books()
        return {
            "total_books": len(books),
            "unique_authors": len({b.author for b in books}),
            "unique_publishers": len({b.publisher for b in books}),
        }

    # ------------------------- Persistence ------------------------- #
    def save(self, path: Optional[str] = None) -> int:
        return persistence.save(self.catalog, self._resolve_path(path), encoding=self.encoding)

    def load(self, path: Optional[str] = None) -> int:
        """Replace the live catalog with the contents of ``path``.

        The current catalog is only swapped out once the file has been read
        completely; on CatalogIOError it is left as it was.
        """
        target = self._resolve_path(path)
        loaded = persistence.load(target, encoding=self.encoding)
        self.catalog.replace_all(loaded)
        logger.info(f"Catalog replaced with {len(loaded)} books from {target}")
        return len(loaded)

    def export(self, path: str, fmt: str = "json") -> int:
        """Write a read-only rendering of the catalog (json or txt)."""
        fmt = fmt.lower()
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported format: {fmt}. Use json or txt.")
        books = self.catalog.books()
        try:
            with open(path, "w", encoding=self.encoding) as f:
                if fmt == "json":
                    json.dump([b.to_dict() for b in books], f, indent=2, ensure_ascii=False)
                else:
                    for b in books:
                        f.write(f"{b.title} - {b.author} - {b.publisher} - {b.edition}\n")
        except OSError as exc:
            raise CatalogIOError(f"Could not write export file {path}: {exc.strerror or exc}", path=path) from exc
        return len(books)

    # ------------------------- Utilities ------------------------- #
    def _resolve_path(self, path: Optional[str]) -> str:
        target = path or self.catalog_file
        if not target:
            raise ValueError("No catalog file given.")
        return os.fspath(target)
