from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List

from book_catalog.book import Book


class Catalog:
    """Ordered, growable collection of book records owned by one session."""

    def __init__(self, books: Iterable[Book] | None = None) -> None:
        self._books: List[Book] = list(books) if books is not None else []

    def append(self, book: Book) -> int:
        """Add a record at the end and return its index."""
        self._books.append(book)
        return len(self._books) - 1

    def replace_all(self, books: Iterable[Book]) -> None:
        """Swap in a new sequence of records.

        The replacement list is fully built before the old one is dropped, so a
        failure while iterating ``books`` leaves the catalog untouched.
        """
        new_books = list(books)
        self._books = new_books

    def books(self) -> List[Book]:
        return list(self._books)

    def sort_by(self, key: Callable[[Book], Any]) -> None:
        self._books.sort(key=key)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books))

    def __getitem__(self, index: int) -> Book:
        return self._books[index]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Catalog({len(self._books)} books)"
