"""Reading and writing whole catalog files."""
from __future__ import annotations

import logging
import os
from collections import deque
from typing import Deque, Iterable, List, Tuple, Union

from book_catalog.book import Book
from book_catalog.csv_codec import HEADER, decode, encode
from book_catalog.errors import CatalogIOError, IncompleteRecordError, MalformedLineError
from book_catalog.store import Catalog

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def save(catalog: Iterable[Book], path: PathLike, encoding: str = "utf-8") -> int:
    """Write the header and one line per book, truncating ``path``.

    A failure half-way through leaves whatever was already written; the file
    is not restored. Returns the number of records written.
    """
    path = os.fspath(path)
    count = 0
    try:
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(HEADER + "\n")
            for book in catalog:
                try:
                    line = encode(book)
                except ValueError as exc:
                    raise CatalogIOError(f"Could not write record {count + 1} to {path}: {exc}", path=path) from exc
                f.write(line)
                count += 1
    except OSError as exc:
        raise CatalogIOError(f"Could not write catalog file {path}: {exc.strerror or exc}", path=path) from exc
    logger.info(f"Saved {count} books to {path}")
    return count


def _read_records(lines: Iterable[str], path: str) -> List[Book]:
    """Decode physical lines (header already consumed) into books.

    Lines are joined while a quoted field is still open. When the joined text
    still fails to decode, only its first line is dropped and the rest are
    decoded again from scratch.
    """
    books: List[Book] = []
    source = enumerate(lines, start=2)
    retry: Deque[Tuple[int, str]] = deque()
    buffered: List[Tuple[int, str]] = []

    def drop_first(reason: object) -> None:
        logger.debug(f"Skipping line {buffered[0][0]} of {path}: {reason}")
        retry.extendleft(reversed(buffered[1:]))
        buffered.clear()

    while True:
        item = retry.popleft() if retry else next(source, None)
        if item is None:
            if not buffered:
                break
            drop_first("quoted field is not closed")
            continue
        buffered.append(item)
        try:
            book = decode("".join(raw for _, raw in buffered).rstrip("\r\n"))
        except IncompleteRecordError:
            continue
        except MalformedLineError as exc:
            drop_first(exc)
            continue
        books.append(book)
        buffered.clear()
    return books


def load(path: PathLike, encoding: str = "utf-8") -> Catalog:
    """Build a new Catalog from ``path``.

    The first line is skipped without being checked. Lines that do not decode
    are dropped and loading carries on. A quoted field that spans several
    physical lines is reassembled before decoding.
    """
    path = os.fspath(path)
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            f.readline()  # header
            books = _read_records(f, path)
    except OSError as exc:
        raise CatalogIOError(f"Could not read catalog file {path}: {exc.strerror or exc}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise CatalogIOError(f"Catalog file {path} is not valid {encoding}: {exc.reason}", path=path) from exc
    logger.info(f"Loaded {len(books)} books from {path}")
    return Catalog(books)
