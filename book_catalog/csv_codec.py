"""Semicolon-delimited text codec for book records.

One record per line::

    title;author;publisher;edition

Text fields are wrapped in double quotes when they contain the delimiter, a
quote, a carriage return or a line feed, or when they start or end with a
space. Inside a quoted field every ``"`` is written as ``""``. The edition is
always written bare.
"""
from __future__ import annotations

import re
from typing import Tuple

from book_catalog.book import Book
from book_catalog.errors import IncompleteRecordError, MalformedLineError

DELIMITER = ";"
QUOTE = '"'
HEADER = DELIMITER.join(("title", "author", "publisher", "edition"))

_SPECIAL_CHARS = (DELIMITER, QUOTE, "\r", "\n")
_BARE_STOPS = frozenset((DELIMITER, "\r", "\n"))
_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


def needs_quoting(field: str) -> bool:
    if any(ch in field for ch in _SPECIAL_CHARS):
        return True
    return field.startswith(" ") or field.endswith(" ")


def quote_field(field: str) -> str:
    if not needs_quoting(field):
        return field
    return QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE


def encode(book: Book) -> str:
    """Render a book as one newline-terminated catalog line."""
    fields = [
        quote_field(book.title),
        quote_field(book.author),
        quote_field(book.publisher),
        str(int(book.edition)),
    ]
    return DELIMITER.join(fields) + "\n"


class _LineScanner:
    """Cursor over a single catalog line."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def read_field(self) -> Tuple[str, int]:
        """Read the field at the cursor. Returns the value and how many characters were consumed."""
        start = self.pos
        if self.pos < len(self.line) and self.line[self.pos] == QUOTE:
            value = self._read_quoted()
        else:
            value = self._read_bare()
        return value, self.pos - start

    def expect_delimiter(self, next_field: str) -> None:
        if self.pos < len(self.line) and self.line[self.pos] == DELIMITER:
            self.pos += 1
            return
        raise MalformedLineError(f"Missing {next_field} field at column {self.pos + 1}")

    def _read_quoted(self) -> str:
        line = self.line
        self.pos += 1  # opening quote
        parts = []
        while True:
            end = line.find(QUOTE, self.pos)
            if end == -1:
                raise IncompleteRecordError("Quoted field is not closed")
            parts.append(line[self.pos:end])
            if line.startswith(QUOTE * 2, end):
                parts.append(QUOTE)
                self.pos = end + 2
                continue
            self.pos = end + 1
            break
        # Stray text between the closing quote and the delimiter is kept as-is.
        parts.append(self._read_bare())
        return "".join(parts)

    def _read_bare(self) -> str:
        line = self.line
        end = self.pos
        while end < len(line) and line[end] not in _BARE_STOPS:
            end += 1
        value = line[self.pos:end]
        self.pos = end
        return value


def parse_edition(raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise MalformedLineError(f"Edition is not an integer: {raw!r}")
    try:
        return int(raw)
    except ValueError as exc:
        # Digit strings past sys.get_int_max_str_digits() are refused by int().
        raise MalformedLineError(f"Edition has too many digits ({len(raw.strip())})") from exc


def decode(line: str) -> Book:
    """Parse one catalog line back into a Book.

    Raises:
        IncompleteRecordError: a quoted field runs past the end of ``line``.
        MalformedLineError: a field is missing or the edition is not an integer.
    """
    scanner = _LineScanner(line)
    title, _ = scanner.read_field()
    scanner.expect_delimiter("author")
    author, _ = scanner.read_field()
    scanner.expect_delimiter("publisher")
    publisher, _ = scanner.read_field()
    scanner.expect_delimiter("edition")
    raw_edition, consumed = scanner.read_field()
    if consumed == 0:
        raise MalformedLineError("Edition field is empty")
    # Anything after the edition column is ignored.
    return Book(title=title, author=author, publisher=publisher, edition=parse_edition(raw_edition))
