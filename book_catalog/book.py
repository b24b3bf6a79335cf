from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Book:
    """Represents a single book record in the catalog.

    Text fields are kept exactly as entered, surrounding spaces included.
    """

    title: str
    author: str
    publisher: str
    edition: int

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} ({self.publisher}, ed. {self.edition})"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "publisher": self.publisher,
            "edition": self.edition,
        }

