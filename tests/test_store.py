import pytest

from book_catalog.book import Book
from book_catalog.store import Catalog


def test_append_returns_index():
    catalog = Catalog()
    assert catalog.append(Book("A", "a", "p", 1)) == 0
    assert catalog.append(Book("B", "b", "p", 2)) == 1
    assert len(catalog) == 2
    assert catalog[1].title == "B"

def test_append_grows_past_initial_capacity():
    catalog = Catalog()
    for i in range(100):
        catalog.append(Book(f"T{i}", "a", "p", i))
    assert len(catalog) == 100
    assert catalog[99].edition == 99

def test_iteration_is_restartable():
    catalog = Catalog([Book("A", "a", "p", 1), Book("B", "b", "p", 2)])
    assert [b.title for b in catalog] == ["A", "B"]
    assert [b.title for b in catalog] == ["A", "B"]

def test_books_returns_a_snapshot():
    catalog = Catalog([Book("A", "a", "p", 1)])
    snapshot = catalog.books()
    snapshot.append(Book("B", "b", "p", 2))
    assert len(catalog) == 1

def test_replace_all_swaps_contents():
    catalog = Catalog([Book("Old", "a", "p", 1)])
    catalog.replace_all([Book("New", "b", "p", 2), Book("Newer", "c", "p", 3)])
    assert [b.title for b in catalog] == ["New", "Newer"]

def test_replace_all_keeps_old_contents_on_failure():
    catalog = Catalog([Book("Old", "a", "p", 1)])

    def broken():
        yield Book("Partial", "b", "p", 2)
        raise RuntimeError("source failed")

    with pytest.raises(RuntimeError):
        catalog.replace_all(broken())
    assert [b.title for b in catalog] == ["Old"]
