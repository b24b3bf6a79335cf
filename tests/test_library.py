import json
import sys

import pytest

from book_catalog.book import Book
from book_catalog.errors import CatalogIOError
from book_catalog.library import Library
from book_catalog.search import SearchField
from book_catalog.sorting import SortKey

# int() and str() refuse very long digit strings only where the interpreter enforces a limit.
INT_DIGIT_LIMIT = getattr(sys, "get_int_max_str_digits", lambda: 0)()
needs_int_digit_limit = pytest.mark.skipif(not INT_DIGIT_LIMIT, reason="no integer string conversion limit")


def test_add_list_and_search(lib):
    assert lib.list_books() == []

    index = lib.add_book("Biblioteca Central", "Autor", "Editora", 1)

    assert index == 0
    assert len(lib.list_books()) == 1
    assert lib.list_books()[0].title == "Biblioteca Central"
    assert lib.search_books(SearchField.TITLE, "central")[0].author == "Autor"

def test_add_returns_sequential_indexes(lib):
    assert [lib.add_book(f"Book {i}", "A", "P", i) for i in range(3)] == [0, 1, 2]

def test_add_keeps_surrounding_spaces(lib):
    lib.add_book("  Spaced  ", " Author", "Publisher ", 2)
    assert lib.list_books()[0] == Book("  Spaced  ", " Author", "Publisher ", 2)

def test_add_rejects_missing_fields(lib):
    with pytest.raises(ValueError):
        lib.add_book(None, "Author", "Pub", 1)
    assert lib.list_books() == []

def test_add_rejects_non_integer_edition(lib):
    with pytest.raises(ValueError):
        lib.add_book("Title", "Author", "Pub", "second")

@pytest.mark.parametrize("edition", [1.9, 2.0, True, "3", None])
def test_add_rejects_edition_that_is_not_an_int(lib, edition):
    with pytest.raises(ValueError, match="Edition must be an integer"):
        lib.add_book("Title", "Author", "Pub", edition)
    assert lib.list_books() == []

@needs_int_digit_limit
def test_add_rejects_edition_with_too_many_digits(lib):
    with pytest.raises(ValueError, match="too many digits"):
        lib.add_book("Title", "Author", "Pub", 10 ** (INT_DIGIT_LIMIT + 1))
    assert lib.list_books() == []

def test_persistence(lib, catalog_file):
    lib.add_book("Sapiens", "Yuval Noah Harari", "Harper", 1)
    assert lib.save() == 1

    # New instance should read the saved file
    lib2 = Library(catalog_file=catalog_file)
    assert lib2.load() == 1
    assert lib2.list_books()[0].title == "Sapiens"

def test_load_replaces_instead_of_appending(lib, catalog_file):
    lib.add_book("Saved", "A", "P", 1)
    lib.save()
    lib.add_book("Unsaved", "B", "P", 2)

    assert lib.load() == 1
    assert [b.title for b in lib.list_books()] == ["Saved"]

def test_failed_load_keeps_current_catalog(lib, tmp_path):
    lib.add_book("Keep Me", "A", "P", 1)
    with pytest.raises(CatalogIOError):
        lib.load(str(tmp_path / "missing.csv"))
    assert [b.title for b in lib.list_books()] == ["Keep Me"]

def test_save_without_path_raises():
    with pytest.raises(ValueError, match="No catalog file given."):
        Library().save()

def test_sort_books(lib):
    lib.add_book("Cálculo", "Ana", "EditA", 2)
    lib.add_book("Algoritmos", "Bruno", "EditB", 3)
    lib.add_book("Banco de Dados", "Carlos", "EditC", 1)

    lib.sort_books(SortKey.EDITION)
    assert [b.edition for b in lib.list_books()] == [1, 2, 3]

    lib.sort_books("title")
    assert [b.title for b in lib.list_books()] == ["Algoritmos", "Banco de Dados", "Cálculo"]

def test_get_statistics(lib):
    lib.add_book("One", "Ana", "EditA", 1)
    lib.add_book("Two", "Ana", "EditB", 2)
    lib.add_book("Three", "Bruno", "EditB", 3)
    assert lib.get_statistics() == {"total_books": 3, "unique_authors": 2, "unique_publishers": 2}

def test_export_json_and_txt(lib, tmp_path):
    lib.add_book("Dom Casmurro", "Machado de Assis", "Garnier", 1)

    json_path = str(tmp_path / "out.json")
    assert lib.export(json_path, "json") == 1
    with open(json_path, encoding="utf-8") as f:
        assert json.load(f) == [{"title": "Dom Casmurro", "author": "Machado de Assis", "publisher": "Garnier", "edition": 1}]

    txt_path = str(tmp_path / "out.txt")
    lib.export(txt_path, "TXT")
    with open(txt_path, encoding="utf-8") as f:
        assert f.read() == "Dom Casmurro - Machado de Assis - Garnier - 1\n"

def test_export_unsupported_format(lib, tmp_path):
    with pytest.raises(ValueError, match="Unsupported format"):
        lib.export(str(tmp_path / "out.xml"), "xml")
