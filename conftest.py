import pytest

from book_catalog.library import Library
from utils.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # The CLI's --output flag writes to the environment; reset it per test.
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def catalog_file(tmp_path):
    return str(tmp_path / "catalog.csv")


@pytest.fixture
def lib(catalog_file):
    return Library(catalog_file=catalog_file)
