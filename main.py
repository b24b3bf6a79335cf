import logging
import os
import sys
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from book_catalog import CatalogIOError, Library, SearchField, SortKey
from config import settings
from utils.ui_helpers import print_list_result, print_stats_result, set_output_mode

APP_NAME = settings.app_name

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.WARNING))
logger = logging.getLogger(__name__)

console = Console()


def _open_library(file: Optional[str]) -> Library:
    """Library bound to ``file``, pre-loaded when the file already exists."""
    lib = Library(catalog_file=file or settings.catalog_file, encoding=settings.encoding)
    logger.debug(f"Using catalog file {lib.catalog_file}")
    if os.path.exists(lib.catalog_file):
        try:
            lib.load()
        except CatalogIOError as e:
            print(f"Error: {e}")
            raise typer.Exit(code=1)
    return lib


def _save_or_exit(lib: Library) -> None:
    try:
        lib.save()
    except CatalogIOError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)


# --- Typer CLI ---
app = typer.Typer(help=f"{APP_NAME} CLI")

FILE_OPTION = typer.Option(None, "--file", "-f", help="Catalog file (default: CATALOG_FILE or books.csv)")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output and not set_output_mode(output):
        print(f"Unknown output mode: {output}. Using plain.")


@app.command("add")
def cli_add(
    title: str,
    author: str,
    publisher: str,
    edition: int,
    file: Optional[str] = FILE_OPTION,
):
    """Add a book and save the catalog."""
    lib = _open_library(file)
    index = lib.add_book(title, author, publisher, edition)
    _save_or_exit(lib)
    print(f"Added #{index + 1}: {title} by {author}")


@app.command("list")
def cli_list(file: Optional[str] = FILE_OPTION):
    """List every book in the catalog."""
    lib = _open_library(file)
    print_list_result(lib.list_books())


@app.command("search")
def cli_search(
    query: str = typer.Argument(..., help="Text to look for (ASCII case is ignored)"),
    field: SearchField = typer.Option(SearchField.TITLE, "--field", help="Field to search: title | author"),
    file: Optional[str] = FILE_OPTION,
):
    """Search books by title or author."""
    lib = _open_library(file)
    books = lib.search_books(field, query)
    if books:
        print(f"{len(books)} book(s) matched:")
    print_list_result(books, title=f"🔎 Results for '{escape(query)}'", empty_message="No books matched.")


@app.command("sort")
def cli_sort(
    key: SortKey = typer.Argument(..., help="Sort key: title | author | edition"),
    write: bool = typer.Option(False, "--write", "-w", help="Save the sorted order back to the file"),
    file: Optional[str] = FILE_OPTION,
):
    """Show the catalog sorted by a field."""
    lib = _open_library(file)
    lib.sort_books(key)
    if write:
        _save_or_exit(lib)
    print_list_result(lib.list_books())


@app.command("stats")
def cli_stats(file: Optional[str] = FILE_OPTION):
    """Show catalog statistics."""
    lib = _open_library(file)
    print_stats_result(lib.get_statistics())


@app.command("export")
def cli_export(
    format: str = typer.Option("json", "--format", help="json | txt"),
    output: str = typer.Option("catalog_export", "--to", help="Output file name without extension"),
    file: Optional[str] = FILE_OPTION,
):
    """Export the catalog as JSON or plain text."""
    lib = _open_library(file)
    filename = f"{output}.{format.lower()}"
    try:
        count = lib.export(filename, format)
    except (ValueError, CatalogIOError) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print(f"Exported {count} books to {filename}")


# --- Interactive menu ---
def list_all_books(lib: Library) -> None:
    books = lib.list_books()
    if not books:
        console.print("[yellow]No books in catalog.[/]")
        return

    table = Table(title="📚 Catalog", show_lines=True, header_style="bold cyan")
    table.add_column("#", style="magenta", no_wrap=True, justify="right")
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Publisher", style="white")
    table.add_column("Edition", style="green", justify="right")

    for i, book in enumerate(books, 1):
        table.add_row(str(i), escape(book.title), escape(book.author), escape(book.publisher), str(book.edition))

    console.print(table)
    console.print(f"[dim]📊 {len(books)} books[/]")


def add(lib: Library) -> None:
    """Prompt for one book. Text is taken as typed, spaces included."""
    title = console.input("Title: ")
    author = console.input("Author: ")
    publisher = console.input("Publisher: ")
    # IntPrompt asks again until it gets a valid integer.
    edition = IntPrompt.ask("Edition (integer)")
    index = lib.add_book(title, author, publisher, edition)
    console.print(Panel.fit(f"[green]Added #{index + 1}:[/] [bold]{escape(title)}[/] - {escape(author)}", border_style="green"))


def save(lib: Library) -> None:
    path = Prompt.ask("💾 File to save to", default=lib.catalog_file or settings.catalog_file)
    try:
        count = lib.save(path)
    except CatalogIOError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return
    console.print(f"[green]✅ Saved {count} books to {escape(path)}[/]")


def load(lib: Library) -> None:
    path = Prompt.ask("📂 File to load", default=lib.catalog_file or settings.catalog_file)
    try:
        count = lib.load(path)
    except CatalogIOError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        console.print("[dim]The current catalog was kept.[/]")
        return
    console.print(f"[green]✅ Loaded {count} books from {escape(path)}[/]")


def search(lib: Library) -> None:
    field = Prompt.ask("Search in", choices=[f.value for f in SearchField], default=SearchField.TITLE.value)
    query = console.input("Search text: ")
    books = lib.search_books(field, query)
    if not books:
        console.print(f"[yellow]🔍 No books matched '{escape(query)}'.[/]")
        return

    table = Table(title=f"🔎 Results for '{escape(query)}'", show_lines=True, header_style="bold cyan")
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Publisher", style="white")
    table.add_column("Edition", style="green", justify="right")
    for book in books:
        table.add_row(escape(book.title), escape(book.author), escape(book.publisher), str(book.edition))

    console.print(table)
    console.print(f"[dim]📊 {len(books)} results[/]")


def sort(lib: Library) -> None:
    key = Prompt.ask("Sort by", choices=[k.value for k in SortKey], default=SortKey.TITLE.value)
    lib.sort_books(key)
    list_all_books(lib)


def stats(lib: Library) -> None:
    statistics = lib.get_statistics()
    console.print(Panel.fit(
        f"[bold]Total Books:[/] {statistics['total_books']}\n"
        f"[bold]Unique Authors:[/] {statistics['unique_authors']}\n"
        f"[bold]Unique Publishers:[/] {statistics['unique_publishers']}",
        title="📊 Stats",
        border_style="blue"
    ))


def run_menu(lib: Optional[Library] = None) -> None:
    """Interactive menu over an in-memory catalog that starts empty."""
    lib = lib or Library(catalog_file=settings.catalog_file, encoding=settings.encoding)

    def render_menu() -> None:
        menu_items = [
            ("1", "Add a book", "➕"),
            ("2", "List all books", "📚"),
            ("3", "Save catalog", "💾"),
            ("4", "Load catalog", "📂"),
            ("5", "Search books", "🔎"),
            ("6", "Sort books", "↕️"),
            ("7", "Show statistics", "📊"),
            ("0", "Exit", "🚪"),
        ]

        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))

    actions = {"1": add, "2": list_all_books, "3": save, "4": load, "5": search, "6": sort, "7": stats}

    while True:
        render_menu()
        choice = Prompt.ask("Choose an option", choices=["1", "2", "3", "4", "5", "6", "7", "0"], default="2")
        if choice == "0":
            console.print("[green]Goodbye![/]")
            break
        actions[choice](lib)
        print()  # spacing between actions


def run() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        run_menu()


if __name__ == "__main__":
    run()
