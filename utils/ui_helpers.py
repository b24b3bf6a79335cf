import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()

def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    # Unknown modes are ignored; the current mode stays
    return False

def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()
    return mode if mode in OUTPUT_MODES else "plain"

def format_book_line(index: int, book: Any) -> str:
    return f"{index} - {book.title} by {book.author} ({book.publisher}, ed. {book.edition})"

def print_list_result(books: List[Any], title: str = "📚 Books", empty_message: str = "No books in catalog.") -> None:
    """Print books according to the current output mode.
    - plain: 'N - Title by Author (Publisher, ed. E)' lines
    - json: JSON array of title, author, publisher, edition
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print(empty_message)
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        table.add_column("#", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Publisher", style="white")
        table.add_column("Edition", style="green", justify="right")
        for i, b in enumerate(books, 1):
            table.add_row(str(i), escape(b.title), escape(b.author), escape(b.publisher), str(b.edition))
        _console.print(table)
    else:
        for i, b in enumerate(books, 1):
            print(format_book_line(i, b))

def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print catalog statistics according to the current output mode."""
    mode = get_output_mode()

    total = stats.get("total_books", 0)
    authors = stats.get("unique_authors", 0)
    publishers = stats.get("unique_publishers", 0)

    if mode == "json":
        print(json.dumps({"total_books": total, "unique_authors": authors, "unique_publishers": publishers}, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {total}\n"
            f"[bold]Unique Authors:[/] {authors}\n"
            f"[bold]Unique Publishers:[/] {publishers}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Unique Authors: {authors}")
        print(f"Unique Publishers: {publishers}")
