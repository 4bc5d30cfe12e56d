import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from config import settings
from library import Outcome

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()

def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    # Geçersiz değerleri yoksay; mevcut varsayılanı koru
    return False

def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, settings.default_output_mode).lower()
    return mode if mode in OUTPUT_MODES else "plain"

def print_list_result(books: List[Any]) -> None:
    """Kitap listesini mevcut çıktı moduna göre yazdır.
    - plain: 'Title by Author (YYYY-MM-DD)' satırları, veya 'No books in library.'
    - json: JSON dizisi olarak book_id, title, author, published_date
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Published", style="magenta", no_wrap=True)
        for b in books:
            table.add_row(escape(b.title), escape(b.author), f"{b.published_date:%Y-%m-%d}")
        _console.print(table)
    else:
        for b in books:
            print(f"{b.title} by {b.author} ({b.published_date:%Y-%m-%d})")

def print_outcome(outcome: Outcome) -> None:
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps(outcome.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        if outcome.ok:
            _console.print(f"✅ [green]{escape(outcome.message)}[/]")
        else:
            _console.print(f"❌ [red]{outcome.kind.value}[/]: {escape(outcome.message)}")
    else:
        prefix = "OK" if outcome.ok else outcome.kind.value
        print(f"[{prefix}] {outcome.message}")

def print_stats_result(stats: Dict[str, Any]) -> None:
    """Statistikleri mevcut çıktı moduna göre yazdır.
    - plain: her metrik için bir satır
    - json: JSON nesnesi
    - rich: Ana metriklerle Panel
    """
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    total = stats.get("total_books", 0)
    authors = stats.get("unique_authors", 0)
    loans = stats.get("active_loans", 0)

    if mode == "json":
        print(json.dumps({"total_books": total, "unique_authors": authors, "active_loans": loans},
                         ensure_ascii=False))
    elif mode == "rich":
        content = (f"[bold]Total Books:[/] {total}\n[bold]Unique Authors:[/] {authors}\n"
                   f"[bold]Active Loans:[/] {loans}")
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Unique Authors: {authors}")
        print(f"Active Loans: {loans}")
