import subprocess
import sys
from datetime import datetime
from typing import List, Optional

import typer
from rich.console import Console

from book import Book
from config import settings
from library import Library, Outcome
from user import User
from ui_helpers import set_output_mode, print_list_result, print_outcome, print_stats_result

APP_NAME = "Kütüphane CLI"

console = Console()

# --- Typer CLI Uygulaması ---
app = typer.Typer(help=APP_NAME)

@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Çıktı formatı: plain | json | rich (varsayılan: plain)",
    )
):
    """CLI için genel seçenekler (ör. çıktı modu)."""
    if output and not set_output_mode(output):
        print(f"Unsupported output mode: {output}. Use plain, json or rich.")
        raise typer.Exit(code=2)


def run_demo(library: Library) -> List[Outcome]:
    """Örnek senaryoyu çalıştır: sadece sonuçları döndürür, ekrana yazmaz.

    Bir kütüphaneci üç kitap ekler, iki üye birer kitap ödünç alıp iade eder.
    """
    librarian = User.librarian("Rtan", 30)
    member1 = User.member("Aspiring Developer", 30)
    member2 = User.member("Bookworm", 28)

    now = datetime.now()
    book1 = Book("TS Grammar", "Kang Changmin", now)
    book2 = Book("Discipline Guide", "Oh Eunyoung", now)
    book3 = Book("Cooking Show", "Baek Jongwon", now)

    outcomes = [
        library.add_book(librarian, book1),
        library.add_book(librarian, book2),
        library.add_book(librarian, book3),
        library.rent_book(member1, book1),
        library.rent_book(member2, book2),
        library.return_book(member1, book1),
        library.return_book(member2, book2),
    ]
    return outcomes


@app.command("demo")
def cli_demo():
    """Örnek ödünç alma senaryosunu çalıştır ve sonuçları göster."""
    library = Library()
    outcomes = run_demo(library)

    # Katalog, ödünç işlemlerinden önce gösterilir
    for outcome in outcomes[:3]:
        print_outcome(outcome)
    print("Books available to rent:")
    print_list_result(library.get_books())
    for outcome in outcomes[3:]:
        print_outcome(outcome)
    print_stats_result(library.get_statistics())


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Dinlenecek adres"),
    port: Optional[int] = typer.Option(None, "--port", help="Dinlenecek port"),
    timeout: int = typer.Option(0, "--timeout", help="Otomatik çıkıştan önce çalışacak saniye (0 = zaman aşımı yok)"),
):
    """Uvicorn kullanarak HTTP API'yi başlat."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    url = f"http://{host}:{port}/"
    print(f"Starting API on {url}")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    try:
        subprocess.run(args, timeout=timeout if timeout > 0 else None)
    except subprocess.TimeoutExpired:
        console.print(f"[yellow]Server stopped after {timeout}s[/]")


if __name__ == "__main__":
    app()
