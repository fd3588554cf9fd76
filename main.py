import subprocess
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from config import settings
from exceptions import LibraryError
from library import Library, read_seed_file

APP_NAME = "Book Store CLI"

app = typer.Typer(help=APP_NAME, no_args_is_help=True)
console = Console()


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (defaults to API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to bind (defaults to API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart the server when code changes"),
):
    """Start the HTTP API with uvicorn."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    console.print(f"[green]Starting {settings.app_name} on http://{host}:{port}/[/]")
    if settings.seed_file:
        console.print(f"[dim]Seeding books from {settings.seed_file}[/]")

    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
        "--log-level", settings.log_level.lower(),
    ]
    if reload:
        args.append("--reload")
    try:
        result = subprocess.run(args)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] could not launch uvicorn. Make sure it is installed.")
        raise typer.Exit(code=1)
    raise typer.Exit(code=result.returncode)


@app.command("preview")
def cli_preview(path: str = typer.Argument(..., help="JSON file holding an array of books")):
    """Load a seed file the way the server would and show its books by id."""
    library = Library()
    try:
        library.load_books(read_seed_file(path))
    except (OSError, ValueError, LibraryError) as e:
        console.print(f"[bold red]Invalid seed file:[/] {e}")
        raise typer.Exit(code=1)

    books = library.list_books()
    if not books:
        console.print("[yellow]No books in seed file.[/]")
        return

    columns = sorted({name for b in books for name in b.fields})
    table = Table(title=f"Books in {path}", show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True)
    for name in columns:
        table.add_column(name)
    for book in books:
        table.add_row(str(book.id), *(str(book.fields.get(name, "")) for name in columns))

    console.print(table)
    console.print(f"[dim]{len(books)} books[/]")


if __name__ == "__main__":
    app()
