"""Console message helpers."""

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def info(message: str) -> None:
    console.print(f"[blue]{escape(message)}[/blue]")


def warning(message: str) -> None:
    console.print(f"[yellow]⚠ {escape(message)}[/yellow]")
