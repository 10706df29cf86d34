"""Rich console output helpers."""

from rich.console import Console
from rich.panel import Panel

console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[bold red]✗[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]![/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[cyan]i[/cyan] {message}")


def print_panel(content: str, title: str | None = None, style: str = "blue") -> None:
    """Print content inside a bordered panel."""
    console.print(Panel(content, title=title, border_style=style))
