from contextlib import contextmanager
from typing import Iterator, List

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

GHKIT_THEME = Theme(
    {
        "ghkit.success": "bold green",
        "ghkit.error": "bold red",
        "ghkit.warning": "bold yellow",
        "ghkit.info": "cyan",
        "ghkit.header": "bold magenta",
    }
)

console = Console(theme=GHKIT_THEME)


def success(message: str):
    console.print(f"✔ {message}", style="ghkit.success")


def error(message: str):
    console.print(f"✖ {message}", style="ghkit.error")


def warning(message: str):
    console.print(f"⚠  {message}", style="ghkit.warning")


def info(message: str):
    console.print(message, style="ghkit.info")


def rule():
    console.rule(style="dim")


@contextmanager
def status(message: str) -> Iterator[None]:
    """Spinner shown while a slow step (clone, push, fetch) runs"""
    with console.status(message, spinner="dots"):
        yield


def create_table(title: str, columns: List[str]) -> Table:
    table = Table(title=title, show_header=True, header_style="ghkit.header")
    for column in columns:
        table.add_column(column, style="ghkit.info" if column == columns[0] else None)
    return table
