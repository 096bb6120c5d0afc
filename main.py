from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from cli.app import app
from core.exceptions import FactorialError

console = Console(stderr=True)


if __name__ == "__main__":
    try:
        app()
    except FactorialError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)
