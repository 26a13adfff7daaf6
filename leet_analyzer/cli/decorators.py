"""
Decorators for Leet Analyzer commands.
"""

import traceback
from functools import wraps
from typing import Callable

import typer
from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


def with_error_handling(func: Callable) -> Callable:
    """Decorator to turn command errors into a message and exit status 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort):
            raise
        except Exception as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
            if kwargs.get("debug"):
                console.print(traceback.format_exc(), markup=False)
            raise typer.Exit(code=1)

    return wrapper
