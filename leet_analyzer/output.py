from typing import Any, List, Optional, Union

from rich.box import ROUNDED
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from leet_analyzer.analysis.models import ComparisonEntry, ResultRecord
from leet_analyzer.core.formatting import format_percentile

# ==============================================================================
# Constants & Global Console
# ==============================================================================

console = Console()

SUCCESS_STYLE = Style(color="green", bold=True)
WARNING_STYLE = Style(color="yellow", bold=True)
INFO_STYLE = Style(color="blue", bold=True)
BOLD_STYLE = Style(bold=True)
DIM_STYLE = Style(dim=True)
CYAN_STYLE = Style(color="cyan")

# ==============================================================================
# Private Helper Functions
# ==============================================================================


def _create_panel(
    content: RenderableType,
    title: Optional[str] = None,
    border_style: Union[str, Style] = "blue",
    padding: tuple = (1, 2),
    box: Any = ROUNDED,
    **kwargs: Any,
) -> Panel:
    """Helper function to create a Rich Panel."""
    return Panel(
        content,
        title=title,
        border_style=border_style,
        padding=padding,
        box=box,
        **kwargs,
    )


def _create_table(
    title: Optional[str] = None,
    box: Any = ROUNDED,
    show_header: bool = True,
    header_style: Union[str, Style] = "bold blue",
    **kwargs: Any,
) -> Table:
    """Helper function to create a Rich Table."""
    return Table(
        title=title,
        box=box,
        show_header=show_header,
        header_style=header_style,
        **kwargs,
    )


def _print_status_message(icon: str, msg: str, style: Union[str, Style]):
    """Helper function to print simple status messages."""
    console.print(Text(f"{icon}  {msg}", style=style))


# ==============================================================================
# General UI Elements
# ==============================================================================


def print_banner():
    """Print the tool banner."""
    banner_content = Text.assemble(
        ("LeetCode Analyzer CLI", BOLD_STYLE + CYAN_STYLE),
        "\n",
        ("Complexity analysis exported to Obsidian notes", DIM_STYLE),
    )
    console.print(_create_panel(banner_content, border_style=CYAN_STYLE, padding=(1, 2)))


def print_info(msg: str):
    """Progress or context line."""
    _print_status_message("ℹ", msg, INFO_STYLE)


def print_warning(msg: str):
    """Something was skipped or degraded; the run continues."""
    _print_status_message("⚠", msg, WARNING_STYLE)


def print_success(msg: str):
    """A step finished."""
    _print_status_message("✓", msg, SUCCESS_STYLE)


# ==============================================================================
# Analysis Output
# ==============================================================================


def print_analysis_result(record: ResultRecord):
    """Display one analysis result as a key/value table with its explanation."""
    table = _create_table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style=INFO_STYLE, width=24)
    table.add_column("Value", style=BOLD_STYLE)

    table.add_row("Solution Name:", Text(record.solution_name))
    if record.problem_name:
        table.add_row("Problem:", Text(record.problem_name))
    table.add_row("LeetCode ID:", str(record.problem_id) if record.problem_id else "unknown")
    table.add_row("Language:", record.source_language)
    table.add_row("Time Complexity:", Text(record.time_complexity))
    table.add_row("Space Complexity:", Text(record.space_complexity))
    if record.percentile is not None:
        table.add_row(
            "Estimated Performance:", f"Beats ~{record.percentile}% of submissions"
        )

    content: RenderableType = table
    if record.explanation:
        explanation = Text(record.explanation, style=DIM_STYLE)
        content = Group(table, Text(""), Text("Explanation:", style=BOLD_STYLE), explanation)

    console.print(
        _create_panel(
            content,
            title="[green]Analysis Results[/green]",
            border_style=SUCCESS_STYLE,
            padding=(1, 2),
        )
    )


def print_solutions_table(entries: List[ComparisonEntry], title: Optional[str] = None):
    """Display the solutions recovered from a note."""
    table = _create_table(title=title or "[bold]Solutions[/bold]")
    table.add_column("#", style="cyan", width=4)
    table.add_column("Solution", style="bold")
    table.add_column("Time", style="green")
    table.add_column("Space", style="blue")
    table.add_column("Performance", style="magenta")

    for index, entry in enumerate(entries, start=1):
        table.add_row(
            str(index),
            Text(entry.solution_name),
            Text(entry.time_complexity),
            Text(entry.space_complexity),
            format_percentile(entry.percentile),
        )
    console.print(table)
