"""
Main Typer app and command definitions for Leet Analyzer.
"""

from typing import Optional

import typer

from leet_analyzer.core.config import AnalyzerConfig
from leet_analyzer.core.logging import configure_logging
from leet_analyzer.output import print_banner

from .decorators import with_error_handling
from .handlers import CommandHandlers
from .options import resolve_options

# Create main typer app
app = typer.Typer(
    help="LeetCode Analyzer - complexity analysis of solutions, exported to Obsidian",
    add_completion=False,
    rich_markup_mode="markdown",
)


# ---- Commands ----


@app.command()
@with_error_handling
def analyze(
    file_path: str = typer.Argument(..., help="Path to the solution file"),
    my_solution: bool = typer.Option(
        False, "--my-solution", "-m", help="Name the solution 'Initial Submission'"
    ),
    solution_name: Optional[str] = typer.Option(
        None, "--solution-name", "-s", help="Custom name for this approach"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the note to this file instead of the vault"
    ),
    ai: bool = typer.Option(True, "--ai/--no-ai", help="Use AI analysis"),
    export: bool = typer.Option(
        True, "--export/--no-export", help="Export the result to Obsidian"
    ),
    config: Optional[str] = typer.Option(None, "--config", help="Config file"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to file"),
):
    """Analyze a LeetCode solution and add it to the problem's note."""
    options = resolve_options(
        solution_name=solution_name,
        my_solution=my_solution,
        output_override=output,
        config_override=config,
        ai=ai,
        export=export,
        debug_override=debug,
        verbose=verbose,
        log_file=log_file,
    )

    print_banner()
    CommandHandlers.handle_analyze(options, file_path)


@app.command()
@with_error_handling
def setup(
    config: Optional[str] = typer.Option(
        None, "--config", help="Config file to write (default: ~/.leet_analyzer_config.json)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
):
    """Interactively configure the API key and Obsidian vault."""
    configure_logging(debug=debug)
    current = AnalyzerConfig.from_file(config, use_env=False)
    CommandHandlers.handle_setup(current, config)


@app.command()
@with_error_handling
def solutions(
    note_path: str = typer.Argument(..., help="Path to an existing problem note"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """List the solutions recorded in a problem note."""
    configure_logging(debug=debug, verbose=verbose)
    CommandHandlers.handle_solutions(note_path)


if __name__ == "__main__":
    app()
