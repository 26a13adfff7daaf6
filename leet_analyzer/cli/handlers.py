"""
Command handlers for Leet Analyzer - business logic separated from CLI interface.
"""

from pathlib import Path
from typing import Optional

from rich.markup import escape

from leet_analyzer.analysis.analyzer import (
    AnalysisOptions,
    AnalysisOutcome,
    analyze_solution,
)
from leet_analyzer.core.config import AnalyzerConfig
from leet_analyzer.core.exceptions import NoteStorageError
from leet_analyzer.core.logging import log_context, log_info, logged_operation
from leet_analyzer.notes.extractor import extract_solutions
from leet_analyzer.notes.storage import NoteStorage
from leet_analyzer.output import (
    print_info,
    print_solutions_table,
    print_success,
    print_warning,
)

from .options import ResolvedOptions
from .prerequisites import check_prerequisites
from .wizard import run_setup_wizard


class CommandHandlers:
    """Handles the business logic for CLI commands."""

    @staticmethod
    @logged_operation("analyze_command")
    def handle_analyze(options: ResolvedOptions, file_path: str) -> AnalysisOutcome:
        """Handle the analyze command."""
        with log_context(solution=options.solution_name):
            check_prerequisites(options, file_path)
            print_info(f"Analyzing solution: {file_path}")
            print_info(f"Solution name: {options.solution_name}")

            outcome = analyze_solution(
                AnalysisOptions(
                    file_path=file_path,
                    solution_name=options.solution_name,
                    use_ai=options.use_ai,
                    config=options.config,
                    output_path=options.output_path,
                    skip_export=not options.export,
                )
            )
            print_success("Analysis completed successfully!")
            return outcome

    @staticmethod
    @logged_operation("setup_command")
    def handle_setup(config: AnalyzerConfig, config_path: Optional[str]) -> AnalyzerConfig:
        """Handle the setup command."""
        return run_setup_wizard(config, config_path)

    @staticmethod
    @logged_operation("solutions_command")
    def handle_solutions(note_path: str) -> None:
        """Handle the solutions command."""
        text = NoteStorage().read(note_path)
        if text is None:
            raise NoteStorageError(f"Note not found: {note_path}")

        log_info(f"Listing solutions in {note_path}")
        entries = extract_solutions(text)
        if not entries:
            print_warning(f"No solutions recorded in {note_path}")
            return
        print_solutions_table(entries, title=f"[bold]{escape(Path(note_path).name)}[/bold]")
