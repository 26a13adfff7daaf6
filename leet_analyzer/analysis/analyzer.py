"""Main analysis flow: parse a solution file, estimate it, export the note."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from leet_analyzer.core.config import AnalyzerConfig
from leet_analyzer.core.constants import APPROACH_SUFFIXES
from leet_analyzer.core.formatting import title_from_slug
from leet_analyzer.core.logging import (
    log_context,
    log_debug,
    log_info,
    log_warning,
    logged_operation,
)
from leet_analyzer.notes.merger import MergeResult, NoteMerger
from leet_analyzer.output import print_analysis_result, print_info, print_success
from leet_analyzer.plugins import parse_code_file

from .ai import AIEstimator
from .heuristic import HeuristicEstimator
from .models import ResultRecord


@dataclass
class AnalysisOptions:
    """Inputs for one analysis run."""

    file_path: str
    solution_name: str
    use_ai: bool
    config: AnalyzerConfig
    output_path: Optional[str] = None
    skip_export: bool = False


@dataclass
class AnalysisOutcome:
    """What an analysis run produced."""

    record: ResultRecord
    note: Optional[MergeResult] = None


def extract_base_problem_slug(filename: str) -> str:
    """
    Problem slug from a solution filename, without approach suffixes.

    Examples:
        - "two-sum.ts" -> "two-sum"
        - "two-sum-hash-map.go" -> "two-sum"
    """
    slug = Path(filename).name.split(".")[0]
    for suffix in APPROACH_SUFFIXES:
        if slug.endswith(suffix) and len(slug) > len(suffix):
            return slug[: -len(suffix)]
    return slug


def problem_name_from_slug(slug: str) -> str:
    return title_from_slug(slug)


def resolve_note_path(
    file_path: Union[str, Path],
    config: AnalyzerConfig,
    output_path: Optional[str] = None,
) -> Optional[Path]:
    """
    Where the note for a solution file lives.

    An explicit output path wins; otherwise the note is
    <vault>/<notes folder>/<problem slug>.md. Returns None when neither is
    configured.
    """
    if output_path:
        return Path(output_path).expanduser()
    notes_dir = config.notes_dir()
    if notes_dir is None:
        return None
    return notes_dir / f"{extract_base_problem_slug(str(file_path))}.md"


def build_estimator(use_ai: bool, config: AnalyzerConfig):
    """Pick the AI estimator when it can be used, otherwise the heuristic one."""
    if use_ai and config.gemini_api_key:
        return AIEstimator.from_config(config)
    if use_ai:
        log_warning("No Gemini API key available. Falling back to static analysis.")
    return HeuristicEstimator()


@logged_operation("analyze_solution")
def analyze_solution(
    options: AnalysisOptions, merger: Optional[NoteMerger] = None
) -> AnalysisOutcome:
    """
    Analyze one LeetCode solution file and export the result.

    Raises:
        UnsupportedLanguageError: If the file type is not supported
        ParseError: If the file cannot be read
        NoteStorageError: If the note cannot be written
    """
    parsed = parse_code_file(options.file_path)
    main_name = parsed.main_function.name if parsed.main_function else "unnamed function"

    with log_context(solution=options.solution_name, language=parsed.language):
        log_debug(f"Language detected: {parsed.language}")
        log_debug(f"Main function identified: {main_name}")

        estimator = build_estimator(options.use_ai, options.config)
        if isinstance(estimator, AIEstimator):
            print_info("Asking AI for complexity analysis...")
        else:
            print_info("Running static code analysis...")
        record = estimator.estimate(parsed, options.solution_name)

        print_analysis_result(record)
        outcome = AnalysisOutcome(record=record)

        if options.skip_export:
            log_info("Export disabled, skipping note update")
            return outcome

        target_path = resolve_note_path(
            options.file_path, options.config, options.output_path
        )
        if target_path is None:
            log_warning("Obsidian vault path is not configured. Skipping export.")
            return outcome

        problem_slug = extract_base_problem_slug(options.file_path)
        problem_name = problem_name_from_slug(problem_slug)
        log_debug(f"Using problem slug: {problem_slug}")
        log_debug(f"Exporting to: {target_path}")

        merger = merger or NoteMerger()
        outcome.note = merger.merge(record, target_path, problem_name, record.problem_id)
        print_success(f"Exported to: {target_path} ({outcome.note.action})")

    return outcome
