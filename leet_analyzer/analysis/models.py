"""Data types shared by the parsers, the estimators and the note exporter."""

from dataclasses import dataclass, field
from typing import List, Optional

SUPPORTED_SOURCE_LANGUAGES = ("typescript", "javascript", "go")


@dataclass
class MainFunction:
    """The function a language plugin picked as the LeetCode entry point."""

    name: str
    code: str
    start_line: int
    end_line: int


@dataclass
class ParsedCode:
    """A solution file after language detection and main-function extraction."""

    content: str
    language: str
    file_path: str = ""
    main_function: Optional[MainFunction] = None
    imports: List[str] = field(default_factory=list)

    @property
    def code_for_analysis(self) -> str:
        """The main function's code if one was found, otherwise the whole file."""
        if self.main_function and self.main_function.code:
            return self.main_function.code
        return self.content


@dataclass(frozen=True)
class ComparisonEntry:
    """One row of a note's comparison summary table."""

    problem_name: str
    problem_id: int
    solution_name: str
    time_complexity: str
    space_complexity: str
    percentile: Optional[int] = None


@dataclass(frozen=True)
class ResultRecord:
    """
    Outcome of one analysis pass over a solution file.

    ``solution_name`` is the identity used when the record is merged into an
    existing note; it must be a single non-empty line. Surrounding
    whitespace is stripped, matching how names are read back from notes.
    """

    problem_name: str
    problem_id: int
    solution_name: str
    time_complexity: str
    space_complexity: str
    code_excerpt: str
    source_language: str
    timestamp: str
    percentile: Optional[int] = None
    explanation: Optional[str] = None
    file_path: str = ""

    def __post_init__(self):
        if not self.solution_name or not self.solution_name.strip():
            raise ValueError("solution_name must not be empty")
        if "\n" in self.solution_name or "\r" in self.solution_name:
            raise ValueError("solution_name must be a single line")
        object.__setattr__(self, "solution_name", self.solution_name.strip())
        if self.percentile is not None and not 1 <= self.percentile <= 100:
            raise ValueError(
                f"percentile must be between 1 and 100, got {self.percentile}"
            )
        if self.source_language not in SUPPORTED_SOURCE_LANGUAGES:
            raise ValueError(f"Unsupported source language: {self.source_language}")

    def to_comparison_entry(self) -> ComparisonEntry:
        return ComparisonEntry(
            problem_name=self.problem_name,
            problem_id=self.problem_id,
            solution_name=self.solution_name,
            time_complexity=self.time_complexity,
            space_complexity=self.space_complexity,
            percentile=self.percentile,
        )
