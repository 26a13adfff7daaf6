"""
In-memory form of a problem note and its Markdown rendering.

A note looks like::

    ---
    tags: ["leetcode", "two-sum", "leetcode-1"]
    status: completed
    created: 2024-05-01
    modified: 2024-05-03
    ---

    # LeetCode Problem: Two Sum

    ## Solution: Initial Submission
    - Date Analyzed: 2024-05-01
    ...

    ## Comparison Summary
    | Solution | Time Complexity | Space Complexity | Estimated Performance |
    ...

Blocks are separated by a single blank line and the file ends with one
newline. Rendering is deterministic so that re-exporting unchanged data
produces identical bytes.
"""

import json
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from leet_analyzer.analysis.models import ComparisonEntry, ResultRecord
from leet_analyzer.core.constants import (
    NOTE_STATUS,
    NOTE_TAG,
    NOTE_TITLE_PREFIX,
    SOLUTION_HEADER_PREFIX,
    SUMMARY_HEADING,
)
from leet_analyzer.core.formatting import (
    escape_table_cell,
    format_percentile,
    slugify,
)

TITLE_LINE_RE = re.compile(r"^# \S", re.MULTILINE)
MODIFIED_LINE_RE = re.compile(r"^([ \t]*modified:)")
FRONT_MATTER_DELIMITER = "---"

SUMMARY_COLUMNS = (
    "| Solution | Time Complexity | Space Complexity | Estimated Performance |"
)
SUMMARY_SEPARATOR = (
    "|----------|-----------------|-------------------|------------------------|"
)


def default_tags(problem_name: str, problem_id: int) -> List[str]:
    tags = [NOTE_TAG, slugify(problem_name), f"{NOTE_TAG}-{problem_id}"]
    return [tag for tag in tags if tag]


@dataclass
class NoteHeader:
    """Front matter and title of a newly created note."""

    problem_name: str
    problem_id: int
    created: str
    modified: str
    tags: List[str] = field(default_factory=list)
    status: str = NOTE_STATUS

    @classmethod
    def create(cls, problem_name: str, problem_id: int, date: str) -> "NoteHeader":
        return cls(
            problem_name=problem_name,
            problem_id=problem_id,
            created=date,
            modified=date,
            tags=default_tags(problem_name, problem_id),
        )

    def render(self) -> str:
        return "\n".join(
            [
                FRONT_MATTER_DELIMITER,
                f"tags: {json.dumps(self.tags, ensure_ascii=False)}",
                f"status: {self.status}",
                f"created: {self.created}",
                f"modified: {self.modified}",
                FRONT_MATTER_DELIMITER,
                "",
                f"{NOTE_TITLE_PREFIX}{self.problem_name}",
            ]
        )


def touch_modified(header: str, date: str) -> str:
    """
    Set the front matter's ``modified:`` value, leaving every other line as is.

    Headers without front matter are returned unchanged.
    """
    lines = header.split("\n")
    start = next((i for i, line in enumerate(lines) if line.strip()), None)
    if start is None or lines[start].strip() != FRONT_MATTER_DELIMITER:
        return header

    for i in range(start + 1, len(lines)):
        if lines[i].strip() == FRONT_MATTER_DELIMITER:
            break
        match = MODIFIED_LINE_RE.match(lines[i])
        if match:
            lines[i] = f"{match.group(1)} {date}"
    return "\n".join(lines)


def split_front_matter(text: str) -> Tuple[Optional[str], str]:
    """
    Separate a leading ``---`` front matter block from the rest of ``text``.

    Returns:
        (front matter including both delimiters, remaining text); the
        front matter is None when the text does not open with a closed block
    """
    lines = text.split("\n")
    start = next((i for i, line in enumerate(lines) if line.strip()), None)
    if start is None or lines[start].strip() != FRONT_MATTER_DELIMITER:
        return None, text

    for end in range(start + 1, len(lines)):
        if lines[end].strip() == FRONT_MATTER_DELIMITER:
            return "\n".join(lines[start : end + 1]), "\n".join(lines[end + 1 :])
    return None, text


def parse_header(preamble: str, problem_name: str, problem_id: int, date: str) -> str:
    """
    Work out the header block for a note being re-rendered.

    When the existing preamble has a "# <title>" line, the whole preamble is
    kept, including front matter and anything added by hand; only the
    ``modified:`` date changes. Without a title, existing front matter is
    kept the same way and a title line is added below it; with neither, a
    fresh header is built from the given problem identity. Leftover preamble
    text is kept below the title.

    Args:
        preamble: Text before the first section of the existing note
        problem_name: Problem name to use for a new header
        problem_id: Problem number to use for a new header
        date: Date written as created/modified
    Returns:
        Header text without trailing whitespace
    """
    preamble = preamble or ""
    if TITLE_LINE_RE.search(preamble):
        return touch_modified(preamble.rstrip(), date)

    front_matter, rest = split_front_matter(preamble)
    if front_matter is not None:
        header = (
            f"{touch_modified(front_matter, date)}\n\n{NOTE_TITLE_PREFIX}{problem_name}"
        )
    else:
        header = NoteHeader.create(problem_name, problem_id, date).render()

    leftover = rest.strip()
    if leftover:
        return f"{header}\n\n{leftover}"
    return header


def _render_solution_block(
    solution_name: str,
    time_complexity: str,
    space_complexity: str,
    percentile: Optional[int],
    explanation: Optional[str],
    code: str,
    language: str = "",
    date: Optional[str] = None,
) -> str:
    lines = [f"{SOLUTION_HEADER_PREFIX}{solution_name}"]
    if date:
        lines.append(f"- Date Analyzed: {date}")
    lines.extend(
        [
            f"- Time Complexity: {time_complexity}",
            f"- Space Complexity: {space_complexity}",
        ]
    )
    if percentile is not None:
        lines.append(f"- Estimated Performance: Beats ~{percentile}% of submissions")
    if explanation and explanation.strip():
        lines.append("- Analysis:")
        lines.extend(f"  > {line}" for line in explanation.strip().splitlines())

    lines.extend(["", "- Code Snippet:", f"```{language}", code.rstrip("\n"), "```"])
    return "\n".join(lines)


def render_section(record: ResultRecord) -> str:
    """Render the Markdown section for one analysed solution."""
    return _render_solution_block(
        record.solution_name,
        record.time_complexity,
        record.space_complexity,
        record.percentile,
        record.explanation,
        record.code_excerpt,
        language=record.source_language,
        date=record.timestamp,
    )


def render_recovered_section(entry: ComparisonEntry, note: str, code: str) -> str:
    """
    Render a section from summary data alone.

    No analysis date is written and the code fence carries no language,
    since neither is known for the recovered solution.
    """
    return _render_solution_block(
        entry.solution_name,
        entry.time_complexity,
        entry.space_complexity,
        entry.percentile,
        note,
        code,
    )


def render_summary_table(entries: List[ComparisonEntry]) -> str:
    """Render the comparison table, one row per entry in the given order."""
    lines = [SUMMARY_HEADING, SUMMARY_COLUMNS, SUMMARY_SEPARATOR]
    for entry in entries:
        cells = [
            escape_table_cell(entry.solution_name),
            escape_table_cell(entry.time_complexity),
            escape_table_cell(entry.space_complexity),
            format_percentile(entry.percentile),
        ]
        lines.append(f"| {' | '.join(cells)} |")
    return "\n".join(lines)


@dataclass
class NoteDocument:
    """A note split into header, solution sections and the derived summary."""

    header: str
    sections: List[Tuple[str, str]] = field(default_factory=list)
    extra_sections: List[str] = field(default_factory=list)
    summary: List[ComparisonEntry] = field(default_factory=list)

    @property
    def solution_names(self) -> List[str]:
        return [name for name, _ in self.sections]

    def validate(self) -> None:
        """
        Check that section names are unique and the summary mirrors them.

        Raises:
            ValueError: If either condition does not hold
        """
        names = self.solution_names
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate solution sections: {names}")
        summary_names = [entry.solution_name for entry in self.summary]
        if summary_names != names:
            raise ValueError(
                f"Summary rows {summary_names} do not match sections {names}"
            )

    def render(self) -> str:
        blocks = [self.header.rstrip()]
        blocks.extend(body.rstrip() for _, body in self.sections)
        blocks.extend(body.rstrip() for body in self.extra_sections)
        blocks.append(render_summary_table(self.summary))
        return "\n\n".join(blocks) + "\n"
