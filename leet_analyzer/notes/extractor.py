"""
Best-effort recovery of solution data from an existing note.

Notes are Markdown written by ``notes.document`` but may have been edited by
hand, so nothing in here raises on unexpected input: a section that cannot be
understood is skipped (and logged) and the caller works with what is left.

Solution names are never interpolated into regular expressions. A header
line is matched by a fixed prefix and the remainder, stripped of surrounding
whitespace, is compared with plain string equality, so names containing
regex metacharacters, ``#``, ``|`` or ``:`` are recovered as-is.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from leet_analyzer.analysis.models import ComparisonEntry
from leet_analyzer.core.constants import (
    NOTE_TITLE_PREFIX,
    SOLUTION_HEADER_PREFIX,
    SUMMARY_HEADING,
)
from leet_analyzer.core.logging import log_debug, log_warning

SECTION_PREFIX = "## "
FENCE_MARKERS = ("```", "~~~")


def _label_pattern(label: str) -> "re.Pattern[str]":
    # Matches "- Label: value" as well as the bold "- **Label:** value" form
    return re.compile(
        rf"^[ \t]*[-*]?[ \t]*(?:\*\*)?{label}:(?:\*\*)?[ \t]*(.*?)[ \t]*$",
        re.MULTILINE,
    )


TIME_COMPLEXITY_RE = _label_pattern("Time Complexity")
SPACE_COMPLEXITY_RE = _label_pattern("Space Complexity")
PROBLEM_NAME_RE = _label_pattern("(?:LeetCode )?Problem")
PROBLEM_ID_RE = _label_pattern("(?:LeetCode|Leetcode) ID")
PERCENTILE_RE = re.compile(
    r"Estimated Performance:(?:\*\*)?[ \t]*Beats[ \t]*~?[ \t]*(\d+)[ \t]*%"
)
TITLE_RE = re.compile(rf"^{re.escape(NOTE_TITLE_PREFIX)}(.*?)[ \t]*$", re.MULTILINE)
TAGS_LINE_RE = re.compile(r"^[ \t]*tags:(.*)$", re.MULTILINE)
ID_TAG_RE = re.compile(r"leetcode-(\d+)")


@dataclass
class RawSection:
    """A level-2 section of a note, from its heading to the next one."""

    heading: str
    body: str

    @property
    def raw_solution_name(self) -> Optional[str]:
        """Text after the solution label, or None for non-solution sections."""
        if self.heading.startswith(SOLUTION_HEADER_PREFIX):
            return self.heading[len(SOLUTION_HEADER_PREFIX) :]
        return None

    @property
    def is_solution(self) -> bool:
        return self.raw_solution_name is not None

    @property
    def is_summary(self) -> bool:
        return self.heading.strip() == SUMMARY_HEADING


def _is_fence(line: str) -> bool:
    return line.lstrip().startswith(FENCE_MARKERS)


def split_sections(text: str) -> Tuple[str, List[RawSection]]:
    """
    Split a note into its preamble and level-2 sections.

    Headings inside fenced code blocks are ignored, so a code snippet
    containing "## " lines stays inside its section.

    Args:
        text: Full note text
    Returns:
        (preamble, sections) where preamble is everything before the first
        section heading and each section body runs from its heading line to
        the line before the next heading, trailing whitespace removed
    """
    preamble: List[str] = []
    chunks: List[List[str]] = []
    in_fence = False

    for line in (text or "").splitlines(keepends=True):
        if not in_fence and line.startswith(SECTION_PREFIX):
            chunks.append([line])
            continue
        if _is_fence(line):
            in_fence = not in_fence
        (chunks[-1] if chunks else preamble).append(line)

    sections = []
    for chunk in chunks:
        heading = chunk[0].rstrip()
        sections.append(RawSection(heading=heading, body="".join(chunk).rstrip()))
    return "".join(preamble), sections


def _first_value(pattern: "re.Pattern[str]", text: str) -> Optional[str]:
    match = pattern.search(text)
    if match and match.group(1):
        return match.group(1)
    return None


def _document_identity(preamble: str) -> Tuple[str, int]:
    """Problem name and number recorded in the note's title and tags."""
    problem_name = _first_value(TITLE_RE, preamble) or ""
    problem_id = 0
    tags_line = _first_value(TAGS_LINE_RE, preamble)
    if tags_line:
        id_match = ID_TAG_RE.search(tags_line)
        if id_match:
            problem_id = int(id_match.group(1))
    return problem_name, problem_id


def extract_solutions(text: str) -> List[ComparisonEntry]:
    """
    Recover the solutions recorded in a note.

    A section is kept only when both its time and space complexity labels
    are present; the percentile is optional. Problem name and number come
    from labels inside the section when present, otherwise from the note's
    title and tags.

    Args:
        text: Full note text (may be empty or arbitrary)
    Returns:
        Entries in document order
    """
    preamble, sections = split_sections(text)
    default_name, default_id = _document_identity(preamble)
    solutions = []

    for section in sections:
        if not section.is_solution:
            continue
        solution_name = section.raw_solution_name.strip()
        if not solution_name:
            log_warning(f"Skipping solution section with an empty name: {section.heading!r}")
            continue
        log_debug(f"Found solution header: {solution_name!r}")

        time_complexity = _first_value(TIME_COMPLEXITY_RE, section.body)
        space_complexity = _first_value(SPACE_COMPLEXITY_RE, section.body)
        if not time_complexity or not space_complexity:
            log_warning(
                f"Could not extract complexity info for {solution_name!r}; "
                "section will not be carried over",
                solution=solution_name,
            )
            continue

        percentile_match = PERCENTILE_RE.search(section.body)
        percentile = int(percentile_match.group(1)) if percentile_match else None
        if percentile is not None and not 1 <= percentile <= 100:
            percentile = None

        problem_id_value = _first_value(PROBLEM_ID_RE, section.body)
        problem_id = (
            int(problem_id_value)
            if problem_id_value and problem_id_value.isdigit()
            else default_id
        )

        solutions.append(
            ComparisonEntry(
                problem_name=_first_value(PROBLEM_NAME_RE, section.body) or default_name,
                problem_id=problem_id,
                solution_name=solution_name,
                time_complexity=time_complexity,
                space_complexity=space_complexity,
                percentile=percentile,
            )
        )
        log_debug(
            f"Recovered {solution_name!r}: {time_complexity}, {space_complexity}"
        )

    return solutions


def find_section_body(text: str, solution_name: str) -> Optional[str]:
    """
    Return the verbatim text of a solution section.

    The header line must read "## Solution: <solution_name>"; whitespace
    around the name is ignored, as in extract_solutions.

    Args:
        text: Full note text
        solution_name: Exact solution identity
    Returns:
        Section text from its header up to the next section, or None
    """
    _, sections = split_sections(text)
    for section in sections:
        if section.is_solution and section.raw_solution_name.strip() == solution_name:
            return section.body
    return None


def extract_extra_sections(text: str) -> List[str]:
    """Verbatim bodies of sections that are neither solutions nor the summary."""
    _, sections = split_sections(text)
    return [s.body for s in sections if not s.is_solution and not s.is_summary]
