"""
Merging analysis results into problem notes.

A note is handled as "read everything, reconcile in memory, write
everything": the solution being exported is rendered fresh from its
ResultRecord, every other solution section is copied verbatim from the
existing note, and the comparison table is rebuilt from the reconciled list.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from leet_analyzer.analysis.models import ComparisonEntry, ResultRecord
from leet_analyzer.core.constants import UNAVAILABLE_CODE
from leet_analyzer.core.logging import (
    log_context,
    log_debug,
    log_info,
    log_warning,
    logged_operation,
)

from .document import (
    NoteDocument,
    NoteHeader,
    parse_header,
    render_recovered_section,
    render_section,
)
from .extractor import (
    extract_extra_sections,
    extract_solutions,
    find_section_body,
    split_sections,
)
from .storage import NoteStorage

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"
ACTION_APPENDED = "appended"

RECONSTRUCTED_NOTE = (
    "Reconstructed from the comparison data recorded for this solution; "
    "the original section text was not recoverable."
)


@dataclass
class MergeResult:
    """Outcome of merging one ResultRecord into a note."""

    text: str
    action: str
    entries: List[ComparisonEntry]
    reconstructed: List[str] = field(default_factory=list)
    path: Optional[Path] = None

    @property
    def solution_names(self) -> List[str]:
        return [entry.solution_name for entry in self.entries]


def reconcile_entries(
    existing: List[ComparisonEntry], record: ResultRecord
) -> Tuple[List[ComparisonEntry], str]:
    """
    Replace the entry with the record's solution name, or append a new one.

    Names are compared exactly (case-sensitive). Existing order is kept and
    later duplicates of a name are discarded.

    Returns:
        (entries, action) where action is ACTION_UPDATED or ACTION_APPENDED
    """
    entries: List[ComparisonEntry] = []
    seen = set()
    for entry in existing:
        if entry.solution_name in seen:
            log_warning(
                f"Duplicate solution section {entry.solution_name!r}; keeping the first"
            )
            continue
        seen.add(entry.solution_name)
        entries.append(entry)

    current = record.to_comparison_entry()
    for index, entry in enumerate(entries):
        if entry.solution_name == record.solution_name:
            entries[index] = current
            return entries, ACTION_UPDATED

    entries.append(current)
    return entries, ACTION_APPENDED


def reconstruct_section(entry: ComparisonEntry) -> str:
    """
    Rebuild a section whose text is missing from the note.

    Only the complexity data from the comparison entry survives; the code is
    replaced by a placeholder and the analysis says the section was rebuilt.
    """
    return render_recovered_section(entry, RECONSTRUCTED_NOTE, UNAVAILABLE_CODE)


def merge_document(
    existing_text: Optional[str],
    record: ResultRecord,
    problem_name: str,
    problem_id: int,
) -> MergeResult:
    """
    Merge a ResultRecord into note text.

    Never raises on malformed existing text: unreadable solution sections are
    dropped and sections that cannot be located are reconstructed.

    Args:
        existing_text: Current note content, or None if there is no note
        record: Freshly computed analysis result
        problem_name: Problem name for a newly created header
        problem_id: Problem number for a newly created header
    Returns:
        MergeResult with the full note text to write
    """
    fresh_section = render_section(record)

    if existing_text is None or not existing_text.strip():
        document = NoteDocument(
            header=NoteHeader.create(problem_name, problem_id, record.timestamp).render(),
            sections=[(record.solution_name, fresh_section)],
            summary=[record.to_comparison_entry()],
        )
        document.validate()
        return MergeResult(
            text=document.render(), action=ACTION_CREATED, entries=document.summary
        )

    preamble, _ = split_sections(existing_text)
    existing = extract_solutions(existing_text)
    log_debug(f"Found {len(existing)} existing solutions")

    entries, action = reconcile_entries(existing, record)
    if not existing:
        action = ACTION_CREATED
    log_debug(f"{action.capitalize()} solution: {record.solution_name}")

    sections = []
    reconstructed = []
    for entry in entries:
        if entry.solution_name == record.solution_name:
            sections.append((entry.solution_name, fresh_section))
            continue

        body = find_section_body(existing_text, entry.solution_name)
        if body is None:
            log_warning(
                f"Could not find content for solution {entry.solution_name!r}; "
                "rebuilding it from its complexity data",
                solution=entry.solution_name,
            )
            body = reconstruct_section(entry)
            reconstructed.append(entry.solution_name)
        sections.append((entry.solution_name, body))

    document = NoteDocument(
        header=parse_header(preamble, problem_name, problem_id, record.timestamp),
        sections=sections,
        extra_sections=extract_extra_sections(existing_text),
        summary=entries,
    )
    document.validate()
    return MergeResult(
        text=document.render(),
        action=action,
        entries=entries,
        reconstructed=reconstructed,
    )


class NoteMerger:
    """Reads a note, merges a result into it and writes it back."""

    def __init__(self, storage: Optional[NoteStorage] = None):
        self.storage = storage or NoteStorage()

    @logged_operation("note_merge")
    def merge(
        self,
        record: ResultRecord,
        target_path: Union[str, Path],
        problem_name: str,
        problem_id: int,
    ) -> MergeResult:
        """
        Merge a result into the note at ``target_path``.

        Raises:
            NoteStorageError: If the note cannot be read or written; nothing
                is written when reading fails
        """
        target_path = Path(target_path)
        with log_context(
            problem=problem_name,
            solution=record.solution_name,
            language=record.source_language,
        ):
            existing_text = self.storage.read(target_path)
            if existing_text is None:
                log_debug("Creating new note")
            else:
                log_debug("Reading existing note content")

            result = merge_document(existing_text, record, problem_name, problem_id)
            self.storage.write(target_path, result.text)
            result.path = target_path
            log_info(
                f"Note {result.action}: {target_path} "
                f"({len(result.entries)} solution(s))"
            )
        return result


def export_note(
    record: ResultRecord,
    target_path: Union[str, Path],
    problem_name: str,
    problem_id: int,
    storage: Optional[NoteStorage] = None,
) -> MergeResult:
    """Merge ``record`` into the note at ``target_path`` using default storage."""
    return NoteMerger(storage).merge(record, target_path, problem_name, problem_id)
