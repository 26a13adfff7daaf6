import os
from unittest.mock import MagicMock

import pytest

from leet_analyzer.analysis.models import ComparisonEntry
from leet_analyzer.core.exceptions import NoteStorageError
from leet_analyzer.notes.extractor import extract_solutions, find_section_body, split_sections
from leet_analyzer.notes.merger import (
    ACTION_APPENDED,
    ACTION_CREATED,
    ACTION_UPDATED,
    RECONSTRUCTED_NOTE,
    NoteMerger,
    merge_document,
    reconstruct_section,
)
from leet_analyzer.notes.storage import NoteStorage


def _section_names(text):
    _, sections = split_sections(text)
    return [s.raw_solution_name for s in sections if s.is_solution]


def _table_rows(text):
    return [line for line in text.splitlines() if line.startswith("| ")][1:]


@pytest.fixture
def initial(make_record):
    return make_record(
        "Initial Submission",
        time_complexity="O(n^2)",
        space_complexity="O(1)",
        percentile=40,
    )


@pytest.fixture
def hash_map(make_record):
    return make_record(
        "Hash Map Approach",
        time_complexity="O(n)",
        space_complexity="O(n)",
        percentile=85,
        timestamp="2024-05-02",
    )


def test_first_solution_creates_note(initial):
    result = merge_document(None, initial, "Two Sum", 1)

    assert result.action == ACTION_CREATED
    assert _section_names(result.text) == ["Initial Submission"]
    assert _table_rows(result.text) == ["| Initial Submission | O(n^2) | O(1) | ~40% |"]
    assert result.text.startswith("---\ntags: [\"leetcode\", \"two-sum\", \"leetcode-1\"]\n")
    assert result.text.endswith("~40% |\n")


def test_second_solution_is_appended(initial, hash_map):
    first = merge_document(None, initial, "Two Sum", 1).text
    result = merge_document(first, hash_map, "Two Sum", 1)

    assert result.action == ACTION_APPENDED
    assert _section_names(result.text) == ["Initial Submission", "Hash Map Approach"]
    assert _table_rows(result.text) == [
        "| Initial Submission | O(n^2) | O(1) | ~40% |",
        "| Hash Map Approach | O(n) | O(n) | ~85% |",
    ]
    assert find_section_body(result.text, "Initial Submission") == find_section_body(
        first, "Initial Submission"
    )
    assert "modified: 2024-05-02" in result.text
    assert "created: 2024-05-01" in result.text


def test_existing_solution_is_replaced(make_record, initial, hash_map):
    first = merge_document(None, initial, "Two Sum", 1).text
    second = merge_document(first, hash_map, "Two Sum", 1).text
    improved = make_record(
        "Initial Submission",
        time_complexity="O(n)",
        space_complexity="O(1)",
        percentile=40,
        timestamp="2024-05-03",
    )

    result = merge_document(second, improved, "Two Sum", 1)

    assert result.action == ACTION_UPDATED
    assert _section_names(result.text) == ["Initial Submission", "Hash Map Approach"]
    assert _table_rows(result.text)[0] == "| Initial Submission | O(n) | O(1) | ~40% |"
    assert find_section_body(result.text, "Hash Map Approach") == find_section_body(
        second, "Hash Map Approach"
    )
    assert "- Date Analyzed: 2024-05-03" in find_section_body(
        result.text, "Initial Submission"
    )


def test_merge_is_idempotent(initial, hash_map):
    first = merge_document(None, initial, "Two Sum", 1).text
    second = merge_document(first, hash_map, "Two Sum", 1).text

    again = merge_document(second, hash_map, "Two Sum", 1)

    assert again.action == ACTION_UPDATED
    assert again.text == second
    assert merge_document(second, hash_map, "Two Sum", 1).text == again.text


def test_replace_never_adds_sections(make_record, initial):
    text = merge_document(None, initial, "Two Sum", 1).text
    for power in range(3):
        record = make_record("Initial Submission", time_complexity=f"O(n^{power})")
        text = merge_document(text, record, "Two Sum", 1).text
    assert _section_names(text) == ["Initial Submission"]
    assert _table_rows(text) == ["| Initial Submission | O(n^2) | O(n) | ~85% |"]


def test_table_matches_sections_after_many_merges(make_record):
    text = None
    for name in ["A", "B", "A", "C", "B", "D"]:
        text = merge_document(text, make_record(name), "Two Sum", 1).text
        rows = [row.split(" | ")[0][2:] for row in _table_rows(text)]
        assert rows == _section_names(text)
    assert _section_names(text) == ["A", "B", "C", "D"]


def test_section_without_space_complexity_is_dropped(make_record):
    broken = (
        "---\ntags: [\"leetcode\", \"two-sum\", \"leetcode-1\"]\nstatus: completed\n"
        "created: 2024-04-01\nmodified: 2024-04-01\n---\n\n"
        "# LeetCode Problem: Two Sum\n\n"
        "## Solution: Half Written\n- Time Complexity: O(n)\n\n"
        "## Solution: Complete\n- Time Complexity: O(1)\n- Space Complexity: O(1)\n"
    )
    assert [e.solution_name for e in extract_solutions(broken)] == ["Complete"]

    result = merge_document(broken, make_record("New"), "Two Sum", 1)

    assert result.action == ACTION_APPENDED
    assert _section_names(result.text) == ["Complete", "New"]
    assert "created: 2024-04-01" in result.text


def test_loosely_spaced_heading_is_carried_verbatim(make_record):
    text = (
        "# LeetCode Problem: Binary Search\n\n"
        "## Solution:  Spaced \n- Time Complexity: O(log n)\n- Space Complexity: O(1)\n"
        "- Estimated Performance: Beats ~70% of submissions\n\n"
        "- Code Snippet:\n```go\nfunc search() {}\n```\n"
    )
    original = find_section_body(text, "Spaced")

    result = merge_document(text, make_record("Fresh"), "Binary Search", 704)

    assert result.reconstructed == []
    assert result.solution_names == ["Spaced", "Fresh"]
    assert find_section_body(result.text, "Spaced") == original
    assert "func search() {}" in result.text
    assert "// Code not available" not in result.text
    assert merge_document(result.text, make_record("Fresh"), "Binary Search", 704).text == (
        result.text
    )


def test_name_with_surrounding_whitespace_is_idempotent(make_record):
    record = make_record("Hash Map ")
    assert record.solution_name == "Hash Map"

    first = merge_document(None, record, "Two Sum", 1)
    second = merge_document(first.text, record, "Two Sum", 1)

    assert second.action == ACTION_UPDATED
    assert second.text == first.text
    assert _section_names(second.text) == ["Hash Map"]

    third = merge_document(second.text, make_record("  Hash Map"), "Two Sum", 1)
    assert third.action == ACTION_UPDATED
    assert third.text.count("## Solution: Hash Map") == 1


def test_reconstructed_section_keeps_only_summary_data():
    entry = ComparisonEntry("Two Sum", 1, "Lost", "O(log n)", "O(1)", 70)

    body = reconstruct_section(entry)

    assert body.startswith("## Solution: Lost\n- Time Complexity: O(log n)\n")
    assert "Date Analyzed" not in body
    assert "- Estimated Performance: Beats ~70% of submissions" in body
    assert f"  > {RECONSTRUCTED_NOTE}" in body
    assert body.endswith("```\n// Code not available\n```")
    (recovered,) = extract_solutions(body)
    assert (recovered.time_complexity, recovered.space_complexity, recovered.percentile) == (
        "O(log n)",
        "O(1)",
        70,
    )


def test_names_with_special_characters(make_record):
    names = ["Two Pointers (O(n))", "DP [bottom-up] *fast*", "C#: hash | set", "a.b+c?"]
    text = None
    for name in names:
        text = merge_document(text, make_record(name), "Two Sum", 1).text
    assert _section_names(text) == names
    for name in names:
        assert find_section_body(text, name).startswith(f"## Solution: {name}\n")

    updated = merge_document(text, make_record("a.b+c?", time_complexity="O(1)"), "Two Sum", 1)
    assert updated.action == ACTION_UPDATED
    assert [e.time_complexity for e in updated.entries][-1] == "O(1)"


def test_names_are_case_sensitive(make_record):
    text = merge_document(None, make_record("hash map"), "Two Sum", 1).text
    result = merge_document(text, make_record("Hash Map"), "Two Sum", 1)
    assert result.action == ACTION_APPENDED
    assert result.solution_names == ["hash map", "Hash Map"]


def test_hand_written_content_is_kept(make_record):
    text = (
        "---\ntags: [\"leetcode\", \"two-sum\", \"leetcode-1\", \"favorite\"]\n"
        "status: review\ncreated: 2024-01-01\nmodified: 2024-01-01\n---\n\n"
        "# LeetCode Problem: Two Sum\n\nLink: https://leetcode.com/problems/two-sum/\n\n"
        "## Solution: Old\n- Time Complexity: O(n)\n- Space Complexity: O(n)\n\n"
        "## Follow-up\nCan it be done in O(1) space?\n\n"
        "## Comparison Summary\n| stale | table |\n"
    )
    result = merge_document(text, make_record("New", timestamp="2024-02-02"), "Two Sum", 1)

    assert '"favorite"' in result.text
    assert "status: review" in result.text
    assert "modified: 2024-02-02" in result.text
    assert "Link: https://leetcode.com/problems/two-sum/" in result.text
    assert "## Follow-up\nCan it be done in O(1) space?\n\n## Comparison Summary" in result.text
    assert "| stale | table |" not in result.text
    assert result.text.index("## Solution: New") < result.text.index("## Follow-up")


def test_whitespace_only_note_counts_as_new(make_record):
    result = merge_document("  \n\n", make_record("Only"), "Two Sum", 1)
    assert result.action == ACTION_CREATED
    assert result.text.startswith("---\n")


def test_note_without_solutions_gets_header(make_record):
    result = merge_document("Scratch notes\n", make_record("Only"), "Two Sum", 1)
    assert result.action == ACTION_CREATED
    assert "# LeetCode Problem: Two Sum" in result.text
    assert "Scratch notes" in result.text


def test_note_merger_writes_file(tmp_path, initial, hash_map):
    target = tmp_path / "vault" / "LeetCode" / "two-sum.md"
    merger = NoteMerger()

    first = merger.merge(initial, target, "Two Sum", 1)
    second = merger.merge(hash_map, target, "Two Sum", 1)

    assert first.action == ACTION_CREATED
    assert second.action == ACTION_APPENDED
    assert second.path == target
    assert target.read_text(encoding="utf-8") == second.text


def test_failed_write_leaves_note_untouched(tmp_path, initial, hash_map):
    target = tmp_path / "two-sum.md"
    NoteMerger().merge(initial, target, "Two Sum", 1)
    before = target.read_text(encoding="utf-8")

    storage = NoteStorage()
    storage.write = MagicMock(side_effect=NoteStorageError("disk full"))
    with pytest.raises(NoteStorageError):
        NoteMerger(storage).merge(hash_map, target, "Two Sum", 1)

    assert target.read_text(encoding="utf-8") == before


def test_failed_read_writes_nothing(tmp_path, initial):
    target = tmp_path / "two-sum.md"
    storage = MagicMock(spec=NoteStorage)
    storage.read.side_effect = NoteStorageError("permission denied")

    with pytest.raises(NoteStorageError):
        NoteMerger(storage).merge(initial, target, "Two Sum", 1)

    storage.write.assert_not_called()
    assert not os.path.exists(target)
