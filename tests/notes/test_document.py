import pytest

from leet_analyzer.analysis.models import ComparisonEntry
from leet_analyzer.notes.document import (
    SUMMARY_COLUMNS,
    SUMMARY_SEPARATOR,
    NoteDocument,
    NoteHeader,
    default_tags,
    parse_header,
    render_recovered_section,
    render_section,
    render_summary_table,
    split_front_matter,
    touch_modified,
)


def _entry(name, time="O(n)", space="O(1)", percentile=None):
    return ComparisonEntry("Two Sum", 1, name, time, space, percentile)


def test_default_tags():
    assert default_tags("Two Sum", 1) == ["leetcode", "two-sum", "leetcode-1"]
    assert default_tags("", 0) == ["leetcode", "leetcode-0"]


def test_header_render():
    header = NoteHeader.create("Two Sum", 1, "2024-05-01").render()
    assert header.split("\n") == [
        "---",
        'tags: ["leetcode", "two-sum", "leetcode-1"]',
        "status: completed",
        "created: 2024-05-01",
        "modified: 2024-05-01",
        "---",
        "",
        "# LeetCode Problem: Two Sum",
    ]


def test_render_section_full(make_record):
    record = make_record(
        explanation="Single pass.\nUses a map.", code_excerpt="const x = 1;\n"
    )
    assert render_section(record).split("\n") == [
        "## Solution: Hash Map",
        "- Date Analyzed: 2024-05-01",
        "- Time Complexity: O(n)",
        "- Space Complexity: O(n)",
        "- Estimated Performance: Beats ~85% of submissions",
        "- Analysis:",
        "  > Single pass.",
        "  > Uses a map.",
        "",
        "- Code Snippet:",
        "```typescript",
        "const x = 1;",
        "```",
    ]


def test_render_section_omits_optional_lines(make_record):
    text = render_section(make_record(percentile=None, explanation="  "))
    assert "Estimated Performance" not in text
    assert "- Analysis:" not in text


def test_render_summary_table_escapes_cells():
    table = render_summary_table([_entry("A|B", percentile=90), _entry("C")])
    assert table.split("\n") == [
        "## Comparison Summary",
        SUMMARY_COLUMNS,
        SUMMARY_SEPARATOR,
        "| A\\|B | O(n) | O(1) | ~90% |",
        "| C | O(n) | O(1) | N/A |",
    ]


def test_touch_modified_only_changes_front_matter():
    header = "---\ntags: []\nmodified: 2024-01-01\n---\n\n# LeetCode Problem: X\nmodified: keep"
    updated = touch_modified(header, "2024-06-01")
    assert "modified: 2024-06-01" in updated
    assert updated.endswith("modified: keep")
    assert touch_modified("# Title only", "2024-06-01") == "# Title only"


def test_parse_header_reuses_titled_preamble():
    preamble = (
        "---\ntags: [\"leetcode\", \"custom\"]\nstatus: in-progress\n"
        "created: 2024-01-01\nmodified: 2024-01-02\n---\n\n"
        "# LeetCode Problem: Two Sum\n\nMy own notes.\n\n"
    )
    header = parse_header(preamble, "Ignored", 99, "2024-06-01")
    assert 'tags: ["leetcode", "custom"]' in header
    assert "status: in-progress" in header
    assert "created: 2024-01-01" in header
    assert "modified: 2024-06-01" in header
    assert header.endswith("My own notes.")


def test_parse_header_synthesizes_when_title_missing():
    header = parse_header("Some stray text\n", "Two Sum", 1, "2024-06-01")
    assert header.startswith("---\n")
    assert "# LeetCode Problem: Two Sum" in header
    assert header.endswith("Some stray text")
    assert parse_header("", "Two Sum", 1, "2024-06-01") == NoteHeader.create(
        "Two Sum", 1, "2024-06-01"
    ).render()


def test_document_validate():
    document = NoteDocument(
        header="# LeetCode Problem: X",
        sections=[("A", "## Solution: A"), ("B", "## Solution: B")],
        summary=[_entry("A"), _entry("B")],
    )
    document.validate()

    document.summary = [_entry("B"), _entry("A")]
    with pytest.raises(ValueError):
        document.validate()

    document.sections.append(("A", "## Solution: A"))
    document.summary = [_entry("A"), _entry("B"), _entry("A")]
    with pytest.raises(ValueError):
        document.validate()


def test_document_render_layout():
    document = NoteDocument(
        header="# LeetCode Problem: X\n\n",
        sections=[("A", "## Solution: A\n- Time Complexity: O(1)\n")],
        extra_sections=["## My Notes\nremember edge cases"],
        summary=[_entry("A")],
    )
    text = document.render()
    assert text.startswith("# LeetCode Problem: X\n\n## Solution: A\n")
    assert "O(1)\n\n## My Notes\nremember edge cases\n\n## Comparison Summary\n" in text
    assert text.endswith("| A | O(n) | O(1) | N/A |\n")


def test_parse_header_keeps_front_matter_without_title():
    preamble = "---\ntags: [\"leetcode\", \"mine\"]\nmodified: 2024-01-01\n---\n\nScratch\n"

    header = parse_header(preamble, "Two Sum", 1, "2024-06-01")

    assert header == (
        "---\ntags: [\"leetcode\", \"mine\"]\nmodified: 2024-06-01\n---\n\n"
        "# LeetCode Problem: Two Sum\n\nScratch"
    )
    assert header.count("---") == 2


def test_split_front_matter():
    assert split_front_matter("---\na: 1\n---\nrest") == ("---\na: 1\n---", "rest")
    assert split_front_matter("---\nnever closed") == (None, "---\nnever closed")
    assert split_front_matter("plain") == (None, "plain")


def test_render_recovered_section_has_no_date_or_language():
    entry = _entry("Lost", percentile=70)
    body = render_recovered_section(entry, "Rebuilt.", "// gone")
    assert "Date Analyzed" not in body
    assert "```\n// gone\n```" in body
    assert "  > Rebuilt." in body
