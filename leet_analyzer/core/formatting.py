import datetime
import re
from typing import Optional


def today() -> str:
    """
    Today's date as used in notes and analysis records.
    Returns:
        UTC calendar date in YYYY-MM-DD form
    """
    return datetime.datetime.now(datetime.timezone.utc).date().isoformat()


def slugify(name: str) -> str:
    """
    Turn a problem name into the slug used for tags and note filenames.

    - "Two Sum" -> "two-sum"
    - "  3Sum Closest " -> "3sum-closest"
    Args:
        name: Human readable problem name
    Returns:
        Lowercase, hyphen separated slug
    """
    return re.sub(r"\s+", "-", name.strip().lower())


def title_from_slug(slug: str) -> str:
    """
    Turn a filename slug back into a display name.
    Args:
        slug: Hyphen separated slug (e.g., "two-sum")
    Returns:
        Capitalised words (e.g., "Two Sum")
    """
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-") if word)


def format_percentile(percentile: Optional[int]) -> str:
    """Format a percentile estimate for a table cell."""
    if percentile is None:
        return "N/A"
    return f"~{percentile}%"


def escape_table_cell(value: str) -> str:
    """Escape characters that would break a Markdown table row."""
    return value.replace("|", "\\|").replace("\n", " ")
