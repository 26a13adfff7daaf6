"""
Constants used throughout the application.
"""

# Solution naming
DEFAULT_SOLUTION_NAME = "Unnamed Approach"
MY_SOLUTION_NAME = "Initial Submission"

# Language configuration
# NOTE: These are populated by the language plugins on import
SUPPORTED_LANGUAGES = set()
LANGUAGE_ALIASES = {}
LANGUAGE_EXTENSIONS = {}

# Filename suffixes that name an approach rather than the problem
APPROACH_SUFFIXES = (
    "-optimized",
    "-improved",
    "-two-pointer",
    "-sliding-window",
    "-hash-map",
    "-hash-table",
    "-hash-set",
)

# Note layout
NOTE_STATUS = "completed"
NOTE_TAG = "leetcode"
NOTE_TITLE_PREFIX = "# LeetCode Problem: "
SOLUTION_HEADER_PREFIX = "## Solution: "
SUMMARY_HEADING = "## Comparison Summary"
UNAVAILABLE_CODE = "// Code not available"
