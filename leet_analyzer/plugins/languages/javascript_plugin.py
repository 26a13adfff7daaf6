import re
from typing import List, Optional

from leet_analyzer.analysis.models import MainFunction

from ..language_plugin import LanguagePlugin

IMPORT_RE = re.compile(r"""import\s+.*?from\s+['"].*?['"]""")
REQUIRE_RE = re.compile(r"""(?:const|let|var)\s+[^=\n]+=\s*require\(\s*['"].*?['"]\s*\)""")

# Tried in order; the first pattern with any match decides.
FUNCTION_PATTERNS = [
    # function twoSum(nums: number[], target: number): number[] { ... }
    re.compile(r"function\s+(\w+)\s*\([^)]*\)\s*(?::\s*[^{]+)?\s*\{[\s\S]*\}"),
    # const twoSum = (nums, target) => { ... }
    re.compile(
        r"const\s+(\w+)\s*=\s*(?:\([^)]*\)|[^=]*)\s*=>\s*(?::\s*[^{]+)?\s*\{[\s\S]*\}"
    ),
    # twoSum(nums, target) { ... } inside a class
    re.compile(r"(\w+)\s*\([^)]*\)\s*\{[\s\S]*\}"),
]


class JavaScriptPlugin(LanguagePlugin):
    """JavaScript language plugin for Leet Analyzer."""

    name = "javascript"
    aliases = ["js", "node"]
    extensions = [".js"]

    def extract_imports(self, content: str) -> List[str]:
        return IMPORT_RE.findall(content) + REQUIRE_RE.findall(content)

    def find_main_function(self, content: str) -> Optional[MainFunction]:
        for pattern in FUNCTION_PATTERNS:
            candidates = [
                (match.group(1), match.start(), match.end())
                for match in pattern.finditer(content)
            ]
            if candidates:
                return self._pick_best_match(content, candidates)
        return None
