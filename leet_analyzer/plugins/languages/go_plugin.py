import re
from typing import List, Optional

from leet_analyzer.analysis.models import MainFunction

from ..language_plugin import LanguagePlugin

IMPORT_RE = re.compile(r'import\s*\([^)]*\)|import\s+(?:\w+\s+)?"[^"]+"')
# func twoSum(nums []int, target int) []int {
# func (s *Solution) solve(...) int {
FUNC_HEADER_RE = re.compile(r"func\s+(?:\([^)]*\)\s*)?(\w+)\s*\([^)]*\)[^{]*\{")


class GoPlugin(LanguagePlugin):
    """Go language plugin for Leet Analyzer."""

    name = "go"
    aliases = ["golang"]
    extensions = [".go"]
    preferred_names = ("solve", "solution", "answer")

    def extract_imports(self, content: str) -> List[str]:
        return IMPORT_RE.findall(content)

    def find_main_function(self, content: str) -> Optional[MainFunction]:
        candidates = []
        for match in FUNC_HEADER_RE.finditer(content):
            end = self._find_block_end(content, match.end() - 1)
            if end is not None:
                candidates.append((match.group(1), match.start(), end))
        return self._pick_best_match(content, candidates)

    @staticmethod
    def _find_block_end(content: str, open_index: int) -> Optional[int]:
        """Offset just past the brace closing the block opened at open_index."""
        depth = 0
        in_string = None
        i = open_index
        while i < len(content):
            char = content[i]
            if in_string:
                if char == "\\" and in_string != "`":
                    i += 2
                    continue
                if char == in_string:
                    in_string = None
            elif char in "\"'`":
                in_string = char
            elif content.startswith("//", i):
                newline = content.find("\n", i)
                i = len(content) if newline == -1 else newline
                continue
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1
        return None
