from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from leet_analyzer.analysis.models import MainFunction, ParsedCode


class LanguagePlugin(ABC):
    """
    Base class for all language plugins.

    Each plugin must implement or override the following:

    Attributes:
        name (str): Language tag written into notes (e.g., "typescript").
        aliases (List[str]): Other names accepted on the command line.
        extensions (List[str]): File extensions handled, with the dot.
        preferred_names (Tuple[str, ...]): Function names that mark the
            LeetCode entry point when several functions are found.
    """

    name: str = "base"
    aliases: List[str] = []
    extensions: List[str] = []
    preferred_names: Tuple[str, ...] = ("solution", "solve", "answer")

    @abstractmethod
    def extract_imports(self, content: str) -> List[str]:
        """
        Return the import statements found in the source.

        Args:
            content: Full file content

        Returns:
            List of import statements as written
        """
        pass

    @abstractmethod
    def find_main_function(self, content: str) -> Optional[MainFunction]:
        """
        Locate the function that implements the solution.

        Args:
            content: Full file content

        Returns:
            The chosen function, or None when no function is recognised
        """
        pass

    def parse(self, content: str, file_path: str = "") -> ParsedCode:
        """
        Template method: detect imports and the main function of a file.

        Args:
            content: Full file content
            file_path: Path the content was read from

        Returns:
            ParsedCode tagged with this plugin's language
        """
        return ParsedCode(
            content=content,
            language=self.name,
            file_path=file_path,
            main_function=self.find_main_function(content),
            imports=self.extract_imports(content),
        )

    def _is_preferred(self, function_name: Optional[str]) -> bool:
        if not function_name:
            return False
        lowered = function_name.lower()
        return any(
            lowered == preferred or preferred in lowered
            for preferred in self.preferred_names
        )

    def _pick_best_match(
        self, content: str, candidates: Iterable[Tuple[Optional[str], int, int]]
    ) -> Optional[MainFunction]:
        """
        Choose the entry point among candidate functions.

        The first candidate wins unless a later one carries a preferred name.

        Args:
            content: Full file content
            candidates: (name, start offset, end offset) per function found

        Returns:
            The chosen function with its code and 1-based line span
        """
        candidates = list(candidates)
        if not candidates:
            return None

        best = candidates[0]
        for candidate in candidates:
            if self._is_preferred(candidate[0]):
                best = candidate
                break

        name, start, end = best
        code = content[start:end]
        start_line = content.count("\n", 0, start) + 1
        end_line = start_line + code.count("\n")
        return MainFunction(
            name=name or "unnamed function",
            code=code,
            start_line=start_line,
            end_line=end_line,
        )
