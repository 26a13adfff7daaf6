import re
from typing import Dict, List, Optional

from leet_analyzer.core.formatting import today
from leet_analyzer.core.logging import log_debug

from .models import ParsedCode, ResultRecord

LOOP_RE = re.compile(r"\b(?:for|while)\b|\.(?:forEach|map|filter|reduce)\s*\(")
SORT_RE = re.compile(r"\.sort\s*\(|\bsort\.\w+\s*\(|\bslices\.Sort\w*\s*\(")
LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")

# Loop nesting depth -> (time, space, percentile)
NESTING_ESTIMATES = {
    0: ("O(1)", "O(1)", 95),
    1: ("O(n)", "O(n)", 75),
    2: ("O(n²)", "O(1)", 50),
    3: ("O(n³)", "O(1)", 25),
}
DEEP_NESTING_PERCENTILE = 10
RECURSION_PERCENTILE = 30
SORTING_PERCENTILE = 60


class HeuristicEstimator:
    """
    Rough complexity estimate from the shape of the code.

    Counts loop nesting, looks for self-calls and sorting. It is the
    fallback when no AI model is available, so it never fails on odd input.
    """

    def estimate(
        self,
        parsed: ParsedCode,
        solution_name: str,
        timestamp: Optional[str] = None,
    ) -> ResultRecord:
        """Produce a ResultRecord for ``parsed`` without any network calls."""
        code = parsed.code_for_analysis
        function_name = parsed.main_function.name if parsed.main_function else None

        loop_info = self._analyze_loops(code)
        is_recursive = self._is_recursive(code, function_name)
        uses_sorting = bool(SORT_RE.search(self._strip_comments(code)))

        time_complexity, space_complexity, percentile = self._determine_complexity(
            loop_info, is_recursive, uses_sorting
        )
        log_debug(
            f"Heuristic estimate for {solution_name}: time={time_complexity}, "
            f"space={space_complexity}, percentile={percentile} "
            f"(nesting={loop_info['max_nesting']}, recursive={is_recursive})"
        )

        return ResultRecord(
            problem_name="",
            problem_id=0,
            solution_name=solution_name,
            time_complexity=time_complexity,
            space_complexity=space_complexity,
            percentile=percentile,
            explanation=self._generate_explanation(
                time_complexity, space_complexity, loop_info, is_recursive, uses_sorting
            ),
            code_excerpt=code,
            source_language=parsed.language,
            timestamp=timestamp or today(),
            file_path=parsed.file_path,
        )

    @staticmethod
    def _strip_comments(code: str) -> str:
        return LINE_COMMENT_RE.sub("", BLOCK_COMMENT_RE.sub("", code))

    def _analyze_loops(self, code: str) -> Dict[str, int]:
        """Count loops and their deepest nesting, following braces."""
        result = {"loops": 0, "max_nesting": 0}
        # One entry per open brace: True when the brace opened a loop body
        brace_stack: List[bool] = []

        for line in self._strip_comments(code).splitlines():
            is_loop = bool(LOOP_RE.search(line))
            if is_loop:
                result["loops"] += 1
                depth = brace_stack.count(True) + 1
                result["max_nesting"] = max(result["max_nesting"], depth)

            pending_loop = is_loop
            for char in line:
                if char == "{":
                    brace_stack.append(pending_loop)
                    pending_loop = False
                elif char == "}" and brace_stack:
                    brace_stack.pop()

        return result

    def _is_recursive(self, code: str, function_name: Optional[str]) -> bool:
        """Check if the main function calls itself."""
        if not function_name or function_name == "unnamed function":
            return False
        body_start = code.find("{")
        if body_start == -1:
            return False
        body = self._strip_comments(code[body_start + 1 :])
        return bool(re.search(rf"\b{re.escape(function_name)}\s*\(", body))

    def _determine_complexity(self, loop_info, is_recursive, uses_sorting):
        nesting = loop_info["max_nesting"]
        if nesting in NESTING_ESTIMATES:
            time_complexity, space_complexity, percentile = NESTING_ESTIMATES[nesting]
        else:
            time_complexity = f"O(n^{nesting})"
            space_complexity = "O(n)"
            percentile = DEEP_NESTING_PERCENTILE

        if is_recursive:
            # Assumes branching recursion; the call stack grows with n
            time_complexity = "O(2^n)"
            space_complexity = "O(n)"
            percentile = RECURSION_PERCENTILE
        elif uses_sorting and nesting <= 1:
            time_complexity = "O(n log n)"
            percentile = SORTING_PERCENTILE

        return time_complexity, space_complexity, percentile

    def _generate_explanation(
        self, time_complexity, space_complexity, loop_info, is_recursive, uses_sorting
    ) -> str:
        """Generate a human-readable explanation of the estimate."""
        explanation = ["Static estimate based on loop nesting (no AI analysis)."]

        if is_recursive:
            explanation.append(
                f"Time: {time_complexity} - the solution calls itself; "
                "branching recursion is assumed."
            )
        elif time_complexity == "O(n log n)":
            explanation.append(
                f"Time: {time_complexity} - dominated by sorting the input."
            )
        elif loop_info["max_nesting"] == 0:
            explanation.append(
                f"Time: {time_complexity} - no loops over the input were found."
            )
        else:
            explanation.append(
                f"Time: {time_complexity} - {loop_info['loops']} loop(s), "
                f"nested {loop_info['max_nesting']} deep."
            )

        if space_complexity == "O(1)":
            explanation.append(f"Space: {space_complexity} - fixed amount of extra memory.")
        else:
            explanation.append(
                f"Space: {space_complexity} - memory grows with the input size."
            )

        if time_complexity in ("O(n²)", "O(n³)", "O(2^n)") or "O(n^" in time_complexity:
            explanation.append("Optimization potential:")
            explanation.append("- Consider a hash map or set for O(1) lookups.")
            if is_recursive:
                explanation.append("- Consider memoization to avoid repeated work.")

        return "\n".join(explanation)
