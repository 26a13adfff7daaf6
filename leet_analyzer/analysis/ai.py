"""
AI-backed complexity analysis.

Gemini is reached through its OpenAI-compatible chat completions endpoint,
so the plain ``openai`` client is used with a different ``base_url``.
"""

import re
from typing import Any, Dict, Optional

from openai import (
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    OpenAI,
    OpenAIError,
    RateLimitError,
)
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from leet_analyzer.core.config import (
    DEFAULT_AI_BASE_URL,
    DEFAULT_AI_MAX_RETRIES,
    DEFAULT_AI_MODEL,
    DEFAULT_AI_TIMEOUT,
    AnalyzerConfig,
)
from leet_analyzer.core.constants import DEFAULT_SOLUTION_NAME
from leet_analyzer.core.data_utils import (
    extract_json_object,
    parse_percentile,
    parse_problem_id,
)
from leet_analyzer.core.exceptions import AnalysisError
from leet_analyzer.core.formatting import today
from leet_analyzer.core.logging import log_debug, log_info, log_warning

from .heuristic import HeuristicEstimator
from .models import ParsedCode, ResultRecord

TRANSIENT_ERRORS = (
    APIConnectionError,
    APITimeoutError,
    RateLimitError,
    InternalServerError,
    AnalysisError,
)

SYSTEM_PROMPT = "You are an expert algorithm analyst. Reply with JSON only."

PROMPT_TEMPLATE = """Please analyze the following {language} code from a LeetCode problem:

```{language}
{code}
```

Please provide:
1. LeetCode problem number and name (e.g., 1. Two Sum, 2. Add Two Numbers)
2. The approach used by the solution (e.g., Two Pointer, Sliding Window, Hash Map, Hash Set)
3. Time complexity in Big O notation (e.g., O(n), O(n log n))
4. Space complexity in Big O notation
5. Brief explanation of the complexity analysis in Markdown for Obsidian notes (max 200 words)
6. Estimated performance percentile compared to other LeetCode submissions (e.g., 90 means faster than 90% of submissions)

Format your response as JSON:
{{
  "problemName": "Two Sum",
  "leetcodeId": 1,
  "solutionName": "Hash Map",
  "timeComplexity": "O(?)",
  "spaceComplexity": "O(?)",
  "explanation": "Explain the reasoning...",
  "percentile": number between 1 and 100
}}
"""

_PROBLEM_NUMBER_PREFIX_RE = re.compile(r"^\s*\d+\s*[.:)-]\s*")


def _single_line(value: Any) -> str:
    """Collapse a complexity figure onto one line; notes store it per line."""
    text = " ".join(str(value or "").split())
    return text or "O(?)"


class AIEstimator:
    """
    Complexity analysis through a chat completion model.

    ``estimate`` never raises for upstream problems: API errors and
    unusable replies fall back to the heuristic estimator.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_AI_MODEL,
        base_url: str = DEFAULT_AI_BASE_URL,
        timeout: int = DEFAULT_AI_TIMEOUT,
        max_retries: int = DEFAULT_AI_MAX_RETRIES,
        client: Optional[OpenAI] = None,
        fallback: Optional[HeuristicEstimator] = None,
    ):
        self.model = model
        self.max_retries = max(1, max_retries)
        self.fallback = fallback or HeuristicEstimator()
        if client is None:
            # Retries are handled below, not by the client
            client = OpenAI(
                api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0
            )
        self.client = client
        log_debug(f"Initialized AI estimator with model: {self.model}")

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "AIEstimator":
        return cls(
            api_key=config.gemini_api_key,
            model=config.ai_model,
            base_url=config.ai_base_url,
            timeout=config.ai_timeout,
            max_retries=config.ai_max_retries,
        )

    def estimate(
        self,
        parsed: ParsedCode,
        solution_name: str,
        timestamp: Optional[str] = None,
    ) -> ResultRecord:
        """Analyze with the model, falling back to the heuristic on failure."""
        try:
            return self.analyze(parsed, solution_name, timestamp)
        except (OpenAIError, AnalysisError, ValueError) as e:
            log_warning(f"AI analysis failed: {e}. Falling back to static analysis.")
            return self.fallback.estimate(parsed, solution_name, timestamp)

    def analyze(
        self,
        parsed: ParsedCode,
        solution_name: str,
        timestamp: Optional[str] = None,
    ) -> ResultRecord:
        """
        Analyze with the model only.

        Raises:
            OpenAIError: If the API call keeps failing
            AnalysisError: If the reply never contains usable JSON
        """
        code = parsed.code_for_analysis
        log_info(f"Asking {self.model} for complexity analysis")

        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                data = self._request_analysis(parsed.language, code)

        return self._build_record(data, parsed, code, solution_name, timestamp)

    def _request_analysis(self, language: str, code: str) -> Dict[str, Any]:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": PROMPT_TEMPLATE.format(language=language, code=code),
                },
            ],
        )
        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise AnalysisError("Empty response from AI model")
        try:
            return extract_json_object(text)
        except ValueError as e:
            raise AnalysisError(f"Could not parse AI response: {e}") from e

    def _build_record(
        self,
        data: Dict[str, Any],
        parsed: ParsedCode,
        code: str,
        solution_name: str,
        timestamp: Optional[str],
    ) -> ResultRecord:
        problem_name = str(data.get("problemName") or data.get("leetcodeProblem") or "")
        problem_name = _PROBLEM_NUMBER_PREFIX_RE.sub("", problem_name).strip()

        # Only a caller that did not name the solution gets the model's name
        if solution_name == DEFAULT_SOLUTION_NAME:
            suggested = str(data.get("solutionName") or "").strip().splitlines()
            if suggested and suggested[0].strip():
                solution_name = suggested[0].strip()

        explanation = data.get("explanation")
        return ResultRecord(
            problem_name=problem_name,
            problem_id=parse_problem_id(data.get("leetcodeId", data.get("problemId"))),
            solution_name=solution_name,
            time_complexity=_single_line(data.get("timeComplexity")),
            space_complexity=_single_line(data.get("spaceComplexity")),
            percentile=parse_percentile(data.get("percentile")),
            explanation=str(explanation).strip() if explanation else None,
            code_excerpt=code,
            source_language=parsed.language,
            timestamp=timestamp or today(),
            file_path=parsed.file_path,
        )
