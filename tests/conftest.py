import pytest

from leet_analyzer.analysis.models import ResultRecord

TWO_SUM_TS = """function twoSum(nums: number[], target: number): number[] {
    const seen = new Map<number, number>();
    for (let i = 0; i < nums.length; i++) {
        const other = target - nums[i];
        if (seen.has(other)) {
            return [seen.get(other)!, i];
        }
        seen.set(nums[i], i);
    }
    return [];
}
"""


@pytest.fixture
def make_record():
    """Factory for ResultRecords with sensible defaults."""

    def _make(solution_name="Hash Map", **overrides):
        values = dict(
            problem_name="Two Sum",
            problem_id=1,
            solution_name=solution_name,
            time_complexity="O(n)",
            space_complexity="O(n)",
            code_excerpt="function twoSum() {}",
            source_language="typescript",
            timestamp="2024-05-01",
            percentile=85,
            explanation=None,
        )
        values.update(overrides)
        return ResultRecord(**values)

    return _make


@pytest.fixture
def two_sum_source():
    return TWO_SUM_TS
