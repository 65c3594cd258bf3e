"""
coverage.py

Keyword-overlap coverage analysis of generated test cases against the
Acceptance Criteria (AC) and Business Rules (BR) of a user story.

Features:
- Extracts significant keywords from a requirement item (stop words and short tokens removed).
- Decides whether a test case covers an item (any keyword is a substring of the test case text).
- Computes per-item coverage results and the aggregate AC/BR coverage report.
- Tallies test cases by type and priority.

Matching is coarse: no stemming and no word boundaries, so "test" matches
"testing" but "process" does not match "processing".

Usage Example:
--------------
    blocks = sources.resolve_requirement_blocks(request_data, response)
    analysis = generate_coverage_analysis(
        blocks["acceptance_criteria"], blocks["business_rules"], sources.collect_test_cases(response)
    )
    df = matrix.build_coverage_matrix(analysis.ac_results + analysis.br_results)
    matrix.export_coverage_matrix_csv(df, "coverage.csv")
"""

import re
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from coverage_analysis import config
from coverage_analysis.models import (
    CoverageReport,
    CoverageResult,
    CoverageStats,
    RequirementItem,
    TestCase,
)
from coverage_analysis.normalize import normalize_test_case, normalize_test_cases
from coverage_analysis.requirements import split_blocks

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 4

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "should",
    "could", "may", "might", "must", "can", "that", "this", "these", "those",
    "when", "where", "which", "who", "whom", "whose", "why", "how",
})

NON_WORD_RE = re.compile(r'[^\w\s]')

POSITIVE_TYPES = {"Positive"}
NEGATIVE_TYPES = {"Negative", "Error"}
VALIDATION_TYPES = {"Validation"}

DEFAULT_TEST_TYPE = "Functional"
DEFAULT_PRIORITY = "Medium"


@dataclass(frozen=True)
class CoverageAnalysis:
    """Everything computed for one story: aggregate report, per-item results and type stats."""
    report: CoverageReport
    ac_results: Tuple[CoverageResult, ...]
    br_results: Tuple[CoverageResult, ...]
    stats: CoverageStats


def extract_keywords(text: Optional[str]) -> FrozenSet[str]:
    """
    Extracts the significant keywords of a requirement text.

    The text is lower-cased, punctuation is replaced by spaces, and tokens of
    three characters or fewer or in STOP_WORDS are dropped.

    Args:
        text (Optional[str]): Requirement text. None is treated as "".

    Returns:
        FrozenSet[str]: Distinct keywords.

    Example:
        >>> sorted(extract_keywords("The user can reset the Password."))
        ['password', 'reset', 'user']
    """
    if not text:
        return frozenset()
    tokens = NON_WORD_RE.sub(" ", str(text).lower()).split()
    return frozenset(t for t in tokens if len(t) >= MIN_KEYWORD_LENGTH and t not in STOP_WORDS)


def _haystack(test_case: TestCase) -> str:
    return f"{test_case.scenario} {test_case.steps} {test_case.expected_result}".lower()


def _matches(keywords: FrozenSet[str], haystack: str) -> bool:
    return any(k in haystack for k in keywords)


def is_covered_by(item: RequirementItem, test_case: Any) -> bool:
    """
    Returns True if at least one keyword of the item occurs in the test case's
    scenario, steps or expected result (case-insensitive substring match).
    """
    return _matches(extract_keywords(item.text), _haystack(normalize_test_case(test_case)))


def analyze_coverage(items: Optional[Sequence[RequirementItem]], test_cases: Optional[Iterable[Any]]) -> List[CoverageResult]:
    """
    Computes the coverage result of every requirement item.

    Args:
        items: Requirement items, in display order.
        test_cases: Raw or normalized test cases.

    Returns:
        List[CoverageResult]: One result per item, in input order. Each result
        lists the matching test cases in their original order.
    """
    cases = normalize_test_cases(test_cases)
    haystacks = [_haystack(tc) for tc in cases]
    results = []
    for item in items or []:
        keywords = extract_keywords(item.text)
        matching = tuple(tc for tc, hay in zip(cases, haystacks) if _matches(keywords, hay))
        results.append(CoverageResult(item=item, matching_test_cases=matching))
    return results


def _percentage(covered: int, total: int) -> int:
    """Integer percentage rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * covered + total) // (2 * total)


def _report_from_results(ac_results: Sequence[CoverageResult], br_results: Sequence[CoverageResult]) -> CoverageReport:
    ac_total, br_total = len(ac_results), len(br_results)
    total_items = ac_total + br_total
    if total_items == 0:
        logger.debug("Coverage: no AC/BR items to analyze")
        return CoverageReport()

    ac_covered = sum(1 for r in ac_results if r.covered)
    br_covered = sum(1 for r in br_results if r.covered)
    covered_items = ac_covered + br_covered

    report = CoverageReport(
        ac_covered=ac_covered,
        ac_total=ac_total,
        br_covered=br_covered,
        br_total=br_total,
        ac_percentage=_percentage(ac_covered, ac_total),
        br_percentage=_percentage(br_covered, br_total),
        overall_percentage=_percentage(covered_items, total_items),
        total_items=total_items,
        covered_items=covered_items,
        not_covered_items=total_items - covered_items,
        has_data=True,
    )
    logger.debug(f"Coverage calculated: {report}")
    return report


def build_report(
    ac_items: Optional[Sequence[RequirementItem]],
    br_items: Optional[Sequence[RequirementItem]],
    test_cases: Optional[Iterable[Any]],
) -> CoverageReport:
    """
    Builds the aggregate AC/BR coverage report.

    Returns a report with has_data=False and all values 0 when there are no
    items at all, which callers must render differently from 0% coverage.
    """
    cases = normalize_test_cases(test_cases)
    return _report_from_results(analyze_coverage(ac_items, cases), analyze_coverage(br_items, cases))


def calculate_coverage_stats(test_cases: Optional[Iterable[Any]]) -> CoverageStats:
    """
    Counts test cases per type category.

    Matching is exact and case-sensitive: "Positive", "Negative" or "Error",
    and "Validation". Other types count only toward the total.
    """
    cases = normalize_test_cases(test_cases)
    return CoverageStats(
        total_test_cases=len(cases),
        positive_tests=sum(1 for tc in cases if tc.test_type in POSITIVE_TYPES),
        negative_tests=sum(1 for tc in cases if tc.test_type in NEGATIVE_TYPES),
        validation_tests=sum(1 for tc in cases if tc.test_type in VALIDATION_TYPES),
    )


def summarize_test_types(test_cases: Optional[Iterable[Any]]) -> Dict[str, Dict[str, int]]:
    """
    Summarizes test cases by type and priority, for stories that have no
    analyzable criteria.

    Returns:
        dict: {"types": {type: count}, "priorities": {priority: count}}, keys in
        order of first appearance. Missing types count as "Functional" and
        missing priorities as "Medium".
    """
    cases = normalize_test_cases(test_cases)
    return {
        "types": dict(Counter(tc.test_type or DEFAULT_TEST_TYPE for tc in cases)),
        "priorities": dict(Counter(tc.priority or DEFAULT_PRIORITY for tc in cases)),
    }


def coverage_level(percentage: int, has_data: bool = True) -> str:
    """
    Maps a coverage percentage to a display band: "success", "warning",
    "danger", or "unavailable" when there was nothing to analyze.
    """
    if not has_data:
        return "unavailable"
    if percentage >= config.good_coverage_threshold():
        return "success"
    if percentage >= config.warn_coverage_threshold():
        return "warning"
    return "danger"


def generate_coverage_analysis(
    acceptance_criteria: Optional[str],
    business_rules: Optional[str],
    test_cases: Optional[Iterable[Any]],
) -> CoverageAnalysis:
    """
    Runs the full analysis for one story.

    Args:
        acceptance_criteria: Raw AC block ("N/A" or a "no criteria" message means none).
        business_rules: Raw BR block.
        test_cases: Raw test cases from the generation API, or TestCase records.

    Returns:
        CoverageAnalysis: Report, per-item AC and BR results, and type stats.
    """
    cases = normalize_test_cases(test_cases)
    ac_items, br_items = split_blocks(acceptance_criteria, business_rules)
    logger.debug(f"Analyzing {len(ac_items)} AC and {len(br_items)} BR items against {len(cases)} test cases")

    ac_results = analyze_coverage(ac_items, cases)
    br_results = analyze_coverage(br_items, cases)
    return CoverageAnalysis(
        report=_report_from_results(ac_results, br_results),
        ac_results=tuple(ac_results),
        br_results=tuple(br_results),
        stats=calculate_coverage_stats(cases),
    )
