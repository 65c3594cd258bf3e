"""
models.py

Plain data records shared by the coverage analysis modules.

- RequirementBlock: raw Acceptance Criteria / Business Rules text for one story.
- RequirementItem: one discrete requirement split out of a block.
- TestCase: a normalized test case record (see normalize.py for the adapter).
- CoverageResult: per-item coverage outcome.
- CoverageReport: aggregate AC/BR coverage counts and percentages.
- CoverageStats: tally of test cases by test type.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Tuple


@dataclass(frozen=True)
class RequirementBlock:
    """
    Raw multi-line requirement text with the label of the section it came from.

    Attributes:
        text (str): The block text as supplied by the story extraction step.
        label (str): "AC" for Acceptance Criteria, "BR" for Business Rules.
    """
    text: str
    label: str = "AC"


@dataclass(frozen=True)
class RequirementItem:
    text: str
    source_label: str
    index: int


@dataclass(frozen=True)
class TestCase:
    """
    A generated test case after field-name normalization.

    Only scenario, steps and expected_result are used for coverage matching;
    the remaining fields are carried through for display and statistics.
    """
    __test__ = False  # keep pytest from collecting this as a test class

    scenario: str = ""
    steps: str = ""
    expected_result: str = ""
    preconditions: str = ""
    test_case_id: str = ""
    priority: str = ""
    test_type: str = ""

    @property
    def label(self) -> str:
        """Short identifier for listings: the id when present, otherwise the scenario."""
        return self.test_case_id or self.scenario


@dataclass(frozen=True)
class CoverageResult:
    item: RequirementItem
    matching_test_cases: Tuple[TestCase, ...] = ()

    @property
    def covered(self) -> bool:
        return len(self.matching_test_cases) > 0


@dataclass(frozen=True)
class CoverageReport:
    """
    Aggregate coverage of Acceptance Criteria and Business Rules.

    has_data is False when there was nothing to analyze; renderers should show
    "coverage analysis not available" rather than 0% in that case.
    """
    ac_covered: int = 0
    ac_total: int = 0
    br_covered: int = 0
    br_total: int = 0
    ac_percentage: int = 0
    br_percentage: int = 0
    overall_percentage: int = 0
    total_items: int = 0
    covered_items: int = 0
    not_covered_items: int = 0
    has_data: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CoverageStats:
    total_test_cases: int = 0
    positive_tests: int = 0
    negative_tests: int = 0
    validation_tests: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
