"""
normalize.py

Input adapter for generated test cases.

The generation API returns the same logical field under different keys
depending on the response shape ("testScenario" vs "testCase" vs "scenario",
"testSteps" vs "steps", ...). Everything downstream works on the normalized
TestCase record produced here, so the coverage logic never has to care which
key was present.
"""

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

from coverage_analysis.models import TestCase

# Candidate keys per normalized field, in priority order.
FIELD_ALIASES = {
    "scenario": ("testScenario", "testCase", "scenario", "test_scenario"),
    "steps": ("testSteps", "steps", "test_steps"),
    "expected_result": ("expectedResult", "expected_result", "expected"),
    "preconditions": ("preconditions", "precondition"),
    "test_case_id": ("testCaseId", "id", "test_case_id"),
    "priority": ("priority",),
    "test_type": ("testType", "type", "test_type"),
}


def _as_text(value: Any) -> str:
    """
    Coerces a raw field value to a string. None becomes "", step lists are
    joined one step per line.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "\n".join(_as_text(v) for v in value if v is not None)
    return str(value)


def _lookup(raw: Any, key: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(key)
    return getattr(raw, key, None)


def _first_present(raw: Any, keys: Sequence[str]) -> str:
    for key in keys:
        text = _as_text(_lookup(raw, key))
        if text:
            return text
    return ""


def normalize_test_case(raw: Any) -> TestCase:
    """
    Converts a raw test case record into a TestCase.

    Args:
        raw: A TestCase (returned as is), a dict from the generation API, any
            object exposing the fields as attributes, or None.

    Returns:
        TestCase: The normalized record. Missing fields are empty strings.

    Example:
        >>> normalize_test_case({"testCase": "Login", "steps": ["Open", "Submit"]})
        TestCase(scenario='Login', steps='Open\\nSubmit', expected_result='', preconditions='', test_case_id='', priority='', test_type='')
    """
    if isinstance(raw, TestCase):
        return raw
    if raw is None:
        return TestCase()
    return TestCase(**{field: _first_present(raw, keys) for field, keys in FIELD_ALIASES.items()})


def normalize_test_cases(raw_cases: Optional[Iterable[Any]]) -> List[TestCase]:
    """
    Normalizes every record of a test case list. None, a string or a single
    record mapping is not a list of test cases and yields an empty list.
    """
    if raw_cases is None or isinstance(raw_cases, (str, bytes, Mapping)):
        return []
    return [normalize_test_case(tc) for tc in raw_cases]
