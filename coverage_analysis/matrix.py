"""
matrix.py

Builds a requirement-to-test-case coverage matrix as a pandas DataFrame and
exports it to CSV.

Each row contains:
    - Source: "AC" or "BR"
    - Index: 1-based position of the item within its block
    - Requirement: The requirement item text
    - Covered: Whether any test case covers the item
    - MatchCount: Number of covering test cases
    - CoveredBy: Comma-separated ids (or scenarios, when a test case has no id) of covering test cases
"""

import pandas as pd
from typing import Iterable

from coverage_analysis.models import CoverageResult

MATRIX_COLUMNS = ["Source", "Index", "Requirement", "Covered", "MatchCount", "CoveredBy"]


def build_coverage_matrix(results: Iterable[CoverageResult]) -> pd.DataFrame:
    """
    Builds the coverage matrix from per-item coverage results.

    Args:
        results (Iterable[CoverageResult]): Results from analyze_coverage, AC and BR in any order.

    Returns:
        pd.DataFrame: One row per result, columns as in MATRIX_COLUMNS. Empty input
        gives an empty frame that still has the columns.
    """
    rows = []
    for r in results:
        rows.append({
            "Source": r.item.source_label,
            "Index": r.item.index,
            "Requirement": r.item.text,
            "Covered": r.covered,
            "MatchCount": len(r.matching_test_cases),
            "CoveredBy": ", ".join(tc.label for tc in r.matching_test_cases if tc.label),
        })
    return pd.DataFrame(rows, columns=MATRIX_COLUMNS)


def export_coverage_matrix_csv(df: pd.DataFrame, path: str) -> str:
    """
    Exports the coverage matrix DataFrame to a CSV file at the given path.

    Returns:
        str: The file path of the exported CSV.
    """
    df.to_csv(path, index=False)
    return path
