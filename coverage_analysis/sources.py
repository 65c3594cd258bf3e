"""
sources.py

Adapters between the test case generation API responses and the coverage
analysis inputs.

A generation response comes in one of two shapes:
- single document: {"testCases": [...]}
- multi document (JIRA batch or several uploads):
  {"documentResults": [{"success": bool, "fileName": str,
                        "testCaseResponse": {"testCases": [...], "extractedContent": {...}}}]}

The original request data ({"userStory", "acceptanceCriteria", "businessRules"})
is supplied explicitly by the caller.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


def _successful_documents(response: Optional[Mapping]) -> List[Mapping]:
    if not isinstance(response, Mapping):
        return []
    docs = response.get("documentResults") or []
    return [
        d for d in docs
        if isinstance(d, Mapping) and d.get("success") and isinstance(d.get("testCaseResponse"), Mapping)
        and d["testCaseResponse"].get("testCases")
    ]


def collect_test_cases(response: Optional[Mapping]) -> List[Any]:
    """
    Gathers the raw test cases of a generation response.

    Multi-document responses take precedence: test cases of every successful
    document are concatenated in document order. Otherwise the single-document
    "testCases" list is returned.

    Args:
        response: The generation API response, or None.

    Returns:
        List[Any]: Raw test case records (see normalize.normalize_test_case).
    """
    if not isinstance(response, Mapping):
        return []
    if response.get("documentResults"):
        cases: List[Any] = []
        for doc in _successful_documents(response):
            cases.extend(doc["testCaseResponse"]["testCases"])
        logger.debug(f"Collected {len(cases)} test cases from multi-document response")
        return cases
    return list(response.get("testCases") or [])


def summarize_documents(response: Optional[Mapping]) -> List[Dict[str, Any]]:
    """Lists the successful documents of a multi-document response with their test case counts."""
    return [
        {
            "name": doc.get("fileName", ""),
            "test_case_count": len(doc["testCaseResponse"]["testCases"]),
        }
        for doc in _successful_documents(response)
    ]


def resolve_requirement_blocks(
    request_data: Optional[Mapping],
    response: Optional[Mapping] = None,
) -> Dict[str, str]:
    """
    Determines the user story, acceptance criteria and business rules to
    analyze.

    Values come from the original request, with missing values reported as
    "N/A". For multi-document responses, the first document's extracted content
    overrides whichever fields it provides.

    Returns:
        dict: {"user_story", "acceptance_criteria", "business_rules"}
    """
    request_data = request_data if isinstance(request_data, Mapping) else {}
    blocks = {
        "user_story": request_data.get("userStory") or NOT_AVAILABLE,
        "acceptance_criteria": request_data.get("acceptanceCriteria") or NOT_AVAILABLE,
        "business_rules": request_data.get("businessRules") or NOT_AVAILABLE,
    }

    if _successful_documents(response):
        first = response["documentResults"][0]
        payload = first.get("testCaseResponse") if isinstance(first, Mapping) else None
        extracted = payload.get("extractedContent") if isinstance(payload, Mapping) else None
        if isinstance(extracted, Mapping):
            blocks["user_story"] = extracted.get("userStory") or blocks["user_story"]
            blocks["acceptance_criteria"] = extracted.get("acceptanceCriteria") or blocks["acceptance_criteria"]
            blocks["business_rules"] = extracted.get("businessRules") or blocks["business_rules"]
    return blocks
