from coverage_analysis.sources import (
    collect_test_cases,
    summarize_documents,
    resolve_requirement_blocks,
)


def _doc(name, cases, success=True, extracted=None):
    payload = {"testCases": cases}
    if extracted is not None:
        payload["extractedContent"] = extracted
    return {"fileName": name, "success": success, "testCaseResponse": payload}


class TestCollectTestCases:
    def test_single_document_response(self):
        response = {"testCases": [{"testScenario": "A"}, {"testScenario": "B"}]}
        assert collect_test_cases(response) == [{"testScenario": "A"}, {"testScenario": "B"}]

    def test_multi_document_concatenates_successful_documents(self):
        response = {
            "documentResults": [
                _doc("PROJ-1", [{"testScenario": "A"}]),
                _doc("PROJ-2", [{"testScenario": "B"}], success=False),
                {"fileName": "broken.docx", "success": True, "testCaseResponse": None},
                _doc("PROJ-3", [{"testScenario": "C"}, {"testScenario": "D"}]),
            ],
            "testCases": [{"testScenario": "ignored"}],
        }
        assert [tc["testScenario"] for tc in collect_test_cases(response)] == ["A", "C", "D"]

    def test_empty_document_results_fall_back_to_single(self):
        response = {"documentResults": [], "testCases": [{"testScenario": "A"}]}
        assert collect_test_cases(response) == [{"testScenario": "A"}]

    def test_missing_response(self):
        assert collect_test_cases(None) == []
        assert collect_test_cases({}) == []


class TestSummarizeDocuments:
    def test_lists_successful_documents(self):
        response = {
            "documentResults": [
                _doc("spec.docx", [{}, {}]),
                _doc("failed.pdf", [{}], success=False),
            ]
        }
        assert summarize_documents(response) == [{"name": "spec.docx", "test_case_count": 2}]

    def test_single_document_response_has_no_documents(self):
        assert summarize_documents({"testCases": [{}]}) == []


class TestResolveRequirementBlocks:
    def test_request_data_with_missing_fields(self):
        blocks = resolve_requirement_blocks({"userStory": "As a user I want to log in", "acceptanceCriteria": ""})

        assert blocks == {
            "user_story": "As a user I want to log in",
            "acceptance_criteria": "N/A",
            "business_rules": "N/A",
        }

    def test_no_request_data(self):
        assert resolve_requirement_blocks(None) == {
            "user_story": "N/A",
            "acceptance_criteria": "N/A",
            "business_rules": "N/A",
        }

    def test_first_document_extracted_content_overrides(self):
        request = {"acceptanceCriteria": "From the form", "businessRules": "Form rules apply here"}
        response = {
            "documentResults": [
                _doc("PROJ-7", [{}], extracted={"userStory": "Story text", "acceptanceCriteria": "From the issue"}),
                _doc("PROJ-8", [{}], extracted={"businessRules": "Second document rules"}),
            ]
        }
        blocks = resolve_requirement_blocks(request, response)

        assert blocks == {
            "user_story": "Story text",
            "acceptance_criteria": "From the issue",
            "business_rules": "Form rules apply here",
        }

    def test_single_document_response_keeps_request_data(self):
        request = {"acceptanceCriteria": "From the form"}
        response = {"testCases": [{}], "extractedContent": {"acceptanceCriteria": "ignored"}}
        assert resolve_requirement_blocks(request, response)["acceptance_criteria"] == "From the form"
