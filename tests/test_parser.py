"""Tests for parsing LLM answer text."""

import pytest

from semantic_linter.llm.errors import InvalidResponseError, ProviderStage
from semantic_linter.llm.models import AnalysisResult
from semantic_linter.llm.parser import parse_analysis_result, strip_code_fence


def test_fenced_empty_result():
    result = parse_analysis_result('```json\n{"issues":[]}\n```')
    assert result == AnalysisResult(issues=[])


def test_unfenced_result_with_issue():
    result = parse_analysis_result(
        '{"issues": [{"type": "naming", "message": "bad name", "suggestion": "rename to camelCase"}]}'
    )
    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.type == "naming"
    assert issue.message == "bad name"
    assert issue.suggestion == "rename to camelCase"


def test_suggestion_is_optional_and_unknown_keys_ignored():
    result = parse_analysis_result(
        '{"issues": [{"type": "bug", "message": "nil deref", "line": 3}], "summary": "x"}'
    )
    assert result.issues[0].suggestion is None


def test_missing_or_null_issues_is_empty():
    assert parse_analysis_result("{}").issues == []
    assert parse_analysis_result('{"issues": null}').issues == []


def test_null_document_is_empty():
    assert parse_analysis_result("null") == AnalysisResult()
    assert parse_analysis_result("```json\nnull\n```").issues == []


def test_null_issue_fields_become_empty():
    result = parse_analysis_result(
        '{"issues": [{"type": "bug", "message": "nil deref"}, '
        '{"type": "style", "message": null, "suggestion": null}, '
        '{"type": null, "message": "why"}, null]}'
    )

    assert [(i.type, i.message, i.suggestion) for i in result.issues] == [
        ("bug", "nil deref", None),
        ("style", "", None),
        ("", "why", None),
        ("", "", None),
    ]


def test_strip_code_fence_only_strips_literal_markers():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'
    # a plain ``` opener is not the json fence marker
    assert strip_code_fence('```\n{"a": 1}\n```') == '```\n{"a": 1}'


@pytest.mark.parametrize(
    "text",
    ["not json at all", '```json\n{"issues": [\n```', "[1, 2]", ""],
)
def test_unparseable_text_is_parse_error(text):
    with pytest.raises(InvalidResponseError) as exc_info:
        parse_analysis_result(text, "openai")

    assert exc_info.value.stage is ProviderStage.PARSE
    assert exc_info.value.raw_response == text
    assert "openai" in str(exc_info.value)
