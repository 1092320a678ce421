"""Tests for LLM JSON output parsing."""

import json

import pytest
from pydantic import ValidationError

from app.core.llm import NO_DATA_MESSAGE, parse_llm_json, parse_llm_json_dict
from app.core.schemas_prioritizer import AnalysisResult


def test_parses_bare_json():
    assert parse_llm_json_dict('{"a": 1}') == {"a": 1}


def test_strips_code_fences():
    raw = '```json\n{"executiveSummary": "ok", "analyzedUseCases": []}\n```'
    assert parse_llm_json_dict(raw)["executiveSummary"] == "ok"


def test_strips_fences_with_preamble():
    raw = 'Here you go:\n```\n{"a": 2}\n```\nThanks'
    assert parse_llm_json_dict(raw) == {"a": 2}


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_output(raw):
    with pytest.raises(ValueError, match=NO_DATA_MESSAGE):
        parse_llm_json_dict(raw)


def test_non_object_rejected():
    with pytest.raises(ValueError):
        parse_llm_json_dict("[1, 2]")


def test_invalid_json():
    with pytest.raises(json.JSONDecodeError):
        parse_llm_json_dict("{not json")


def test_parse_into_model():
    raw = json.dumps(
        {
            "executiveSummary": "Focus on support automation.",
            "analyzedUseCases": [
                {
                    "id": "demo-1",
                    "title": "Support bot",
                    "department": "Customer Service",
                    "description": "Tier 1",
                    "impactScore": 8,
                    "feasibilityScore": 7.5,
                    "riskScore": 3,
                    "group": "Quick Wins",
                    "reasoning": "High volume",
                    "implementationSteps": ["a", "b", "c"],
                }
            ],
        }
    )
    result = parse_llm_json(raw, AnalysisResult)
    assert result.analyzed_use_cases[0].feasibility_score == 7.5
    assert result.analyzed_use_cases[0].group.value == "Quick Wins"


def test_parse_into_model_rejects_out_of_range_score():
    raw = json.dumps(
        {
            "executiveSummary": "x",
            "analyzedUseCases": [
                {
                    "id": "1",
                    "title": "t",
                    "department": "d",
                    "description": "x",
                    "impactScore": 11,
                    "feasibilityScore": 5,
                    "riskScore": 5,
                    "group": "Quick Wins",
                    "reasoning": "r",
                    "implementationSteps": [],
                }
            ],
        }
    )
    with pytest.raises(ValidationError):
        parse_llm_json(raw, AnalysisResult)
