"""Helpers for turning raw LLM completions into validated models."""

import json
import re
from typing import TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)

NO_DATA_MESSAGE = "No data returned from AI provider."


def _strip_llm_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```json ... ```, ``` ... ```, leading/trailing whitespace.
    """
    cleaned = raw_output.strip()

    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
    if fence_match:
        return fence_match.group(1).strip()

    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_llm_json_dict(raw_output: str | None) -> dict:
    """
    Parse LLM output as a JSON object.

    Providers in JSON mode normally return bare JSON, but fenced output still
    shows up occasionally, so fences are stripped first.

    Args:
        raw_output: Raw string from LLM response

    Returns:
        Parsed dict

    Raises:
        ValueError: If the output is empty or not a JSON object
        json.JSONDecodeError: If JSON parsing fails after cleanup
    """
    if not raw_output or not raw_output.strip():
        raise ValueError(NO_DATA_MESSAGE)

    parsed = json.loads(_strip_llm_fences(raw_output))
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object from AI provider")
    return parsed


def parse_llm_json(raw_output: str | None, model: type[T]) -> T:
    """
    Parse LLM output as JSON and validate against a Pydantic model.

    Args:
        raw_output: Raw string from LLM response
        model: Pydantic model class to validate against

    Returns:
        Validated Pydantic model instance

    Raises:
        ValueError: If the output is empty
        json.JSONDecodeError: If JSON parsing fails after cleanup
        pydantic.ValidationError: If parsed JSON doesn't match schema
    """
    return model.model_validate(parse_llm_json_dict(raw_output))
