"""Tests for BYOK key validation."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.chains.validate_api_key import GENERIC_PROVIDER_INFO, get_provider_info, validate_api_key


def _gemini_client(side_effect=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=MagicMock(text="OK"), side_effect=side_effect
    )
    return client


@pytest.mark.asyncio
async def test_empty_key():
    result = await validate_api_key("google", "  ")
    assert result.status == "invalid"
    assert result.message == "Please enter an API key"


@pytest.mark.asyncio
async def test_valid_gemini_key():
    client = _gemini_client()
    with patch("app.chains.validate_api_key.genai.Client", return_value=client):
        result = await validate_api_key("google", "AIza-good")
    assert result.status == "valid"
    assert result.message == "API key is valid!"
    assert "OK" in client.aio.models.generate_content.call_args.kwargs["contents"]


@pytest.mark.asyncio
async def test_valid_openai_key_lists_models():
    client = MagicMock()
    client.models.list = AsyncMock(return_value=MagicMock())
    with patch("app.chains.validate_api_key.AsyncOpenAI", return_value=client):
        result = await validate_api_key("openai", "sk-good")
    assert result.status == "valid"
    client.models.list.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    ["API_KEY_INVALID", "Error code: 401 - unauthorized", "Invalid authentication"],
)
async def test_rejected_key(error):
    client = _gemini_client(side_effect=Exception(error))
    with patch("app.chains.validate_api_key.genai.Client", return_value=client):
        result = await validate_api_key("google", "AIza-bad")
    assert result.status == "invalid"
    assert result.message.startswith("Invalid API key")


@pytest.mark.asyncio
async def test_rate_limited_key_counts_as_valid():
    client = MagicMock()
    client.models.list = AsyncMock(side_effect=Exception("Error code: 429"))
    with patch("app.chains.validate_api_key.AsyncOpenAI", return_value=client):
        result = await validate_api_key("openai", "sk-busy")
    assert result.status == "valid"
    assert "Rate limited" in result.message


@pytest.mark.asyncio
async def test_other_failure_reports_message():
    client = _gemini_client(side_effect=Exception("network unreachable"))
    with patch("app.chains.validate_api_key.genai.Client", return_value=client):
        result = await validate_api_key("google", "AIza-x")
    assert result.status == "invalid"
    assert result.message == "Validation failed: network unreachable"


def test_provider_info():
    assert get_provider_info("google").name == "Google Gemini"
    assert get_provider_info("openai").placeholder == "sk-..."
    assert get_provider_info("other") is GENERIC_PROVIDER_INFO
