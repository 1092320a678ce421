"""Tests for decision memo generation."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.chains.generate_decision_memo import (
    build_memo,
    build_memo_prompt,
    build_template_memo,
    extract_common_themes,
    extract_unique_points,
)

PROJECT = {"title": "Vertriebs-CRM", "decision_question": "Welches CRM führen wir ein?"}

INTERVIEWS = [
    {
        "goals": "Kosten senken im Vertrieb",
        "no_gos": "Keine Entlassungen",
        "concerns": "Datenschutz bei Kundendaten",
        "conditions": "",
        "stakeholders": {"name": "Anna", "role": "CFO"},
    },
    {
        "goals": "Kosten transparent machen",
        "no_gos": "keine entlassungen ",
        "concerns": "Zeitplan zu knapp",
        "conditions": "Nur mit Betriebsrat",
        "stakeholders": {"name": "Ben", "role": "Vertrieb"},
    },
]

VALID_MEMO = {
    "options": [{"title": "A", "description": "Option A", "pros": ["p"], "cons": ["c"]}],
    "recommendation": "A",
    "recommendation_rationale": "Because",
    "tradeoffs": ["t"],
    "open_questions": ["q"],
}


def _mock_settings(generator="llm", api_key="sk-test"):
    settings = MagicMock()
    settings.MEMO_GENERATOR = generator
    settings.MEMO_MODEL = "gpt-4o-mini"
    settings.OPENAI_API_KEY = api_key
    return settings


def _completion(content):
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


class TestThemes:
    def test_common_themes_share_a_long_word(self):
        items = ["Kosten senken", "Kosten messen", "Qualität halten"]
        assert extract_common_themes(items) == ["Kosten senken", "Kosten messen"]

    def test_common_themes_fall_back_to_first_three(self):
        items = ["alpha", "beta", "gamma", "delta"]
        assert extract_common_themes(items) == ["alpha", "beta", "gamma"]

    def test_common_themes_capped_at_five(self):
        items = [f"Budget {i}" for i in range(8)]
        assert len(extract_common_themes(items)) == 5

    def test_unique_points_normalize(self):
        assert extract_unique_points([" Keine Cloud", "keine cloud", "Kein Lock-in"]) == [
            "keine cloud",
            "kein lock-in",
        ]


class TestTemplateMemo:
    def test_memo_from_interviews(self):
        memo = build_template_memo(PROJECT, INTERVIEWS)

        assert [o.title for o in memo.options] == ["Konsens-Option", "Schrittweise Umsetzung"]
        assert memo.recommendation == "Konsens-Option"
        assert memo.options[0].description.endswith(
            "Kosten senken im Vertrieb, Kosten transparent machen"
        )
        assert memo.options[0].cons[1] == "Datenschutz bei Kundendaten"
        assert "(2 gemeinsame Ziele identifiziert)" in memo.recommendation_rationale
        assert "(1 kritische Grenzen)" in memo.recommendation_rationale
        assert memo.recommendation_rationale.endswith("2 Stakeholder wurden befragt.")
        assert memo.tradeoffs[0].endswith("Mehrere Stakeholder haben Bedingungen genannt")
        assert memo.tradeoffs[2] == "Adressierung von: Datenschutz bei Kundendaten"
        assert memo.open_questions[0] == 'Wie wird "Datenschutz bei Kundendaten" adressiert?'
        assert len(memo.open_questions) == 4

    def test_memo_without_interviews(self):
        memo = build_template_memo(PROJECT, [])

        assert memo.options[0].cons[1] == "Komplexität der Abstimmung"
        assert memo.tradeoffs[0].endswith("Einige Stakeholder bevorzugen schnelles Handeln")
        assert memo.tradeoffs[2] == "Kommunikationsaufwand vs. Effizienz"
        assert len(memo.open_questions) == 2
        assert "0 Stakeholder wurden befragt." in memo.recommendation_rationale


def test_memo_prompt_carries_stakeholders():
    prompt = build_memo_prompt(PROJECT, INTERVIEWS)
    assert "Decision question: Welches CRM führen wir ein?" in prompt
    assert '"stakeholder": "Anna"' in prompt
    assert '"conditions": "Nur mit Betriebsrat"' in prompt


class TestBuildMemo:
    @pytest.mark.asyncio
    async def test_template_is_default(self):
        with patch("app.chains.generate_decision_memo.AsyncOpenAI") as mock_openai:
            memo = await build_memo(PROJECT, INTERVIEWS, _mock_settings(generator="template"))
        assert memo.recommendation == "Konsens-Option"
        mock_openai.assert_not_called()

    @pytest.mark.asyncio
    async def test_llm_memo(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_completion(json.dumps(VALID_MEMO)))
        with patch("app.chains.generate_decision_memo.AsyncOpenAI", return_value=client):
            memo = await build_memo(PROJECT, INTERVIEWS, _mock_settings())
        assert memo.recommendation == "A"
        assert client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_llm_memo_retries_once(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(
            side_effect=[_completion('{"options": []}'), _completion(json.dumps(VALID_MEMO))]
        )
        with patch("app.chains.generate_decision_memo.AsyncOpenAI", return_value=client):
            memo = await build_memo(PROJECT, INTERVIEWS, _mock_settings())

        assert memo.options[0].title == "A"
        retry_messages = client.chat.completions.create.call_args_list[1].kwargs["messages"]
        assert retry_messages[-2] == {"role": "assistant", "content": '{"options": []}'}
        assert "previous output was invalid" in retry_messages[-1]["content"]

    @pytest.mark.asyncio
    async def test_llm_memo_gives_up_after_retry(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_completion("not json"))
        with patch("app.chains.generate_decision_memo.AsyncOpenAI", return_value=client):
            with pytest.raises(ValueError, match="could not be validated"):
                await build_memo(PROJECT, INTERVIEWS, _mock_settings())

    @pytest.mark.asyncio
    async def test_llm_memo_requires_key(self):
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            await build_memo(PROJECT, INTERVIEWS, _mock_settings(api_key=None))
