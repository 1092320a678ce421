"""Decision memo generation from stakeholder interviews.

Two generators share one output shape (MemoContent):

- ``template`` (default): a fixed two-option memo filled with the themes that
  recur across the interview answers.
- ``llm``: an OpenAI JSON-mode call over the same interview material, with one
  fix-to-schema retry.
"""

import json
from collections import Counter
from typing import Any

from openai import AsyncOpenAI
from pydantic import ValidationError

from app.core.config import Settings
from app.core.llm import parse_llm_json
from app.core.logging import get_logger
from app.core.schemas_mediator import MemoContent, MemoOption

logger = get_logger(__name__)

MIN_THEME_WORD_LENGTH = 4
MAX_THEMES = 5
MAX_OPEN_QUESTIONS = 4


# =============================================================================
# Template generator
# =============================================================================


def extract_common_themes(items: list[str]) -> list[str]:
    """
    Items that share a word (4+ chars) with at least one other mention.

    Falls back to the first three items when nothing recurs.
    """
    words: Counter[str] = Counter()
    for item in items:
        for word in item.lower().split():
            if len(word) >= MIN_THEME_WORD_LENGTH:
                words[word] += 1

    common_words = [word for word, count in words.items() if count > 1]
    if not common_words:
        return items[:3]

    return [
        item for item in items if any(word in item.lower() for word in common_words)
    ][:MAX_THEMES]


def extract_unique_points(items: list[str]) -> list[str]:
    """Normalized, de-duplicated items in first-seen order."""
    unique = list(dict.fromkeys(item.strip().lower() for item in items))
    return unique[:MAX_THEMES]


def _answers(interviews: list[dict[str, Any]], field: str) -> list[str]:
    return [i[field] for i in interviews if i.get(field)]


def build_template_memo(project: dict[str, Any], interviews: list[dict[str, Any]]) -> MemoContent:
    """
    Fill the two-option memo template from interview answers.

    Args:
        project: Project row (title, decision_question)
        interviews: Interview rows of the project

    Returns:
        MemoContent recommending the consensus option
    """
    all_goals = _answers(interviews, "goals")
    all_no_gos = _answers(interviews, "no_gos")
    all_concerns = _answers(interviews, "concerns")
    all_conditions = _answers(interviews, "conditions")

    common_goals = extract_common_themes(all_goals)
    common_concerns = extract_common_themes(all_concerns)
    no_gos = extract_unique_points(all_no_gos)

    options = [
        MemoOption(
            title="Konsens-Option",
            description=(
                "Lösung die alle gemeinsamen Ziele adressiert: "
                + ", ".join(common_goals[:2])
            ),
            pros=[
                "Berücksichtigt alle Stakeholder-Ziele",
                "Minimiert Konflikte",
                "Schnelle Umsetzung möglich",
            ],
            cons=[
                "Möglicherweise Kompromisse bei Einzelinteressen",
                common_concerns[0] if common_concerns else "Komplexität der Abstimmung",
            ],
        ),
        MemoOption(
            title="Schrittweise Umsetzung",
            description="Iterativer Ansatz mit regelmäßiger Überprüfung",
            pros=[
                "Geringeres Risiko",
                "Flexibilität für Anpassungen",
                "Ermöglicht Lernen",
            ],
            cons=[
                "Längerer Zeithorizont",
                "Möglicherweise höhere Gesamtkosten",
            ],
        ),
    ]

    rationale = (
        "Diese Option wurde gewählt, weil sie die Mehrheit der Stakeholder-Ziele "
        f"({len(common_goals)} gemeinsame Ziele identifiziert) berücksichtigt und gleichzeitig "
        f"die genannten No-Gos ({len(no_gos)} kritische Grenzen) respektiert. "
        f"{len(interviews)} Stakeholder wurden befragt."
    )

    speed_note = (
        "Mehrere Stakeholder haben Bedingungen genannt"
        if all_conditions
        else "Einige Stakeholder bevorzugen schnelles Handeln"
    )
    tradeoffs = [
        f"Geschwindigkeit vs. Gründlichkeit: {speed_note}",
        "Kosten vs. Qualität: Balance zwischen Budget und Ergebnisqualität erforderlich",
        f"Adressierung von: {common_concerns[0]}"
        if common_concerns
        else "Kommunikationsaufwand vs. Effizienz",
    ]

    open_questions = [
        *(f'Wie wird "{concern}" adressiert?' for concern in all_concerns[:2]),
        "Wer übernimmt die Verantwortung für die Umsetzung?",
        "Welche Ressourcen werden konkret benötigt?",
    ][:MAX_OPEN_QUESTIONS]

    return MemoContent(
        options=options,
        recommendation=options[0].title,
        recommendation_rationale=rationale,
        tradeoffs=tradeoffs,
        open_questions=open_questions,
    )


# =============================================================================
# LLM generator
# =============================================================================


# ruff: noqa: E501
MEMO_SYSTEM_PROMPT = """You are a neutral mediator preparing a decision memo for a group of stakeholders.

You receive the decision question and a summary of every stakeholder interview (goals, no-gos, concerns, conditions).
Write the memo in the language of the interviews.

You MUST output ONLY valid JSON matching this exact schema:

{
  "options": [
    {"title": "string", "description": "string", "pros": ["string"], "cons": ["string"]}
  ],
  "recommendation": "string - title of the recommended option",
  "recommendation_rationale": "string",
  "tradeoffs": ["string"],
  "open_questions": ["string"]
}

RULES:
1. Offer two or three options. Every option must respect all stated no-gos.
2. The recommendation must be the title of one of the options.
3. At most four open questions."""

FIX_SCHEMA_PROMPT = """The previous output was invalid. Here is the error:

{error}

Please fix the output to match the required JSON schema exactly. Output ONLY valid JSON, no explanation."""


def build_memo_prompt(project: dict[str, Any], interviews: list[dict[str, Any]]) -> str:
    """Serialize the decision question and interview answers for the model."""
    material = []
    for interview in interviews:
        stakeholder = interview.get("stakeholders") or {}
        material.append(
            {
                "stakeholder": stakeholder.get("name"),
                "role": stakeholder.get("role"),
                "goals": interview.get("goals"),
                "no_gos": interview.get("no_gos"),
                "concerns": interview.get("concerns"),
                "conditions": interview.get("conditions"),
                "additional_notes": interview.get("additional_notes"),
            }
        )

    return (
        f"Project: {project.get('title')}\n"
        f"Decision question: {project.get('decision_question')}\n\n"
        f"Interviews:\n{json.dumps(material, indent=2, ensure_ascii=False)}"
    )


async def build_llm_memo(
    project: dict[str, Any],
    interviews: list[dict[str, Any]],
    settings: Settings,
) -> MemoContent:
    """
    Generate the memo with OpenAI.

    Raises:
        ValueError: If no server key is configured or the output cannot be
            validated after one retry
    """
    if not settings.OPENAI_API_KEY:
        raise ValueError("OPENAI_API_KEY is required for MEMO_GENERATOR=llm")

    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    messages = [
        {"role": "system", "content": MEMO_SYSTEM_PROMPT},
        {"role": "user", "content": build_memo_prompt(project, interviews)},
    ]

    logger.info(f"Calling {settings.MEMO_MODEL} for decision memo")

    response = await client.chat.completions.create(
        model=settings.MEMO_MODEL,
        temperature=0,
        messages=messages,
        response_format={"type": "json_object"},
    )
    raw_output = response.choices[0].message.content or ""

    try:
        return parse_llm_json(raw_output, MemoContent)
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        error_msg = str(e)
        logger.warning(f"First memo attempt failed validation: {error_msg}")

    retry_response = await client.chat.completions.create(
        model=settings.MEMO_MODEL,
        temperature=0,
        messages=[
            *messages,
            {"role": "assistant", "content": raw_output},
            {"role": "user", "content": FIX_SCHEMA_PROMPT.format(error=error_msg)},
        ],
        response_format={"type": "json_object"},
    )

    try:
        return parse_llm_json(retry_response.choices[0].message.content, MemoContent)
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        logger.error(f"Memo retry also failed validation: {e}")
        # Do NOT leak raw model output in exception
        raise ValueError("Model output could not be validated to schema") from e


async def build_memo(
    project: dict[str, Any],
    interviews: list[dict[str, Any]],
    settings: Settings,
) -> MemoContent:
    """Generate the memo with the configured generator."""
    if settings.MEMO_GENERATOR == "llm":
        return await build_llm_memo(project, interviews, settings)
    return build_template_memo(project, interviews)
