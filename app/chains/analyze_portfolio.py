"""LLM chain that scores and groups a use case portfolio.

The caller supplies its own provider key (BYOK). Two providers are supported:
Google Gemini with a response schema, and OpenAI in JSON mode.
"""

import json

from google import genai
from google.genai import types
from openai import AsyncOpenAI
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.llm import NO_DATA_MESSAGE, parse_llm_json_dict
from app.core.logging import get_logger
from app.core.schemas_prioritizer import (
    AIProvider,
    AnalysisResult,
    MaturityProfile,
    UseCaseGroup,
    UseCaseInput,
)

logger = get_logger(__name__)

MISSING_KEY_MESSAGE = "API Key is missing. Please configure it in settings."
INVALID_FORMAT_MESSAGE = "Invalid response format from AI provider"


class AIProviderError(Exception):
    """Raised with a user-facing message when portfolio analysis fails."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


# ruff: noqa: E501
SYSTEM_PROMPT = """You are a Chief AI Officer acting as a consultant specializing in Generative AI and LLM applications. You provide strategic analysis of AI use cases for organizations based on their maturity level.

When evaluating use cases, prioritize modern GenAI approaches:
- LLM-based solutions (GPT, Claude, Gemini) for text generation, analysis, and reasoning
- RAG (Retrieval-Augmented Generation) for knowledge-grounded applications
- AI Agents for autonomous task execution and workflow automation
- Prompt engineering and fine-tuning for customization
- Vector databases and semantic search for information retrieval

Avoid recommending traditional ML approaches (training custom NLP models, deep learning from scratch) unless specifically necessary for the use case.

Evaluate each use case based on:
1. Feasibility (1-10): Can this org realistically build this GIVEN their maturity level? (e.g., Novices can use LLM APIs but struggle with complex agent orchestration).
2. Strategic Impact (1-10): How much business value does it add?
3. Risk (1-10): What is the implementation, ethical, or operational risk?

Assign each use case to one group: 'Quick Wins', 'Strategic Bets', 'Low Priority', or 'Transformational'.
Provide a short reasoning and 3 concise implementation steps focusing on GenAI/LLM approaches for each use case.
Also provide an overall Executive Summary for the portfolio."""

RESPONSE_CONTRACT = """Respond with a JSON object containing:
- executiveSummary: string (overall portfolio analysis)
- analyzedUseCases: array of objects with:
  - id: string (matching input id)
  - title: string
  - department: string
  - description: string
  - impactScore: number (1-10)
  - feasibilityScore: number (1-10)
  - riskScore: number (1-10)
  - group: one of "Quick Wins", "Strategic Bets", "Low Priority", "Transformational"
  - reasoning: string
  - implementationSteps: array of 3 strings (focus on GenAI/LLM solutions: use LLM APIs, RAG, AI agents, prompt engineering, vector search. Avoid suggesting custom ML model training unless absolutely necessary)"""

_USE_CASE_FIELDS = [
    "id",
    "title",
    "department",
    "description",
    "impactScore",
    "feasibilityScore",
    "riskScore",
    "group",
    "reasoning",
    "implementationSteps",
]


def build_prompt(maturity: MaturityProfile, use_cases: list[UseCaseInput]) -> str:
    """Assemble the user prompt for a maturity profile and its use cases."""
    use_cases_json = json.dumps(
        [uc.model_dump(by_alias=True) for uc in use_cases],
        indent=2,
        ensure_ascii=False,
    )
    return f"""
Analyze the following AI use cases for an organization with this Maturity Profile:

Organization Maturity: {maturity.level.value} (Score: {maturity.score}/100).
Summary of Maturity: {maturity.summary}

Use Cases to Analyze:
{use_cases_json}

{RESPONSE_CONTRACT}
"""


def _gemini_response_schema() -> types.Schema:
    string = types.Schema(type=types.Type.STRING)
    number = types.Schema(type=types.Type.NUMBER)
    use_case = types.Schema(
        type=types.Type.OBJECT,
        properties={
            "id": string,
            "title": string,
            "department": string,
            "description": string,
            "impactScore": number,
            "feasibilityScore": number,
            "riskScore": number,
            "group": types.Schema(
                type=types.Type.STRING,
                enum=[g.value for g in UseCaseGroup],
            ),
            "reasoning": string,
            "implementationSteps": types.Schema(type=types.Type.ARRAY, items=string),
        },
        required=_USE_CASE_FIELDS,
    )
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "executiveSummary": string,
            "analyzedUseCases": types.Schema(type=types.Type.ARRAY, items=use_case),
        },
        required=["executiveSummary", "analyzedUseCases"],
    )


def _to_result(payload: dict) -> AnalysisResult:
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Analysis payload failed validation: {e.error_count()} error(s)")
        raise AIProviderError(INVALID_FORMAT_MESSAGE) from e


async def analyze_with_gemini(
    maturity: MaturityProfile,
    use_cases: list[UseCaseInput],
    api_key: str,
) -> AnalysisResult:
    """Run the analysis on Google Gemini with a structured response schema."""
    settings = get_settings()
    client = genai.Client(api_key=api_key)

    response = await client.aio.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=build_prompt(maturity, use_cases),
        config=types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPT,
            response_mime_type="application/json",
            response_schema=_gemini_response_schema(),
        ),
    )

    if not response.text:
        raise AIProviderError(NO_DATA_MESSAGE)

    return _to_result(parse_llm_json_dict(response.text))


async def analyze_with_openai(
    maturity: MaturityProfile,
    use_cases: list[UseCaseInput],
    api_key: str,
) -> AnalysisResult:
    """Run the analysis on OpenAI chat completions in JSON mode."""
    settings = get_settings()
    client = AsyncOpenAI(api_key=api_key)

    response = await client.chat.completions.create(
        model=settings.OPENAI_ANALYSIS_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(maturity, use_cases)},
        ],
        response_format={"type": "json_object"},
        temperature=settings.OPENAI_ANALYSIS_TEMPERATURE,
    )

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise AIProviderError(NO_DATA_MESSAGE)

    parsed = parse_llm_json_dict(content)
    if not parsed.get("executiveSummary") or not parsed.get("analyzedUseCases"):
        raise AIProviderError(INVALID_FORMAT_MESSAGE)

    return _to_result(parsed)


def friendly_provider_error(error: Exception) -> str | None:
    """Map a provider failure onto a user-facing message, if it is a known kind."""
    message = str(error)
    if "API_KEY_INVALID" in message or "401" in message:
        return "Invalid API key. Please check your key in settings."
    if "RATE_LIMIT" in message or "429" in message:
        return "Rate limit exceeded. Please wait a moment and try again."
    if "quota" in message:
        return "API quota exceeded. Please check your billing or try again later."
    return None


async def analyze_portfolio(
    maturity: MaturityProfile,
    use_cases: list[UseCaseInput],
    api_key: str,
    provider: AIProvider | str = AIProvider.GOOGLE,
) -> AnalysisResult:
    """
    Score and group a use case portfolio with the selected provider.

    Args:
        maturity: Organization maturity profile
        use_cases: Use cases to analyze
        api_key: Caller's own provider key
        provider: "google" or "openai"

    Returns:
        Validated AnalysisResult

    Raises:
        AIProviderError: Missing key, unsupported provider, bad response,
            or a known provider failure (invalid key, rate limit, quota)
        Exception: Any other provider failure propagates unchanged
    """
    if not api_key:
        raise AIProviderError(MISSING_KEY_MESSAGE, status_code=401)

    provider_value = provider.value if isinstance(provider, AIProvider) else provider

    logger.info(
        f"Analyzing {len(use_cases)} use case(s) with {provider_value}",
        extra={"provider": provider_value, "maturity_level": maturity.level.value},
    )

    try:
        if provider_value == AIProvider.GOOGLE.value:
            return await analyze_with_gemini(maturity, use_cases, api_key)
        if provider_value == AIProvider.OPENAI.value:
            return await analyze_with_openai(maturity, use_cases, api_key)
        raise AIProviderError(
            f"Unsupported AI provider: {provider_value}", status_code=400
        )
    except AIProviderError:
        raise
    except Exception as e:
        logger.error(f"Analysis failed: {e}", exc_info=True)
        friendly = friendly_provider_error(e)
        if friendly:
            status = 401 if friendly.startswith("Invalid API key") else 502
            raise AIProviderError(friendly, status_code=status) from e
        raise
