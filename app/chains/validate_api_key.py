"""BYOK key validation against the selected provider."""

from google import genai
from openai import AsyncOpenAI

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_prioritizer import AIProvider, ProviderInfo, ValidateKeyResponse

logger = get_logger(__name__)

VALID = "valid"
INVALID = "invalid"

PROVIDER_INFO: dict[str, ProviderInfo] = {
    AIProvider.GOOGLE.value: ProviderInfo(
        name="Google Gemini",
        key_label="Gemini API Key",
        placeholder="AIza...",
        help_url="https://aistudio.google.com/app/apikey",
        help_text="Get a free API key from Google AI Studio",
        description="Recommended for best JSON structured output support.",
    ),
    AIProvider.OPENAI.value: ProviderInfo(
        name="OpenAI",
        key_label="OpenAI API Key",
        placeholder="sk-...",
        help_url="https://platform.openai.com/api-keys",
        help_text="Get your API key from OpenAI Platform",
        description="Uses GPT-4o for high-quality analysis.",
    ),
}

GENERIC_PROVIDER_INFO = ProviderInfo(
    name="AI Provider",
    key_label="API Key",
    placeholder="Enter your API key",
    help_url="#",
    help_text="Get your API key from the provider",
    description="",
)


def get_provider_info(provider: str) -> ProviderInfo:
    return PROVIDER_INFO.get(provider, GENERIC_PROVIDER_INFO)


async def _ping_gemini(api_key: str) -> None:
    client = genai.Client(api_key=api_key)
    await client.aio.models.generate_content(
        model=get_settings().GEMINI_MODEL,
        contents='Say "OK" and nothing else.',
    )


async def _ping_openai(api_key: str) -> None:
    client = AsyncOpenAI(api_key=api_key)
    # Any non-2xx raises; a 401 surfaces as AuthenticationError("Error code: 401 ...")
    await client.models.list()


async def validate_api_key(provider: str, api_key: str) -> ValidateKeyResponse:
    """
    Check a key with the cheapest call the provider offers.

    A rate-limited key is reported as valid, since the provider accepted it.

    Args:
        provider: "google" or "openai"
        api_key: Key to check

    Returns:
        ValidateKeyResponse with status "valid" or "invalid" and a message
    """
    if not api_key.strip():
        return ValidateKeyResponse(status=INVALID, message="Please enter an API key")

    try:
        if provider == AIProvider.GOOGLE.value:
            await _ping_gemini(api_key)
        elif provider == AIProvider.OPENAI.value:
            await _ping_openai(api_key)
        else:
            return ValidateKeyResponse(
                status=INVALID, message=f"Validation failed: Unsupported AI provider: {provider}"
            )
    except Exception as e:
        message = str(e) or "Unknown error"
        logger.info(f"Key validation failed for {provider}: {type(e).__name__}")

        if "API_KEY_INVALID" in message or "401" in message or "Invalid" in message:
            return ValidateKeyResponse(
                status=INVALID, message="Invalid API key. Please check and try again."
            )
        if "RATE_LIMIT" in message or "429" in message:
            return ValidateKeyResponse(
                status=VALID, message="Rate limited. Key might be valid - try saving anyway."
            )
        return ValidateKeyResponse(status=INVALID, message=f"Validation failed: {message}")

    return ValidateKeyResponse(status=VALID, message="API key is valid!")
