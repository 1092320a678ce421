"""Configuration management for the AI Prioritizer & Mediator service."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required by the mediator; the prioritizer runs without it)
    SUPABASE_URL: str = Field(default="", description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(default="", description="Supabase service role key")

    # Environment
    MEDIATOR_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")
    APP_BASE_URL: str = Field(
        default="http://localhost:3000", description="Public base URL used in invite links"
    )

    # Prioritizer: BYOK provider models (keys come from the caller, never from config)
    GEMINI_MODEL: str = Field(default="gemini-2.0-flash", description="Gemini analysis model")
    OPENAI_ANALYSIS_MODEL: str = Field(default="gpt-4o", description="OpenAI analysis model")
    OPENAI_ANALYSIS_TEMPERATURE: float = Field(
        default=0.7, description="Sampling temperature for OpenAI analysis"
    )
    CREDENTIAL_STORE_PATH: str = Field(
        default="~/.ai_prioritizer/credentials.json",
        description="Local credential cache used by the command-line prioritizer",
    )

    # Mediator: interviews and calendar
    INTERVIEW_DURATION_MINUTES: int = Field(
        default=15, description="Length of one interview slot in minutes"
    )
    ELEVENLABS_AGENT_ID: str = Field(default="", description="ElevenLabs conversational agent id")
    ELEVENLABS_WIDGET_URL: str = Field(
        default="https://elevenlabs.io/convai-widget/index.js",
        description="Script URL of the voice widget",
    )

    # Mediator: decision memo generation
    MEMO_GENERATOR: str = Field(default="template", description="Memo generator: template or llm")
    MEMO_MODEL: str = Field(default="gpt-4o-mini", description="Model for LLM memo generation")
    OPENAI_API_KEY: str | None = Field(
        default=None, description="Server-side OpenAI key, only used when MEMO_GENERATOR=llm"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
