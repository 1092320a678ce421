"""Pydantic schemas for the AI Strategic Prioritizer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================================================
# Enums
# ============================================================================


class MaturityLevel(str, Enum):
    """Maturity band derived from the quiz score."""
    NOVICE = "Novice"
    EXPLORER = "Explorer"
    PRACTITIONER = "Practitioner"
    EXPERT = "Expert"


class UseCaseGroup(str, Enum):
    """Portfolio quadrant an analyzed use case is assigned to."""
    QUICK_WINS = "Quick Wins"
    STRATEGIC_BETS = "Strategic Bets"
    LOW_PRIORITY = "Low Priority"
    TRANSFORMATIONAL = "Transformational"


class AIProvider(str, Enum):
    """Hosted LLM providers supported for BYOK analysis."""
    GOOGLE = "google"
    OPENAI = "openai"


class _CamelModel(BaseModel):
    """Base model serialized with the camelCase keys the browser client uses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Maturity quiz
# ============================================================================


class QuestionOption(BaseModel):
    text: str
    score: int = Field(..., ge=1, le=4)


class Question(BaseModel):
    """A single maturity quiz question."""

    id: int
    category: str
    text: str
    options: list[QuestionOption]


class MaturityProfile(BaseModel):
    """Result of the maturity quiz."""

    score: int = Field(..., ge=0, le=100, description="Normalized score 0-100")
    level: MaturityLevel
    summary: str


class AssessmentRequest(BaseModel):
    """Request body for scoring the maturity quiz."""

    answers: list[int] = Field(..., description="Selected option score per question, in order")


# ============================================================================
# Use cases and analysis
# ============================================================================


class UseCaseInput(_CamelModel):
    """A candidate AI initiative submitted by the user."""

    id: str
    title: str
    department: str
    description: str


class NewUseCaseRequest(BaseModel):
    """Request body for adding a use case from the form."""

    title: str = ""
    department: str = ""
    description: str = ""


class AnalyzedUseCase(UseCaseInput):
    """A use case scored and grouped by the LLM."""

    impact_score: float = Field(..., ge=1, le=10)
    feasibility_score: float = Field(..., ge=1, le=10)
    risk_score: float = Field(..., ge=1, le=10)
    group: UseCaseGroup
    reasoning: str
    implementation_steps: list[str]


class AnalysisResult(_CamelModel):
    """Portfolio analysis returned by the LLM."""

    executive_summary: str
    analyzed_use_cases: list[AnalyzedUseCase]


class AnalyzeRequest(BaseModel):
    """Request body for portfolio analysis."""

    maturity: MaturityProfile
    use_cases: list[UseCaseInput] = Field(..., alias="useCases", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# BYOK credentials
# ============================================================================


class ValidateKeyRequest(BaseModel):
    provider: AIProvider = AIProvider.GOOGLE
    api_key: str = Field("", alias="apiKey")

    model_config = ConfigDict(populate_by_name=True)


class ValidateKeyResponse(BaseModel):
    status: str = Field(..., description="valid or invalid")
    message: str


class ProviderInfo(_CamelModel):
    """Display metadata for a provider in the settings dialog."""

    name: str
    key_label: str
    placeholder: str
    help_url: str
    help_text: str
    description: str


class ImportResult(BaseModel):
    use_cases: list[UseCaseInput] = Field(..., serialization_alias="useCases")
    message: str
