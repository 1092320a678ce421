"""API endpoints for the AI Strategic Prioritizer."""

import logging

from fastapi import APIRouter, File, Header, HTTPException, UploadFile

from app.chains.analyze_portfolio import AIProviderError, analyze_portfolio
from app.chains.validate_api_key import get_provider_info, validate_api_key
from app.core.excel_import import ExcelImportError, import_use_cases
from app.core.logging import get_logger, log_with_context
from app.core.maturity import QUESTIONS, score_assessment
from app.core.schemas_prioritizer import (
    AnalysisResult,
    AnalyzeRequest,
    AssessmentRequest,
    ImportResult,
    MaturityProfile,
    NewUseCaseRequest,
    ProviderInfo,
    Question,
    UseCaseInput,
    ValidateKeyRequest,
    ValidateKeyResponse,
)
from app.core.use_cases import DEMO_USE_CASES, DEPARTMENTS, new_use_case

logger = get_logger(__name__)

router = APIRouter()

ANALYSIS_FAILED_MESSAGE = "Analysis failed. Please check your API Key and try again."


# ============================================================================
# Maturity quiz
# ============================================================================


@router.get("/questions", response_model=list[Question])
async def list_questions() -> list[Question]:
    """Return the five maturity quiz questions."""
    return QUESTIONS


@router.post("/assessment", response_model=MaturityProfile)
async def score_quiz(body: AssessmentRequest) -> MaturityProfile:
    """
    Score a completed quiz.

    Args:
        body: One selected option score per question

    Returns:
        Maturity profile (score, level, summary)
    """
    try:
        return score_assessment(body.answers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


# ============================================================================
# Use cases
# ============================================================================


@router.get("/departments", response_model=list[str])
async def list_departments() -> list[str]:
    return DEPARTMENTS


@router.get("/demo-use-cases", response_model=list[UseCaseInput])
async def list_demo_use_cases() -> list[UseCaseInput]:
    return DEMO_USE_CASES


@router.post("/use-cases", response_model=UseCaseInput)
async def add_use_case(body: NewUseCaseRequest) -> UseCaseInput:
    """Normalize a use case entered in the form (department defaults to General)."""
    try:
        return new_use_case(body.title, body.description, body.department)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/use-cases/import", response_model=ImportResult)
async def import_use_cases_from_excel(file: UploadFile = File(...)) -> ImportResult:
    """
    Import use cases from an .xlsx upload.

    Returns:
        Parsed use cases and a confirmation message
    """
    data = await file.read()

    try:
        use_cases = import_use_cases(data, filename=file.filename)
    except ExcelImportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ImportResult(
        use_cases=use_cases,
        message=f"Successfully imported {len(use_cases)} use case(s) from Excel!",
    )


# ============================================================================
# BYOK provider settings
# ============================================================================


@router.get("/providers/{provider}", response_model=ProviderInfo)
async def provider_info(provider: str) -> ProviderInfo:
    return get_provider_info(provider)


@router.post("/validate-key", response_model=ValidateKeyResponse)
async def validate_key(body: ValidateKeyRequest) -> ValidateKeyResponse:
    """Check a provider key with a minimal request. The key is not stored."""
    return await validate_api_key(body.provider.value, body.api_key)


# ============================================================================
# Portfolio analysis
# ============================================================================


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(
    body: AnalyzeRequest,
    x_ai_api_key: str | None = Header(None, description="Caller's own provider key"),
    x_ai_provider: str = Header("google", description="google or openai"),
) -> AnalysisResult:
    """
    Score and group the submitted use cases.

    The provider key travels in the X-AI-Api-Key header on every request and
    is never persisted by the service.
    """
    log_with_context(
        logger,
        logging.INFO,
        "Portfolio analysis requested",
        provider=x_ai_provider,
        use_case_count=len(body.use_cases),
        maturity_score=body.maturity.score,
    )

    try:
        return await analyze_portfolio(
            body.maturity,
            body.use_cases,
            x_ai_api_key or "",
            x_ai_provider,
        )
    except AIProviderError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Portfolio analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_MESSAGE) from e
