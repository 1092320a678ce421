"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router as api_router

app = FastAPI(
    title="AI Prioritizer & Mediator",
    description=(
        "AI maturity assessment with BYOK use case prioritization, and "
        "stakeholder mediation (interviews, decision memo, commitments)"
    ),
    version="0.1.0",
)

# Browser clients call the API directly; the BYOK key travels in X-AI-Api-Key
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
