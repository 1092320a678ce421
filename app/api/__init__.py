"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import calendar, memos, prioritizer, projects, stakeholder_portal, stakeholders

router = APIRouter()

# AI Strategic Prioritizer (maturity quiz + BYOK portfolio analysis)
router.include_router(prioritizer.router, prefix="/prioritizer", tags=["prioritizer"])

# AI Mediator admin: projects and their stakeholders
router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(stakeholders.router, tags=["stakeholders"])

# AI Mediator: decision memo generation and view
router.include_router(memos.router, tags=["memos"])

# AI Mediator: stakeholder-facing pages, addressed by invite token
router.include_router(stakeholder_portal.router, tags=["stakeholder_portal"])

# Standalone .ics generation
router.include_router(calendar.router, tags=["calendar"])
