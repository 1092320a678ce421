"""Stakeholder-facing endpoints, addressed by personal invite token.

Flow: open invite → pick an interview slot (+ .ics) → voice call → review and
save the interview summary → commit to the decision memo.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path
from fastapi.responses import Response

from app.api.calendar import ics_response
from app.api.stakeholders import invite_url
from app.core.calendar_ics import CalendarError, generate_ics
from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.scheduling import generate_time_slots, parse_datetime
from app.core.schemas_mediator import (
    CallConfig,
    CommitmentCreate,
    CommitmentOut,
    CommitmentPortal,
    DecisionMemoOut,
    InterviewCreate,
    InterviewOut,
    ProjectOut,
    ScheduleRequest,
    SlotList,
    StakeholderOut,
    StakeholderPortal,
    TranscriptRequest,
    TranscriptSummaryResponse,
)
from app.core.voice_interview import build_context_message, extract_summary, format_transcript
from app.db import commitments as commitments_db
from app.db import decision_memos as memos_db
from app.db import interviews as interviews_db
from app.db import projects as projects_db
from app.db import stakeholders as stakeholders_db

logger = get_logger(__name__)

router = APIRouter(prefix="/stakeholder/{token}")

BOOKABLE_STATUSES = {"invited", "scheduled"}


def _load(token: str) -> tuple[dict, dict]:
    """Resolve the token to (stakeholder, project) or fail with 404."""
    stakeholder = stakeholders_db.get_stakeholder_by_token(token)
    if not stakeholder:
        raise HTTPException(status_code=404, detail="Invalid invite link")

    project = projects_db.get_project(UUID(stakeholder["project_id"]))
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    return stakeholder, project


def _slots(project: dict) -> list:
    if not project.get("interview_start") or not project.get("interview_end"):
        return []
    return generate_time_slots(
        project["interview_start"],
        project["interview_end"],
        get_settings().INTERVIEW_DURATION_MINUTES,
    )


# ============================================================================
# Invite and scheduling
# ============================================================================


@router.get("", response_model=StakeholderPortal)
async def open_invite(token: str = Path(..., description="Invite token")) -> StakeholderPortal:
    stakeholder, project = _load(token)
    return StakeholderPortal(stakeholder=StakeholderOut(**stakeholder), project=ProjectOut(**project))


@router.get("/slots", response_model=SlotList)
async def list_slots(token: str = Path(..., description="Invite token")) -> SlotList:
    """Bookable slots inside the project's interview window."""
    _, project = _load(token)
    return SlotList(
        slots=[slot.isoformat() for slot in _slots(project)],
        duration_minutes=get_settings().INTERVIEW_DURATION_MINUTES,
    )


@router.post("/schedule", response_model=StakeholderOut)
async def book_slot(
    body: ScheduleRequest,
    token: str = Path(..., description="Invite token"),
) -> StakeholderOut:
    """
    Book an interview slot. Rebooking is allowed until the interview took place.

    Raises:
        HTTPException 400: The time is not one of the offered slots
        HTTPException 409: The stakeholder was already interviewed
    """
    stakeholder, project = _load(token)

    if stakeholder["status"] not in BOOKABLE_STATUSES:
        raise HTTPException(status_code=409, detail="Interview already completed")

    try:
        chosen = parse_datetime(body.scheduled_time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid slot time") from e

    if chosen not in _slots(project):
        raise HTTPException(status_code=400, detail="Selected time is not an available slot")

    updated = stakeholders_db.schedule_stakeholder(UUID(stakeholder["id"]), chosen.isoformat())
    return StakeholderOut(**updated)


@router.get("/calendar.ics")
async def download_calendar(token: str = Path(..., description="Invite token")) -> Response:
    """Calendar entry for the booked slot, linking to the call page."""
    stakeholder, project = _load(token)

    if not stakeholder.get("scheduled_time"):
        raise HTTPException(status_code=400, detail="No interview slot booked yet")

    try:
        content = generate_ics(
            title=f"AI Mediator Interview: {project['title']}",
            description=(
                f'Ihr Stakeholder-Interview für das Projekt "{project["title"]}".'
                f"\n\n{project['decision_question']}"
            ),
            start_time=parse_datetime(stakeholder["scheduled_time"]),
            duration_minutes=get_settings().INTERVIEW_DURATION_MINUTES,
            url=f"{invite_url(token)}/call",
            attendee=(stakeholder["name"], stakeholder.get("email")),
        )
    except CalendarError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ics_response(content)


# ============================================================================
# Voice interview
# ============================================================================


@router.get("/call", response_model=CallConfig)
async def call_config(token: str = Path(..., description="Invite token")) -> CallConfig:
    """Widget configuration and the context message sent after connecting."""
    stakeholder, project = _load(token)
    settings = get_settings()

    if not settings.ELEVENLABS_AGENT_ID:
        raise HTTPException(status_code=503, detail="Voice agent is not configured")

    return CallConfig(
        agent_id=settings.ELEVENLABS_AGENT_ID,
        widget_url=settings.ELEVENLABS_WIDGET_URL,
        context_message=build_context_message(
            project["title"],
            project["decision_question"],
            stakeholder["name"],
            stakeholder.get("role") or "",
        ),
    )


@router.post("/call/transcript", response_model=TranscriptSummaryResponse)
async def summarize_transcript(
    body: TranscriptRequest,
    token: str = Path(..., description="Invite token"),
) -> TranscriptSummaryResponse:
    """Turn the finished conversation into a draft summary for review."""
    _load(token)

    if not body.messages:
        raise HTTPException(status_code=400, detail="Transcript is empty")

    return TranscriptSummaryResponse(
        transcript=format_transcript(body.messages),
        summary=extract_summary(body.messages),
    )


@router.post("/interview", response_model=InterviewOut)
async def save_interview(
    body: InterviewCreate,
    token: str = Path(..., description="Invite token"),
) -> InterviewOut:
    """Store the reviewed summary and mark the stakeholder as interviewed."""
    stakeholder, project = _load(token)

    if stakeholder["status"] in {"interviewed", "committed"}:
        raise HTTPException(status_code=409, detail="Interview already saved")

    try:
        interview = interviews_db.create_interview(
            stakeholder_id=UUID(stakeholder["id"]),
            project_id=UUID(project["id"]),
            goals=body.goals,
            no_gos=body.no_gos,
            concerns=body.concerns,
            conditions=body.conditions,
            additional_notes=body.additional_notes,
            call_duration_seconds=body.call_duration_seconds,
            transcript=body.transcript,
        )
    except Exception as e:
        logger.error(f"Error saving interview: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to save interview") from e

    return InterviewOut(**interview)


# ============================================================================
# Commitment
# ============================================================================


@router.get("/commit", response_model=CommitmentPortal)
async def commitment_page(token: str = Path(..., description="Invite token")) -> CommitmentPortal:
    stakeholder, project = _load(token)
    memo = memos_db.get_memo_for_project(UUID(project["id"]))
    commitment = commitments_db.get_commitment_for_stakeholder(UUID(stakeholder["id"]))

    return CommitmentPortal(
        stakeholder=StakeholderOut(**stakeholder),
        project=ProjectOut(**project),
        memo=DecisionMemoOut(**memo) if memo else None,
        commitment=CommitmentOut(**commitment) if commitment else None,
    )


@router.post("/commit", response_model=CommitmentOut)
async def commit(
    body: CommitmentCreate,
    token: str = Path(..., description="Invite token"),
) -> CommitmentOut:
    """
    Agree, block or request a change to the memo. Resubmitting overwrites.

    Raises:
        HTTPException 409: No memo has been generated yet
    """
    stakeholder, project = _load(token)

    if not memos_db.get_memo_for_project(UUID(project["id"])):
        raise HTTPException(status_code=409, detail="Decision memo is not ready yet")

    try:
        commitment = commitments_db.save_commitment(
            stakeholder_id=UUID(stakeholder["id"]),
            project_id=UUID(project["id"]),
            decision=body.decision.value,
            comment=body.comment,
        )
    except Exception as e:
        logger.error(f"Error saving commitment: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to save commitment") from e

    return CommitmentOut(**commitment)
