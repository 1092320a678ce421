"""Pydantic schemas for the AI Mediator (projects, stakeholders, interviews, memos)."""

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


# ============================================================================
# Enums
# ============================================================================


class ProjectStatus(str, Enum):
    """Linear project workflow."""
    DRAFT = "draft"
    COLLECTING = "collecting"
    MEMO_READY = "memo_ready"
    COMMITMENTS = "commitments"
    COMPLETED = "completed"


class StakeholderStatus(str, Enum):
    INVITED = "invited"
    SCHEDULED = "scheduled"
    INTERVIEWED = "interviewed"
    COMMITTED = "committed"


class CommitmentType(str, Enum):
    AGREE = "agree"
    BLOCK = "block"
    NEED_CHANGE = "need_change"


STATUS_LABELS: dict[str, str] = {
    "draft": "Entwurf",
    "collecting": "Interviews laufen",
    "memo_ready": "Memo bereit",
    "commitments": "Commitments sammeln",
    "completed": "Abgeschlossen",
    "invited": "Eingeladen",
    "scheduled": "Termin gewählt",
    "interviewed": "Interview erledigt",
    "committed": "Commitment abgegeben",
    "agree": "Zustimmung",
    "block": "Blockiert",
    "need_change": "Änderung nötig",
}


def get_status_label(status: str) -> str:
    """Display label for any project, stakeholder or commitment status."""
    return STATUS_LABELS.get(status, status)


# ============================================================================
# Projects
# ============================================================================


class ProjectCreate(BaseModel):
    """Request body for creating a mediation project."""

    title: str = Field(..., min_length=1, description="Project title")
    description: str = Field("", description="Background for stakeholders")
    decision_question: str = Field(..., min_length=1, description="The decision to mediate")
    deadline: str = Field(..., description="Decision deadline (ISO date)")
    interview_start: str = Field(..., description="First bookable interview slot (ISO datetime)")
    interview_end: str = Field(..., description="End of the interview window (ISO datetime)")
    admin_email: str = Field(..., min_length=3, description="Admin contact email")


class ProjectOut(BaseModel):
    id: UUID
    title: str
    description: str | None = None
    decision_question: str
    deadline: str | None = None
    interview_start: str | None = None
    interview_end: str | None = None
    status: ProjectStatus
    admin_email: str | None = None
    created_at: str
    updated_at: str | None = None


class ProjectWithStats(ProjectOut):
    stakeholder_count: int = 0
    interviews_count: int = 0
    commitments_count: int = 0


class ProjectListResponse(BaseModel):
    projects: list[ProjectWithStats]
    total: int


class StatusUpdate(BaseModel):
    status: ProjectStatus


# ============================================================================
# Stakeholders
# ============================================================================


class StakeholderCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    role: str = Field("", description="Job title/role")


class StakeholderOut(BaseModel):
    id: UUID
    project_id: UUID
    name: str
    email: str | None = None
    role: str | None = None
    token: str
    status: StakeholderStatus
    scheduled_time: str | None = None
    created_at: str
    updated_at: str | None = None


class InviteLink(BaseModel):
    token: str
    url: str


# ============================================================================
# Interviews
# ============================================================================


class InterviewSummary(BaseModel):
    """The four sections captured from every interview."""

    goals: str = ""
    no_gos: str = ""
    concerns: str = ""
    conditions: str = ""


class InterviewCreate(InterviewSummary):
    additional_notes: str | None = None
    call_duration_seconds: int | None = Field(None, ge=0)
    transcript: str | None = None


class InterviewOut(InterviewSummary):
    id: UUID
    stakeholder_id: UUID
    project_id: UUID
    additional_notes: str | None = None
    call_duration_seconds: int | None = None
    transcript: str | None = None
    created_at: str


class TranscriptMessage(BaseModel):
    role: str
    content: str


class TranscriptRequest(BaseModel):
    messages: list[TranscriptMessage]


class TranscriptSummaryResponse(BaseModel):
    transcript: str
    summary: InterviewSummary


# ============================================================================
# Decision memos and commitments
# ============================================================================


class MemoOption(BaseModel):
    title: str
    description: str
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class MemoContent(BaseModel):
    """Generated memo body, as stored in decision_memos."""

    options: list[MemoOption]
    recommendation: str
    recommendation_rationale: str
    tradeoffs: list[str] = Field(default_factory=list)
    open_questions: list[str] = Field(default_factory=list)


class DecisionMemoOut(MemoContent):
    id: UUID
    project_id: UUID
    generated_at: str | None = None
    updated_at: str | None = None


class GenerateMemoRequest(BaseModel):
    project_id: str | None = Field(None, alias="projectId")

    model_config = {"populate_by_name": True}


class GenerateMemoResponse(BaseModel):
    success: bool
    memo: MemoContent


class CommitmentCreate(BaseModel):
    decision: CommitmentType
    comment: str | None = None


class CommitmentOut(BaseModel):
    id: UUID
    stakeholder_id: UUID
    project_id: UUID
    decision: CommitmentType
    comment: str | None = None
    created_at: str


# ============================================================================
# Composite views
# ============================================================================


class ProjectDetail(BaseModel):
    project: ProjectOut
    stakeholders: list[StakeholderOut]
    interviews: list[InterviewOut]
    commitments: list[CommitmentOut]
    interviewed_count: int
    scheduled_count: int
    all_interviewed: bool


class MemoView(BaseModel):
    project: ProjectOut
    memo: DecisionMemoOut | None
    stakeholders: list[StakeholderOut]
    interviews: list[InterviewOut]
    commitments: list[CommitmentOut]
    commitment_summary: dict[str, int]


class StakeholderPortal(BaseModel):
    stakeholder: StakeholderOut
    project: ProjectOut


class SlotList(BaseModel):
    slots: list[str]
    duration_minutes: int


class ScheduleRequest(BaseModel):
    scheduled_time: str = Field(..., description="Chosen slot start (ISO datetime)")


class CallConfig(BaseModel):
    agent_id: str
    widget_url: str
    context_message: str


class CommitmentPortal(BaseModel):
    stakeholder: StakeholderOut
    project: ProjectOut
    memo: DecisionMemoOut | None
    commitment: CommitmentOut | None


class CalendarRequest(BaseModel):
    """Request body for the standalone calendar endpoint."""

    title: str
    description: str = ""
    start_time: str = Field(..., alias="startTime")
    duration_minutes: int | None = Field(None, alias="durationMinutes")
    url: str | None = None
    attendee_name: str | None = Field(None, alias="attendeeName")
    attendee_email: str | None = Field(None, alias="attendeeEmail")

    model_config = {"populate_by_name": True}


def model_rows(model: type[BaseModel], rows: list[dict[str, Any]]) -> list[Any]:
    return [model.model_validate(r) for r in rows]
