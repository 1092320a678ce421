"""API endpoints for mediation project management (admin)."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path

from app.core.logging import get_logger
from app.core.schemas_mediator import (
    CommitmentOut,
    InterviewOut,
    ProjectCreate,
    ProjectDetail,
    ProjectListResponse,
    ProjectOut,
    ProjectWithStats,
    StakeholderOut,
    StatusUpdate,
    model_rows,
)
from app.core.workflow import WorkflowFacts, WorkflowTransitionError, validate_transition
from app.db import commitments as commitments_db
from app.db import decision_memos as memos_db
from app.db import interviews as interviews_db
from app.db import projects as projects_db
from app.db import stakeholders as stakeholders_db

logger = get_logger(__name__)

router = APIRouter()

DONE_STATUSES = {"interviewed", "committed"}


@router.get("", response_model=ProjectListResponse)
async def list_projects() -> ProjectListResponse:
    """
    List all projects with stakeholder, interview and commitment counts.

    Returns:
        Projects, newest first
    """
    try:
        projects = projects_db.list_projects_with_stats()
    except Exception as e:
        logger.error(f"Error listing projects: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list projects") from e

    return ProjectListResponse(
        projects=model_rows(ProjectWithStats, projects),
        total=len(projects),
    )


@router.post("", response_model=ProjectOut)
async def create_project(body: ProjectCreate) -> ProjectOut:
    """
    Create a project in draft status.

    Args:
        body: Project data

    Returns:
        Created project
    """
    try:
        project = projects_db.create_project(
            title=body.title,
            description=body.description,
            decision_question=body.decision_question,
            deadline=body.deadline,
            interview_start=body.interview_start,
            interview_end=body.interview_end,
            admin_email=body.admin_email,
        )
    except Exception as e:
        logger.error(f"Error creating project: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create project") from e

    return ProjectOut(**project)


def _load_project(project_id: UUID) -> dict:
    project = projects_db.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project_detail(
    project_id: UUID = Path(..., description="Project UUID"),
) -> ProjectDetail:
    """
    Admin view of a project: stakeholders, interviews and commitments.

    Args:
        project_id: Project UUID

    Returns:
        Project with related rows and progress counters
    """
    project = _load_project(project_id)

    stakeholders = stakeholders_db.list_stakeholders(project_id)
    interviews = interviews_db.list_interviews(project_id)
    commitments = commitments_db.list_commitments(project_id)

    interviewed_count = sum(1 for s in stakeholders if s["status"] in DONE_STATUSES)
    scheduled_count = sum(1 for s in stakeholders if s["status"] == "scheduled")

    return ProjectDetail(
        project=ProjectOut(**project),
        stakeholders=model_rows(StakeholderOut, stakeholders),
        interviews=model_rows(InterviewOut, interviews),
        commitments=model_rows(CommitmentOut, commitments),
        interviewed_count=interviewed_count,
        scheduled_count=scheduled_count,
        all_interviewed=bool(stakeholders) and interviewed_count == len(stakeholders),
    )


@router.patch("/{project_id}/status", response_model=ProjectOut)
async def update_project_status(
    body: StatusUpdate,
    project_id: UUID = Path(..., description="Project UUID"),
) -> ProjectOut:
    """
    Advance the project to the next workflow stage.

    Raises:
        HTTPException 404: Unknown project
        HTTPException 409: Transition not allowed from the current status
    """
    project = _load_project(project_id)

    facts = WorkflowFacts(
        stakeholder_count=projects_db.count_project_rows("stakeholders", project_id),
        interview_count=projects_db.count_project_rows("interviews", project_id),
        memo_exists=memos_db.get_memo_for_project(project_id) is not None,
    )

    try:
        validate_transition(project["status"], body.status, facts)
    except WorkflowTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    updated = projects_db.update_project_status(project_id, body.status.value)
    return ProjectOut(**updated)
