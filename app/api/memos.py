"""API endpoints for decision memos."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path

from app.chains.generate_decision_memo import build_memo
from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_mediator import (
    CommitmentOut,
    DecisionMemoOut,
    GenerateMemoRequest,
    GenerateMemoResponse,
    InterviewOut,
    MemoView,
    ProjectOut,
    ProjectStatus,
    StakeholderOut,
    model_rows,
)
from app.core.workflow import STAGES
from app.db import commitments as commitments_db
from app.db import decision_memos as memos_db
from app.db import interviews as interviews_db
from app.db import projects as projects_db
from app.db import stakeholders as stakeholders_db

logger = get_logger(__name__)

router = APIRouter()


async def generate_memo_for_project(project_id: UUID) -> GenerateMemoResponse:
    """
    Generate (or regenerate) the memo of a project from its interviews.

    Projects still collecting interviews move to memo_ready; a project that is
    already further along keeps its status when the memo is regenerated.

    Raises:
        HTTPException 404: Unknown project
        HTTPException 400: No interviews yet
    """
    project = projects_db.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    try:
        interviews = interviews_db.list_interviews(project_id, with_stakeholder=True)
    except Exception as e:
        logger.error(f"Failed to fetch interviews: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch interviews") from e

    if not interviews:
        raise HTTPException(status_code=400, detail="No interviews completed yet")

    try:
        memo = await build_memo(project, interviews, get_settings())
        memos_db.upsert_memo(project_id, memo.model_dump())

        current = ProjectStatus(project["status"])
        if STAGES.index(current) < STAGES.index(ProjectStatus.MEMO_READY):
            projects_db.update_project_status(project_id, ProjectStatus.MEMO_READY.value)
    except Exception as e:
        logger.error(f"Generate memo error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "Failed to generate memo") from e

    return GenerateMemoResponse(success=True, memo=memo)


@router.post("/generate-memo", response_model=GenerateMemoResponse)
async def generate_memo(body: GenerateMemoRequest) -> GenerateMemoResponse:
    """Generate the memo for the project named in the body ({"projectId": ...})."""
    if not body.project_id:
        raise HTTPException(status_code=400, detail="Project ID required")

    try:
        project_id = UUID(body.project_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail="Project not found") from e

    return await generate_memo_for_project(project_id)


@router.post("/projects/{project_id}/memo", response_model=GenerateMemoResponse)
async def generate_project_memo(
    project_id: UUID = Path(..., description="Project UUID"),
) -> GenerateMemoResponse:
    return await generate_memo_for_project(project_id)


@router.get("/projects/{project_id}/memo", response_model=MemoView)
async def get_memo_view(
    project_id: UUID = Path(..., description="Project UUID"),
) -> MemoView:
    """
    Memo page data: the memo plus every interview and commitment behind it.

    Returns:
        MemoView; ``memo`` is null until one was generated
    """
    project = projects_db.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    memo = memos_db.get_memo_for_project(project_id)
    stakeholders = stakeholders_db.list_stakeholders(project_id)
    interviews = interviews_db.list_interviews(project_id)
    commitments = commitments_db.list_commitments(project_id)

    summary = {decision: 0 for decision in ("agree", "need_change", "block")}
    for commitment in commitments:
        summary[commitment["decision"]] = summary.get(commitment["decision"], 0) + 1

    return MemoView(
        project=ProjectOut(**project),
        memo=DecisionMemoOut(**memo) if memo else None,
        stakeholders=model_rows(StakeholderOut, stakeholders),
        interviews=model_rows(InterviewOut, interviews),
        commitments=model_rows(CommitmentOut, commitments),
        commitment_summary=summary,
    )
