"""API endpoints for stakeholders management."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Path

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_mediator import InviteLink, StakeholderCreate, StakeholderOut, model_rows
from app.db import projects as projects_db
from app.db import stakeholders as stakeholders_db

logger = get_logger(__name__)

router = APIRouter(prefix="/projects/{project_id}/stakeholders")


def invite_url(token: str) -> str:
    return f"{get_settings().APP_BASE_URL.rstrip('/')}/stakeholder/{token}"


def _load_stakeholder(project_id: UUID, stakeholder_id: UUID) -> dict:
    stakeholder = stakeholders_db.get_stakeholder(stakeholder_id)
    if not stakeholder or stakeholder["project_id"] != str(project_id):
        raise HTTPException(status_code=404, detail="Stakeholder not found")
    return stakeholder


@router.get("", response_model=list[StakeholderOut])
async def list_stakeholders(
    project_id: UUID = Path(..., description="Project UUID"),
) -> list[StakeholderOut]:
    """List the stakeholders of a project, oldest first."""
    try:
        stakeholders = stakeholders_db.list_stakeholders(project_id)
    except Exception as e:
        logger.error(f"Error listing stakeholders: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return model_rows(StakeholderOut, stakeholders)


@router.post("", response_model=StakeholderOut)
async def add_stakeholder(
    body: StakeholderCreate,
    project_id: UUID = Path(..., description="Project UUID"),
) -> StakeholderOut:
    """
    Invite a stakeholder; a personal invite token is generated.

    Args:
        project_id: Project UUID
        body: Name, email and role

    Returns:
        Created stakeholder including its token
    """
    if not projects_db.get_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    try:
        stakeholder = stakeholders_db.create_stakeholder(
            project_id=project_id,
            name=body.name,
            email=body.email,
            role=body.role,
        )
    except Exception as e:
        logger.error(f"Error creating stakeholder: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return StakeholderOut(**stakeholder)


@router.delete("/{stakeholder_id}")
async def delete_stakeholder(
    project_id: UUID = Path(..., description="Project UUID"),
    stakeholder_id: UUID = Path(..., description="Stakeholder UUID"),
) -> dict:
    _load_stakeholder(project_id, stakeholder_id)
    stakeholders_db.delete_stakeholder(stakeholder_id)
    return {"success": True}


@router.get("/{stakeholder_id}/invite-link", response_model=InviteLink)
async def get_invite_link(
    project_id: UUID = Path(..., description="Project UUID"),
    stakeholder_id: UUID = Path(..., description="Stakeholder UUID"),
) -> InviteLink:
    """Personal link the admin sends to the stakeholder."""
    stakeholder = _load_stakeholder(project_id, stakeholder_id)
    return InviteLink(token=stakeholder["token"], url=invite_url(stakeholder["token"]))
